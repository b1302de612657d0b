"""purebcrypt setup script"""
#=========================================================
#init script env - ensure cwd = root of source dir
#=========================================================
import os
root_dir = os.path.abspath(os.path.join(__file__,".."))
os.chdir(root_dir)

#=========================================================
#imports
#=========================================================
import re

from setuptools import setup

#=========================================================
#version string
#=========================================================
with open(os.path.join(root_dir, "purebcrypt", "__init__.py")) as vh:
    VERSION = re.search(r'^__version__\s*=\s*"(.*?)"\s*$', vh.read(), re.M).group(1)

#=========================================================
#static text
#=========================================================
SUMMARY = "pure-python implementation of the OpenBSD bcrypt password hash"

DESCRIPTION = """\
purebcrypt is a dependency-free implementation of the bcrypt password
hashing algorithm (eksblowfish), producing & verifying the standard
``$2a$`` / ``$2b$`` / ``$2y$`` hash strings used by OpenBSD, PHP,
and most other bcrypt libraries.

It also provides an INI-loadable configuration object, asyncio wrappers,
and a small command line helper (``python -m purebcrypt``).
"""

KEYWORDS = "password secret hash security crypt bcrypt blowfish eksblowfish"

#=========================================================
#config setup
#=========================================================
config = dict(
    #package info
    packages = [
        "purebcrypt",
            "purebcrypt.handlers",
            "purebcrypt.tests",
            "purebcrypt.utils",
        ],
    zip_safe=True,
    python_requires=">=3.9",

    #metadata
    name = "purebcrypt",
    version = VERSION,
    license = "BSD",

    description = SUMMARY,
    long_description = DESCRIPTION,
    keywords = KEYWORDS,
    classifiers = [
        "Development Status :: 5 - Production/Stable",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: BSD License",
        "Natural Language :: English",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Topic :: Security :: Cryptography",
        "Topic :: Software Development :: Libraries",
    ],

    install_requires = [],
    extras_require = {
        # bcrypt is only used to cross-check hashes in the test suite
        "test": ["pytest", "bcrypt"],
    },
    entry_points = {
        "console_scripts": ["purebcrypt = purebcrypt.__main__:_entry"],
    },
)

#=========================================================
#build
#=========================================================
setup(**config)

#=========================================================
#EOF
#=========================================================
