"""purebcrypt - pure-python implementation of the bcrypt password hash"""

__version__ = "1.0"

#=========================================================
#imports
#=========================================================
#pkg
from purebcrypt.config import BcryptConfig, DEFAULT_CONFIG
from purebcrypt.exc import BcryptError, InvalidSaltError, InvalidRoundsError, \
                           InvalidVersionError, PasswordSizeError, \
                           RandomGenerationError, HashingError, \
                           MemoryAllocationError, InvalidHashFormatError
from purebcrypt.handlers.bcrypt import BCrypt
#local
__all__ = [
    "generate_salt",
    "hash_password",
    "verify_password",
    "BcryptConfig",
    "BCrypt",
    # errors
    "BcryptError",
    "InvalidSaltError",
    "InvalidRoundsError",
    "InvalidVersionError",
    "PasswordSizeError",
    "RandomGenerationError",
    "HashingError",
    "MemoryAllocationError",
    "InvalidHashFormatError",
]

#=========================================================
#quickstart interface
#=========================================================
def generate_salt(rounds=None, version=None, config=None):
    """generate a new bcrypt salt string.

    :param rounds:
        cost parameter (``4..31``). out of range values raise
        :exc:`InvalidRoundsError`. defaults to ``config.rounds``.

    :param version:
        one of ``"2a"``, ``"2b"``, ``"2y"``; defaults to ``config.version``.

    :param config:
        optional :class:`BcryptConfig`, defaults to ``DEFAULT_CONFIG``.

    :raises RandomGenerationError: if the os random source fails.

    :returns: 29 char salt string, e.g. ``$2a$10$N9qo8uLOickgx2ZMRZoMye``.
    """
    if config is None:
        config = DEFAULT_CONFIG
    if rounds is None:
        rounds = config.rounds
    if version is None:
        version = config.version
    return BCrypt.genconfig(rounds=rounds, ident=version)

def hash_password(password, salt, config=None):
    """hash password using the version, rounds, and salt encoded in *salt*.

    :arg password: password, as bytes or unicode (encoded as utf-8).
    :arg salt: salt string (from :func:`generate_salt`), or an existing hash.
    :param config:
        optional :class:`BcryptConfig`; only its password size policy is used.

    :raises InvalidSaltError: if the salt string is malformed.
    :raises InvalidVersionError: if the version identifier is unknown.
    :raises InvalidRoundsError: if the rounds field is out of range.
    :raises PasswordSizeError: if the config asks for long passwords to be rejected.

    :returns: 60 char hash string.
    """
    if config is None:
        config = DEFAULT_CONFIG
    return BCrypt.hash(password, salt, **config.hash_kwds())

def verify_password(password, hash, config=None):
    """verify password against an existing bcrypt hash.

    raises the same errors as :func:`hash_password`; as well as
    :exc:`InvalidHashFormatError` if *hash* is not a complete hash.

    :returns: ``True`` if the password matches, ``False`` otherwise.
    """
    if config is None:
        config = DEFAULT_CONFIG
    return BCrypt.verify(password, hash, **config.hash_kwds())

#=========================================================
#eof
#=========================================================
