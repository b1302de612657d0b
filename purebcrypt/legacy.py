"""purebcrypt.legacy - deprecated null-on-error interface

these functions mirror the older py-bcrypt style calls, but swallow
every :exc:`~purebcrypt.exc.BcryptError` and return ``None`` instead.
new code should use :func:`purebcrypt.hash_password` et al, which
report *why* something failed.
"""
#=========================================================
#imports
#=========================================================
#core
import logging; log = logging.getLogger(__name__)
#pkg
from purebcrypt import generate_salt, hash_password, verify_password
from purebcrypt.exc import BcryptError
from purebcrypt.handlers.bcrypt import BCrypt
from purebcrypt.utils import deprecated_function
#local
__all__ = [
    "gensalt",
    "hashpw",
    "checkpw",
]

#=========================================================
#legacy functions
#=========================================================
@deprecated_function(deprecated="1.0", removed="2.0")
def gensalt(rounds=BCrypt.default_rounds):
    """generate salt string, clamping *rounds* to ``4..31``.

    returns ``None`` if the os random source fails.
    """
    rounds = min(max(int(rounds), BCrypt.min_rounds), BCrypt.max_rounds)
    try:
        return generate_salt(rounds)
    except BcryptError as err:
        log.debug("gensalt() failed: %s", err)
        return None

@deprecated_function(deprecated="1.0", removed="2.0")
def hashpw(password, salt):
    """hash password using salt string, returns ``None`` on any error."""
    try:
        return hash_password(password, salt)
    except BcryptError as err:
        log.debug("hashpw() failed: %s", err)
        return None

@deprecated_function(deprecated="1.0", removed="2.0")
def checkpw(password, hash):
    """check password against hash, returns ``None`` on any error."""
    try:
        return verify_password(password, hash)
    except BcryptError as err:
        log.debug("checkpw() failed: %s", err)
        return None

#=========================================================
#eof
#=========================================================
