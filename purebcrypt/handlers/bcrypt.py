"""purebcrypt.handlers.bcrypt - OpenBSD's BCrypt hash format

This module parses & renders bcrypt hash strings, of the form::

    $<ident>$<rounds>$<22 char salt><31 char checksum>

e.g. ``$2a$06$DCq7YPn5Rq63x1Lad4cll.TV4S6ytwfsfvkgY8jIucDrjc8deX1s.``;
and composes the digest engine into the ``hash()`` / ``verify()``
/ ``genconfig()`` frontend.
"""
#=========================================================
#imports
#=========================================================
#core
import logging; log = logging.getLogger(__name__)
#pkg
from purebcrypt.exc import InvalidSaltError, InvalidRoundsError, \
                           InvalidVersionError, InvalidHashFormatError, \
                           PasswordSizeError
from purebcrypt.utils import consteq, getrandbytes, to_bytes
from purebcrypt.utils.bcrypt64 import BCRYPT_CHARS, encode_bytes, decode_bytes
from purebcrypt.utils._raw_bcrypt import raw_bcrypt, MIN_ROUNDS, MAX_ROUNDS, \
                                         SALT_SIZE, DIGEST_SIZE
#local
__all__ = [
    "BCrypt",
]

_DIGITS = "0123456789"

#=========================================================
#handler
#=========================================================
class BCrypt(object):
    """implementation of OpenBSD's BCrypt algorithm.

    instances represent a parsed hash (or config) string; the classmethods
    :meth:`genconfig`, :meth:`hash` and :meth:`verify` are the frontend.

    .. automethod:: from_string
    .. automethod:: to_string
    .. automethod:: genconfig
    .. automethod:: hash
    .. automethod:: verify
    """
    #=========================================================
    #class attrs
    #=========================================================
    name = "bcrypt"

    #: known version identifiers
    ident_values = ("2a", "2b", "2y")
    default_ident = "2a"

    default_rounds = 10
    min_rounds = MIN_ROUNDS # minimum allowed by OpenBSD bcrypt
    max_rounds = MAX_ROUNDS # 32-bit integer limit (real_rounds=1<<rounds)
    rounds_cost = "log2"

    salt_size = SALT_SIZE
    salt_chars = 22
    checksum_size = DIGEST_SIZE
    checksum_chars = 31

    #: bcrypt ignores everything past this many bytes of the password
    truncate_size = 72

    #: shortest string from_string() will look at
    min_config_chars = 28
    config_chars = 29
    hash_chars = 60

    #=========================================================
    #instance attrs
    #=========================================================
    ident = None
    rounds = None
    salt = None # raw salt bytes
    checksum = None # encoded checksum string, None for config strings

    #=========================================================
    #init
    #=========================================================
    def __init__(self, ident=None, rounds=None, salt=None, checksum=None):
        self.ident = self.norm_ident(ident)
        self.rounds = self.norm_rounds(rounds)
        self.salt = self.norm_salt(salt)
        self.checksum = checksum

    @classmethod
    def norm_ident(cls, ident):
        if ident is None:
            return cls.default_ident
        if ident not in cls.ident_values:
            raise InvalidVersionError(ident)
        return ident

    @classmethod
    def norm_rounds(cls, rounds):
        if rounds is None:
            return cls.default_rounds
        if isinstance(rounds, bool) or not isinstance(rounds, int):
            raise TypeError("rounds must be an integer, not %s" %
                            (type(rounds).__name__,))
        if rounds < cls.min_rounds or rounds > cls.max_rounds:
            raise InvalidRoundsError(rounds)
        return rounds

    @classmethod
    def norm_salt(cls, salt):
        if salt is None:
            return getrandbytes(cls.salt_size)
        if not isinstance(salt, (bytes, bytearray)):
            raise TypeError("salt must be bytes, not %s" % (type(salt).__name__,))
        if len(salt) != cls.salt_size:
            raise InvalidSaltError("salt must be %d bytes, got %d" %
                                   (cls.salt_size, len(salt)))
        return bytes(salt)

    #=========================================================
    #formatting
    #=========================================================
    @classmethod
    def identify(cls, hash):
        "check if string looks like it's meant to be a bcrypt hash"
        if isinstance(hash, (bytes, bytearray)):
            hash = bytes(hash).decode("latin-1")
        if not isinstance(hash, str):
            return False
        return any(hash.startswith("$%s$" % ident) for ident in cls.ident_values)

    @classmethod
    def from_string(cls, hash):
        """parse bcrypt hash or config string.

        :raises InvalidSaltError:
            if string is empty, too short, missing a ``$`` separator,
            or the salt field doesn't decode to 16 bytes.
        :raises InvalidVersionError: if the ident isn't one of :attr:`ident_values`.
        :raises InvalidRoundsError: if the rounds field isn't in ``4..31``.

        :returns:
            :class:`BCrypt` instance; :attr:`checksum` is set to
            whatever trails the salt field, or ``None`` if nothing does.
        """
        if isinstance(hash, (bytes, bytearray)):
            try:
                hash = bytes(hash).decode("ascii")
            except UnicodeDecodeError:
                raise InvalidSaltError("non-ascii characters")
        elif not isinstance(hash, str):
            raise TypeError("hash must be unicode or bytes, not %s" %
                            (type(hash).__name__,))
        if not hash:
            raise InvalidSaltError("salt is empty")
        if len(hash) < cls.min_config_chars:
            raise InvalidSaltError("salt too short: %d characters" % len(hash))
        if not hash.startswith("$"):
            raise InvalidSaltError("missing '$' prefix")

        parts = hash[1:].split("$", 2)
        if len(parts) < 2:
            raise InvalidSaltError("invalid format")

        ident = parts[0]
        if ident not in cls.ident_values:
            raise InvalidVersionError(ident)

        rstr = parts[1][:2]
        if not rstr or any(c not in _DIGITS for c in rstr):
            raise InvalidRoundsError(-1)
        rounds = int(rstr)
        if rounds < cls.min_rounds or rounds > cls.max_rounds:
            raise InvalidRoundsError(rounds)
        if len(rstr) != 2:
            raise InvalidSaltError("rounds not zero-padded")

        # salt field starts right after "$<ident>$<rounds>$"
        start = len(ident) + 5
        if hash[start-1] != "$":
            raise InvalidSaltError("missing '$' after rounds")
        end = start + cls.salt_chars
        salt_str = hash[start:end]
        if len(salt_str) < cls.salt_chars:
            raise InvalidSaltError("salt field too short: %d characters" %
                                   len(salt_str))
        salt = decode_bytes(salt_str, cls.salt_size)
        if len(salt) != cls.salt_size:
            raise InvalidSaltError("salt field contains invalid characters")

        return cls(
            ident=ident,
            rounds=rounds,
            salt=salt,
            checksum=hash[end:] or None,
        )

    def to_string(self, withchk=True):
        "render hash string (or config string if ``withchk=False``)"
        config = "$%s$%02d$%s" % (self.ident, self.rounds,
                                  encode_bytes(self.salt, self.salt_size))
        if withchk and self.checksum:
            return config + self.checksum
        return config

    def __repr__(self):
        return "<%s ident=%r rounds=%r>" % (type(self).__name__,
                                            self.ident, self.rounds)

    #=========================================================
    #password normalization
    #=========================================================
    @classmethod
    def normalize_secret(cls, secret, truncate_size=None, truncate_error=False):
        """convert password to the key bytes fed into the key schedule.

        unicode passwords are encoded as utf-8; a null terminator
        is appended, and the result is truncated to *truncate_size* bytes
        (72 by default, the most bcrypt will ever use).

        :param truncate_error:
            if ``True``, raise :exc:`PasswordSizeError` instead of
            truncating passwords longer than *truncate_size*.
        """
        secret = to_bytes(secret, errname="password")
        if truncate_size is None:
            truncate_size = cls.truncate_size
        elif truncate_size < 1 or truncate_size > cls.truncate_size:
            raise ValueError("truncate_size must be between 1 and %d" %
                             (cls.truncate_size,))
        if truncate_error and len(secret) > truncate_size:
            raise PasswordSizeError(truncate_size)
        # NOTE: every reference implementation appends the NUL for 2a, 2b, and 2y
        #       alike; the 2a/2b split only matters for passwords > 255 bytes,
        #       which truncation makes moot.
        return (secret + b"\x00")[:truncate_size]

    #=========================================================
    #primary interface
    #=========================================================
    def _calc_checksum(self, secret, **kwds):
        key = self.normalize_secret(secret, **kwds)
        log.debug("calculating bcrypt digest: ident=%s rounds=%d",
                  self.ident, self.rounds)
        return encode_bytes(raw_bcrypt(key, self.salt, self.rounds),
                            self.checksum_size)

    @classmethod
    def genconfig(cls, rounds=None, ident=None):
        """generate a new config string, using a fresh random salt.

        :param rounds: cost parameter (``4..31``), defaults to :attr:`default_rounds`.
        :param ident: version identifier, defaults to :attr:`default_ident`.

        :raises RandomGenerationError: if the os random source fails.

        :returns: 29 char config string, e.g. ``$2a$10$<22 char salt>``.
        """
        return cls(ident=ident, rounds=rounds).to_string(withchk=False)

    @classmethod
    def hash(cls, secret, config, **kwds):
        """hash password using the ident, rounds, and salt from *config*.

        *config* may be a config string or a full hash; anything following
        the salt field is ignored.

        :param truncate_size: see :meth:`normalize_secret`
        :param truncate_error: see :meth:`normalize_secret`

        :returns: 60 char hash string.
        """
        self = cls.from_string(config)
        self.checksum = self._calc_checksum(secret, **kwds)
        return self.to_string()

    @classmethod
    def verify(cls, secret, hash, **kwds):
        """verify password against existing hash.

        :raises InvalidHashFormatError:
            if *hash* parses, but isn't a complete bcrypt hash.

        :returns: ``True`` if the password matches, ``False`` otherwise.
        """
        self = cls.from_string(hash)
        chk = self.checksum
        if chk is None:
            raise InvalidHashFormatError("expected hash, got config string")
        if len(chk) != cls.checksum_chars:
            raise InvalidHashFormatError("checksum must be %d characters, got %d"
                                         % (cls.checksum_chars, len(chk)))
        if any(c not in BCRYPT_CHARS for c in chk):
            raise InvalidHashFormatError("checksum contains invalid characters")
        if isinstance(hash, (bytes, bytearray)):
            hash = bytes(hash).decode("ascii")
        # rebuild from the stored prefix, so unused bits in the last
        # salt char don't affect the comparison
        config = hash[:-cls.checksum_chars]
        return consteq(config + self._calc_checksum(secret, **kwds), hash)

    #=========================================================
    #eoc
    #=========================================================

#=========================================================
#eof
#=========================================================
