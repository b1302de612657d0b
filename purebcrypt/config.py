"""purebcrypt.config - bcrypt configuration value object"""
#=========================================================
#imports
#=========================================================
#core
from configparser import ConfigParser
from io import StringIO
import logging; log = logging.getLogger(__name__)
from warnings import warn
#pkg
from purebcrypt.exc import PurebcryptConfigWarning
from purebcrypt.handlers.bcrypt import BCrypt
#local
__all__ = [
    "BcryptConfig",
    "DEFAULT_CONFIG",
    "HIGH_SECURITY_CONFIG",
    "TESTING_CONFIG",
]

_TRUE_VALUES = ("true", "yes", "on", "1")
_FALSE_VALUES = ("false", "no", "off", "0", "")

def _parse_bool(value, name):
    if isinstance(value, bool):
        return value
    value = value.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError("%s must be a boolean, not %r" % (name, value))

#=========================================================
#config object
#=========================================================
class BcryptConfig(object):
    """settings used when generating salts & hashing passwords.

    :param rounds:
        cost parameter for new salts. values outside of ``4..31``
        are clamped, issuing a :exc:`~purebcrypt.exc.PurebcryptConfigWarning`.

    :param version:
        version identifier for new salts, one of ``"2a"``, ``"2b"``, ``"2y"``.
        unknown values raise :exc:`~purebcrypt.exc.InvalidVersionError`.

    :param max_password_length:
        number of password bytes fed to bcrypt (clamped to ``1..72``).

    :param truncate_error:
        if ``True``, passwords longer than *max_password_length* raise
        :exc:`~purebcrypt.exc.PasswordSizeError` instead of being truncated.

    instances are immutable; use :meth:`replace` to derive a modified copy.
    """
    #=========================================================
    #instance attrs
    #=========================================================
    __slots__ = ("_rounds", "_version", "_max_password_length", "_truncate_error")

    #=========================================================
    #init
    #=========================================================
    def __init__(self, rounds=BCrypt.default_rounds, version=BCrypt.default_ident,
                 max_password_length=BCrypt.truncate_size, truncate_error=False):
        rounds = int(rounds)
        if rounds < BCrypt.min_rounds or rounds > BCrypt.max_rounds:
            clamped = min(max(rounds, BCrypt.min_rounds), BCrypt.max_rounds)
            warn("rounds=%d is outside of bcrypt's range, using %d" %
                 (rounds, clamped), PurebcryptConfigWarning)
            rounds = clamped
        max_password_length = int(max_password_length)
        if max_password_length < 1 or max_password_length > BCrypt.truncate_size:
            clamped = min(max(max_password_length, 1), BCrypt.truncate_size)
            warn("max_password_length=%d is outside of bcrypt's range, using %d" %
                 (max_password_length, clamped), PurebcryptConfigWarning)
            max_password_length = clamped
        self._rounds = rounds
        self._version = BCrypt.norm_ident(version)
        self._max_password_length = max_password_length
        self._truncate_error = _parse_bool(truncate_error, "truncate_error")

    rounds = property(lambda self: self._rounds)
    version = property(lambda self: self._version)
    max_password_length = property(lambda self: self._max_password_length)
    truncate_error = property(lambda self: self._truncate_error)

    def to_dict(self):
        return dict(
            rounds=self._rounds,
            version=self._version,
            max_password_length=self._max_password_length,
            truncate_error=self._truncate_error,
        )

    def replace(self, **kwds):
        "return copy of config, with the specified settings changed"
        settings = self.to_dict()
        settings.update(kwds)
        return type(self)(**settings)

    def hash_kwds(self):
        "keywords to pass to :meth:`BCrypt.hash` / :meth:`BCrypt.verify`"
        return dict(truncate_size=self._max_password_length,
                    truncate_error=self._truncate_error)

    def __eq__(self, other):
        if not isinstance(other, BcryptConfig):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __ne__(self, other):
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    def __hash__(self):
        return hash(tuple(sorted(self.to_dict().items())))

    def __repr__(self):
        return "BcryptConfig(rounds=%r, version=%r, max_password_length=%r, " \
               "truncate_error=%r)" % (self._rounds, self._version,
                                       self._max_password_length,
                                       self._truncate_error)

    #=========================================================
    #ini loading / saving
    #=========================================================
    @staticmethod
    def _parse_ini_stream(stream, section, filename):
        "helper read INI from stream, extract section as dict"
        p = ConfigParser()
        p.read_file(stream, filename)
        return dict(p.items(section))

    @classmethod
    def _from_dict(cls, source):
        kwds = {}
        for key, value in source.items():
            if key not in ("rounds", "version", "max_password_length",
                           "truncate_error"):
                raise KeyError("unknown bcrypt config key: %r" % (key,))
            kwds[key] = value.strip() if isinstance(value, str) else value
        log.debug("loaded bcrypt config: %r", kwds)
        return cls(**kwds)

    @classmethod
    def from_string(cls, source, section="purebcrypt", encoding="utf-8"):
        """create new BcryptConfig instance from an INI-formatted string.

        :arg source:
            bytes/unicode string containing INI-formatted content.

        :param section:
            name of section to read from, defaults to ``"purebcrypt"``.

        :arg encoding:
            encoding used when source is bytes, defaults to ``"utf-8"``.

        usage example::

            >>> from purebcrypt.config import BcryptConfig
            >>> config = BcryptConfig.from_string('''
            ... [purebcrypt]
            ... rounds = 12
            ... version = 2b
            ... ''')
        """
        if isinstance(source, bytes):
            source = source.decode(encoding)
        elif not isinstance(source, str):
            raise TypeError("source must be unicode or bytes, not %s" %
                            (type(source).__name__,))
        return cls._from_dict(cls._parse_ini_stream(StringIO(source), section,
                                                    "<???>"))

    @classmethod
    def from_path(cls, path, section="purebcrypt", encoding="utf-8"):
        """create new BcryptConfig instance from an INI-formatted file.

        this functions exactly the same as :meth:`from_string`,
        except that it loads from a local file.
        """
        with open(path, "r", encoding=encoding) as fh:
            return cls._from_dict(cls._parse_ini_stream(fh, section, path))

    def to_string(self, section="purebcrypt"):
        "serialize to INI format string"
        p = ConfigParser()
        p.add_section(section)
        for key, value in self.to_dict().items():
            if isinstance(value, bool):
                value = "true" if value else "false"
            p.set(section, key, str(value))
        buf = StringIO()
        p.write(buf)
        return buf.getvalue()

    #=========================================================
    #eoc
    #=========================================================

#=========================================================
#presets
#=========================================================
DEFAULT_CONFIG = BcryptConfig(rounds=10)
HIGH_SECURITY_CONFIG = BcryptConfig(rounds=12)

#: minimum cost, only suitable for unittests
TESTING_CONFIG = BcryptConfig(rounds=4)

#=========================================================
#eof
#=========================================================
