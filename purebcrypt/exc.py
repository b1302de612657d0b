"""purebcrypt.exc -- exceptions & warnings raised by purebcrypt"""
#==========================================================================
# exceptions
#==========================================================================
class BcryptError(Exception):
    """base class for all errors raised by purebcrypt.

    every concrete error below also derives from the builtin exception
    closest to its meaning (mostly :exc:`ValueError`), so code which only
    catches those keeps working.
    """

class InvalidSaltError(BcryptError, ValueError):
    """Error raised when a salt / config string can't be parsed,
    or when the salt it contains doesn't decode to exactly 16 bytes.

    .. attribute:: reason

        short description of what was wrong with the salt.
    """
    def __init__(self, reason=None):
        self.reason = reason
        text = "invalid bcrypt salt"
        if reason:
            text = "%s (%s)" % (text, reason)
        ValueError.__init__(self, text)

class InvalidRoundsError(BcryptError, ValueError):
    """Error raised when the cost parameter is outside of ``4..31``.

    .. attribute:: rounds

        the offending value, or ``-1`` if the rounds field couldn't
        be parsed as an integer.
    """
    def __init__(self, rounds):
        self.rounds = rounds
        ValueError.__init__(self, "invalid number of rounds: %r "
                                  "(must be between 4 and 31)" % (rounds,))

class InvalidVersionError(BcryptError, ValueError):
    """Error raised when a hash uses an unknown bcrypt version identifier.

    .. attribute:: ident

        the unrecognized identifier (e.g. ``"2x"``).
    """
    def __init__(self, ident):
        self.ident = ident
        ValueError.__init__(self, "invalid bcrypt version: %r" % (ident,))

class PasswordSizeError(BcryptError, ValueError):
    """Error raised if the password exceeds the configured maximum size,
    and the caller asked for an error instead of silent truncation
    (see :attr:`purebcrypt.config.BcryptConfig.truncate_error`).

    By default bcrypt just ignores everything past the first 72 bytes
    of the password, so this error is never raised unless requested.
    """
    def __init__(self, max_size=72):
        self.max_size = max_size
        ValueError.__init__(self, "password exceeds maximum allowed size "
                                  "of %d bytes" % (max_size,))

class InvalidHashFormatError(BcryptError, ValueError):
    """Error raised by verify when handed a string that parses as
    a bcrypt config string, but isn't a complete 60 character hash.
    """
    def __init__(self, reason=None):
        text = "invalid bcrypt hash format"
        if reason:
            text = "%s (%s)" % (text, reason)
        ValueError.__init__(self, text)

class RandomGenerationError(BcryptError, RuntimeError):
    """Error raised if the os-provided random source fails.

    :exc:`!RandomGenerationError` derives from :exc:`RuntimeError`,
    since this usually indicates a platform problem rather than bad input.
    """
    def __init__(self, reason=None):
        text = "failed to generate secure random data"
        if reason:
            text = "%s: %s" % (text, reason)
        RuntimeError.__init__(self, text)

class HashingError(BcryptError, RuntimeError):
    """Error raised if the digest engine hits an internal failure
    not covered by any of the other errors.
    """
    def __init__(self, reason=None):
        text = "password hashing operation failed"
        if reason:
            text = "%s: %s" % (text, reason)
        RuntimeError.__init__(self, text)

class MemoryAllocationError(BcryptError, MemoryError):
    "Error raised if the key schedule state couldn't be allocated"
    def __init__(self):
        MemoryError.__init__(self, "failed to allocate bcrypt key schedule")

#==========================================================================
# warnings
#==========================================================================
class PurebcryptWarning(UserWarning):
    """base class for purebcrypt's user warnings"""

class PurebcryptConfigWarning(PurebcryptWarning):
    """Warning issued when a :class:`~purebcrypt.config.BcryptConfig`
    had to clamp one of its values to the range bcrypt supports.

    The resulting configuration is still valid & secure; but the warning
    is issued as a sign the configuration may need updating.
    """

#==========================================================================
# eof
#==========================================================================
