"""purebcrypt.utils._raw_bcrypt - bcrypt digest engine

This drives the eksblowfish key schedule from :mod:`purebcrypt.utils._blowfish`,
and uses the resulting state to encrypt bcrypt's magic text, yielding
the raw 23 byte digest. Encoding the digest & parsing hash strings
is handled by :class:`purebcrypt.handlers.bcrypt.BCrypt`.
"""
#=========================================================
#imports
#=========================================================
#core
import struct
import logging; log = logging.getLogger(__name__)
#pkg
from purebcrypt.exc import InvalidRoundsError, InvalidSaltError, \
                           HashingError, MemoryAllocationError
from purebcrypt.utils._blowfish import KeySchedule
#local
__all__ = [
    "raw_bcrypt",
]

#=========================================================
#constants
#=========================================================
MIN_ROUNDS = 4
MAX_ROUNDS = 31
SALT_SIZE = 16
DIGEST_SIZE = 23

#: the plaintext bcrypt encrypts 64 times
BCRYPT_MAGIC = b"OrpheanBeholderScryDoubt"

_words_struct = struct.Struct(">6I")
BCRYPT_MAGIC_WORDS = _words_struct.unpack(BCRYPT_MAGIC)

#=========================================================
#engine
#=========================================================
def raw_bcrypt(password, salt, rounds):
    """perform the bcrypt algorithm on raw inputs, returning the raw digest.

    :arg password:
        password bytes, already normalized by the caller
        (null terminator appended, truncated to 72 bytes).

    :arg salt:
        16 bytes of raw salt.

    :arg rounds:
        log2 of the number of key schedule iterations, must be in ``4..31``.

    :raises InvalidRoundsError: if rounds is out of range.
    :raises InvalidSaltError: if salt is not 16 bytes.
    :raises MemoryAllocationError: if the key schedule couldn't be allocated.
    :raises HashingError: if the digest couldn't be serialized.

    :returns:
        23 byte digest (the 24th byte of the ciphertext is discarded,
        as every other bcrypt implementation does).
    """
    # validate everything before doing any work
    if not isinstance(rounds, int) or rounds < MIN_ROUNDS or rounds > MAX_ROUNDS:
        raise InvalidRoundsError(rounds)
    if len(salt) != SALT_SIZE:
        raise InvalidSaltError("salt must be %d bytes, got %d" %
                               (SALT_SIZE, len(salt)))

    try:
        state = KeySchedule()
    except MemoryError:
        raise MemoryAllocationError()

    try:
        with state:
            state.eks_salted_expand(password, salt)
            state.eks_repeated_expand(password, salt, rounds)
            data = state.encrypt_words(list(BCRYPT_MAGIC_WORDS), 64)
    except MemoryError:
        raise MemoryAllocationError()

    try:
        raw = _words_struct.pack(*data)
    except struct.error as err:
        raise HashingError(str(err))
    return raw[:DIGEST_SIZE]

#=========================================================
#eof
#=========================================================
