"""purebcrypt utility functions"""
#=================================================================================
#imports
#=================================================================================
#core
from functools import update_wrapper
import logging; log = logging.getLogger(__name__)
import os
import random
from warnings import warn
#pkg
from purebcrypt.exc import RandomGenerationError
#local
__all__ = [
    #decorators
    'deprecated_function',

    #bytes<->unicode
    'to_bytes',

    #string manipulation
    'consteq',

    #random
    'rng',
    'getrandbytes',
    'getrandint',
    'getrandseq',
]

#=================================================================================
#decorators
#=================================================================================
def deprecated_function(msg=None, deprecated=None, removed=None, updoc=True):
    """decorator to deprecate a function.

    :arg msg: optional msg, default chosen if omitted
    :kwd deprecated: release where function was first deprecated
    :kwd removed: release where function will be removed
    :kwd updoc: add notice to docstring (default ``True``)
    """
    if msg is None:
        msg = "the function %(mod)s.%(name)s() is deprecated"
        if deprecated:
            msg += " as of purebcrypt %(deprecated)s"
        if removed:
            msg += ", and will be removed in purebcrypt %(removed)s"
        msg += "."
    def build(func):
        final = msg % dict(
            mod=func.__module__,
            name=func.__name__,
            deprecated=deprecated,
            removed=removed,
        )
        def wrapper(*args, **kwds):
            warn(final, DeprecationWarning, stacklevel=2)
            return func(*args, **kwds)
        update_wrapper(wrapper, func)
        if updoc and (deprecated or removed) and wrapper.__doc__:
            txt = "as of purebcrypt %s" % (deprecated,) if deprecated else ""
            if removed:
                if txt:
                    txt += ", and "
                txt += "will be removed in purebcrypt %s" % (removed,)
            wrapper.__doc__ += "\n.. deprecated:: %s\n" % (txt,)
        return wrapper
    return build

#==========================================================
#bytes <-> unicode conversion helpers
#==========================================================
def to_bytes(source, encoding="utf-8", errname="value"):
    """helper to encoding unicode -> bytes

    bytes (and bytearrays) are returned as bytes, unicode strings are
    encoded using the specified ``encoding``.
    all other types result in a :exc:`TypeError`.

    :arg source: source bytes/unicode to process
    :arg encoding: target character encoding
    :param errname: optional name of variable/noun to reference when raising errors

    :returns: bytes object
    """
    if isinstance(source, bytes):
        return source
    elif isinstance(source, bytearray):
        return bytes(source)
    elif isinstance(source, str):
        return source.encode(encoding)
    else:
        raise TypeError("%s must be unicode or bytes, not %s" %
                        (errname, type(source).__name__))

#=================================================================================
#string helpers
#=================================================================================
def consteq(left, right):
    """check two strings/bytes for equality, taking constant time relative
    to the size of the righthand input.

    The purpose of this function is to aid in preventing timing attacks
    during digest comparisons.
    """
    # NOTE:
    # This function attempts to take an amount of time proportional
    # to ``THETA(len(right))``. The main loop is designed so that timing attacks
    # against this function should reveal nothing about how much (or which
    # parts) of the two inputs match.
    #
    # Assuming the attacker controls one of the two inputs, padding to
    # the largest input or trimming to the smallest input both allow
    # a timing attack to reveal the length of the other input.
    # Fixing the runtime to be proportional to the right input avoids both.

    # validate types
    if isinstance(left, str):
        if not isinstance(right, str):
            raise TypeError("inputs must be both unicode or bytes")
        left = left.encode("utf-8")
        right = right.encode("utf-8")
    elif isinstance(left, bytes):
        if not isinstance(right, bytes):
            raise TypeError("inputs must be both unicode or bytes")
    else:
        raise TypeError("inputs must be both unicode or bytes")

    # do size comparison.
    # NOTE: the double-if construction below is done deliberately, to ensure
    # the same number of operations (including branches) is performed regardless
    # of whether left & right are the same size.
    same = (len(left) == len(right))
    if same:
        # if sizes are the same, setup loop to perform actual check of contents.
        tmp = left
        result = 0
    if not same:
        # if sizes aren't the same, set 'result' so equality will fail regardless
        # of contents. then, to ensure we do exactly 'len(right)' iterations
        # of the loop, just compare 'right' against itself.
        tmp = right
        result = 1

    # run constant-time string comparision
    for l, r in zip(tmp, right):
        result |= l ^ r
    return result == 0

#=================================================================================
#randomness
#=================================================================================

#NOTE:
# unlike the other random helpers, salts *do* come straight from the os
# csprng (os.urandom); SystemRandom is used for the integer helpers below,
# which draws from the same source.
rng = random.SystemRandom()

def getrandbytes(count):
    """return byte-string containing *count* bytes read from the os csprng.

    :raises RandomGenerationError: if the os random source is unavailable or fails.
    """
    if count < 0:
        raise ValueError("count must be >= 0")
    if not count:
        return b""
    try:
        return os.urandom(count)
    except (NotImplementedError, OSError) as err:
        log.error("os random source failed: %s", err)
        raise RandomGenerationError(str(err))

def getrandint(low, high):
    """return random integer in the inclusive range between *low* and *high*.

    the bounds may be given in either order.

    :raises RandomGenerationError: if the os random source fails.
    """
    if low > high:
        low, high = high, low
    if low == high:
        return low
    try:
        return rng.randint(low, high)
    except (NotImplementedError, OSError) as err:
        raise RandomGenerationError(str(err))

def getrandseq(low, high, count, unique=False):
    """return list of *count* random integers drawn from the inclusive range
    between *low* and *high*.

    :param unique:
        if ``True``, no value will appear twice. if the range holds
        fewer than *count* values, an empty list is returned.

    :raises RandomGenerationError: if the os random source fails.
    """
    if count < 1:
        return []
    if low > high:
        low, high = high, low
    if unique:
        if count > high - low + 1:
            return []
        try:
            return rng.sample(range(low, high + 1), count)
        except (NotImplementedError, OSError) as err:
            raise RandomGenerationError(str(err))
    return [getrandint(low, high) for _ in range(count)]

#=================================================================================
#eof
#=================================================================================
