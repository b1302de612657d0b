"""purebcrypt.utils.bcrypt64 - bcrypt's base64 variant

bcrypt uses its own base64 alphabet (``./A-Za-z0-9``), big-endian
bit packing, and no padding. The salt (16 bytes) always encodes
to 22 chars, the digest (23 bytes) to 31 chars.
"""
#=================================================================================
#imports
#=================================================================================
#core
import logging; log = logging.getLogger(__name__)
#pkg
#local
__all__ = [
    "BCRYPT_CHARS",
    "encode_bytes",
    "decode_bytes",
    "encode_6bit",
    "decode_6bit",
]

#=================================================================================
#6 bit value <-> char mapping
#=================================================================================
BCRYPT_CHARS = "./ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789"

#base64 char sequence
encode_6bit = BCRYPT_CHARS.__getitem__ # int -> char

#inverse map (char code -> value), -1 for chars not in alphabet
_CHAR_INDEX = [-1] * 256
for _idx, _char in enumerate(BCRYPT_CHARS):
    _CHAR_INDEX[ord(_char)] = _idx
_CHAR_INDEX = tuple(_CHAR_INDEX)
del _idx, _char

def decode_6bit(char):
    "decode single char -> 6-bit value, returns -1 if char is not in the alphabet"
    code = ord(char)
    if code > 255:
        return -1
    return _CHAR_INDEX[code]

#=================================================================================
#byte strings
#=================================================================================
def encode_bytes(source, length=None):
    """encode byte string using bcrypt's base64 variant.

    :arg source: bytes to encode.
    :param length: optionally only encode the first *length* bytes.

    :returns:
        native string. each 3-byte group becomes 4 chars;
        a trailing 2-byte group becomes 3 chars, and a trailing
        single byte becomes 2 chars.
    """
    if not isinstance(source, (bytes, bytearray)):
        raise TypeError("source must be bytes, not %s" % (type(source),))
    end = len(source)
    if length is not None:
        end = min(end, length)
    out = []
    write = out.append
    idx = 0
    while idx < end:
        #
        # output bit layout:
        #
        # first char:   c1 765432
        # second char:  c1 10.... + c2 7654
        # third char:   c2 3210.. + c3 76
        # fourth char:  c3 543210
        #
        c1 = source[idx]
        idx += 1
        write(encode_6bit(c1 >> 2))
        c1 = (c1 & 0x03) << 4
        if idx >= end:
            write(encode_6bit(c1))
            break
        c2 = source[idx]
        idx += 1
        write(encode_6bit(c1 | (c2 >> 4)))
        c2 = (c2 & 0x0f) << 2
        if idx >= end:
            write(encode_6bit(c2))
            break
        c3 = source[idx]
        idx += 1
        write(encode_6bit(c2 | (c3 >> 6)))
        write(encode_6bit(c3 & 0x3f))
    return "".join(out)

def decode_bytes(source, max_length):
    """decode string using bcrypt's base64 variant.

    decoding stops after *max_length* bytes have been produced,
    or at the first character which isn't part of the alphabet.

    .. note::

        invalid characters do *not* raise an error; whatever
        was decoded up to that point is returned. callers which
        need a specific number of bytes must check the length
        of the result themselves.

    :arg source: native string to decode.
    :arg max_length: maximum number of bytes to return.

    :returns: bytes
    """
    out = bytearray()
    write = out.append
    end = len(source)
    off = 0
    while off < end - 1 and len(out) < max_length:
        c1 = decode_6bit(source[off])
        c2 = decode_6bit(source[off+1])
        off += 2
        if c1 == -1 or c2 == -1:
            break
        write(((c1 << 2) | ((c2 & 0x30) >> 4)) & 0xff)
        if len(out) >= max_length or off >= end:
            break
        c3 = decode_6bit(source[off])
        off += 1
        if c3 == -1:
            break
        write(((c2 & 0x0f) << 4) | ((c3 & 0x3c) >> 2))
        if len(out) >= max_length or off >= end:
            break
        c4 = decode_6bit(source[off])
        off += 1
        if c4 == -1:
            break
        write(((c3 & 0x03) << 6) | c4)
    return bytes(out)

#=================================================================================
#eof
#=================================================================================
