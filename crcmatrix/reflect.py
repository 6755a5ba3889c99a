"""
Bit-reflection helpers matching the REV_IN/REV_OUT behaviour of the CRC
peripheral.

Each function works on a 32-bit container and reflects every lane of its
granularity independently, so ``reflect_byte(0x0180)`` is ``0x8001``: the
bits inside each byte are reversed but the bytes stay where they are.
Values narrower than the container simply have zero upper lanes.
"""


__all__ = ["reflect_byte", "reflect_halfword", "reflect_word"]


def reflect_byte(word):
    """
    Reverses the bit order inside each byte of ``word``.
    """
    word = ((word >> 1) & 0x5555_5555) | ((word & 0x5555_5555) << 1)
    word = ((word >> 2) & 0x3333_3333) | ((word & 0x3333_3333) << 2)
    word = ((word >> 4) & 0x0F0F_0F0F) | ((word & 0x0F0F_0F0F) << 4)
    return word


def reflect_halfword(word):
    """
    Reverses the bit order inside each 16-bit lane of ``word``.
    """
    word = reflect_byte(word)
    return ((word >> 8) & 0x00FF_00FF) | ((word & 0x00FF_00FF) << 8)


def reflect_word(word):
    """
    Reverses the bit order of the whole 32-bit ``word``.
    """
    word = reflect_halfword(word)
    return ((word >> 16) | (word << 16)) & 0xFFFF_FFFF
