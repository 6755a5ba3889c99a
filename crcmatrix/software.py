"""
Software reference for the CRC peripheral.

The reference never relies on the peripheral's own reflection logic: input
steps are reflected in software and fed as plain big-endian bytes to a
canonical, most-significant-bit-first CRC register.
"""

from .model import CrcCalculation


__all__ = ["SoftwareCrc", "run_software"]


class SoftwareCrc:
    """
    Canonical CRC register without input reflection, output reflection or
    output XOR.

    Parameters
    ----------
    polynomial : int
        CRC polynomial, ``crc_width`` bits long, without the implicit
        ``x**crc_width`` term.
    crc_width : int
        Bit width of the CRC register.
    initial_crc : int
        Initial register value. Only the low ``crc_width`` bits are used.
    """
    def __init__(self, polynomial, crc_width, initial_crc):
        self.crc_width = int(crc_width)
        self.polynomial = int(polynomial)
        self.mask = (1 << self.crc_width) - 1

        assert self.crc_width > 0
        assert self.polynomial <= self.mask

        self._crc = int(initial_crc) & self.mask

    @property
    def value(self):
        return self._crc

    def digest(self, data):
        """
        Feeds the bytes of ``data`` into the register, in order.
        """
        # As in a word-at-a-time MSbit-first update, the register is shifted
        # left by the data width and the data byte left by the CRC width, so
        # their MSbits line up even when the CRC is narrower than a byte.
        top_bit = 1 << (self.crc_width + 7)
        crc_mask = (1 << (self.crc_width + 8)) - 1
        poly_shifted = self.polynomial << 8

        crc = self._crc << 8
        for byte in data:
            crc ^= byte << self.crc_width
            for _ in range(8):
                if crc & top_bit:
                    crc = (crc << 1) ^ poly_shifted
                else:
                    crc <<= 1
            crc &= crc_mask
        self._crc = crc >> 8

    def __repr__(self):
        return f"SoftwareCrc(polynomial=0x{self.polynomial:x}," \
               f" crc_width={self.crc_width}," \
               f" crc=0x{self._crc:x})"


def run_software(calculation):
    """
    Computes the expected peripheral result for ``calculation``.
    """
    assert isinstance(calculation, CrcCalculation)
    config = calculation.config
    polynomial = config.polynomial

    crc = SoftwareCrc(polynomial.value, polynomial.width, config.initial_value)
    for step in calculation.steps:
        word = config.reflect_input.apply(step)
        crc.digest(word.to_bytes(step.width // 8, "big"))

    if config.reflect_output:
        return polynomial.reflect_output(crc.value)
    return crc.value
