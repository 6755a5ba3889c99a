"""
Gateware model of the CRC peripheral.

``CrcUnit`` implements the register contract of ``crcmatrix.peripheral``
behind a minimal single-port bus, so the hardware adapter can be exercised
in ``amaranth.sim`` without a board.
"""

from amaranth import *

from . import constants
from .peripheral import (SIZE_BYTE, SIZE_HALFWORD, SIZE_WORD, CR_RESET,
                         CR_POLYSIZE_POS, CR_REV_IN_POS, POLYSIZE)


__all__ = ["CrcUnit"]


def _reflect_lanes(value, lane):
    """Bit-reflects each ``lane``-bit slice of ``value`` in place."""
    return Cat(*(value[i:i+lane][::-1] for i in range(0, len(value), lane)))


class CrcUnit(Elaboratable):
    """
    CRC peripheral with programmable polynomial, size and reflection.

    Data port writes are processed one bit per clock cycle, most
    significant bit first; ``busy`` is asserted until the last bit of the
    current write has been absorbed, and writes are ignored while it is.
    Register writes other than to the data port complete in one cycle.

    The reset bit of the control register is write-only: writing it loads
    the CRC register from ``INIT`` and it always reads back as zero.

    Parameters
    ----------
    init, pol, cr, crc : int
        Register contents at simulation start. Default to the peripheral's
        reset values.

    Attributes
    ----------
    addr : Signal(5), in
        Register offset of the current access.
    w_data : Signal(32), in
        Write data. Only the low 8 or 16 bits are used for byte and
        halfword data port writes.
    w_size : Signal(2), in
        Access size, one of ``SIZE_BYTE``, ``SIZE_HALFWORD``, ``SIZE_WORD``.
    w_en : Signal(), in
        Assert for one cycle to perform a write.
    r_data : Signal(32), out
        Read data for ``addr``, combinationally.
    busy : Signal(), out
        Asserted while a data port write is being processed.
    """
    def __init__(self, *, init=constants.RESET_INIT, pol=constants.RESET_POL,
                 cr=constants.RESET_CR, crc=constants.RESET_DR):
        self.addr = Signal(5)
        self.w_data = Signal(32)
        self.w_size = Signal(2)
        self.w_en = Signal()
        self.r_data = Signal(32)
        self.busy = Signal()

        self.init = Signal(32, init=init)
        self.pol = Signal(32, init=pol)
        self.cr = Signal(8, init=cr & ~CR_RESET & 0xFF)
        self.crc = Signal(32, init=crc)

    def elaborate(self, platform):
        m = Module()

        polysize = self.cr[CR_POLYSIZE_POS:CR_POLYSIZE_POS+2]
        rev_in = self.cr[CR_REV_IN_POS:CR_REV_IN_POS+2]
        rev_out = self.cr[7]

        # Width-dependent views of the CRC register.
        mask = Signal(32)
        top = Signal()
        reflected = Signal(32)
        with m.Switch(polysize):
            for width, code in POLYSIZE.items():
                with m.Case(code):
                    m.d.comb += [
                        mask.eq((1 << width) - 1),
                        top.eq(self.crc[width - 1]),
                        reflected.eq(self.crc[:width][::-1]),
                    ]
        result = Mux(rev_out, reflected, self.crc & mask)

        # Data port input, after REV_IN, left-aligned so its MSbit is bit 31.
        # A write narrower than the REV_IN granularity is reflected over its
        # own width.
        data_in = Signal(32)
        data_bits = Signal(range(33))
        with m.Switch(self.w_size):
            for size, nbits in ((SIZE_BYTE, 8), (SIZE_HALFWORD, 16), (SIZE_WORD, 32)):
                with m.Case(size):
                    raw = self.w_data[:nbits]
                    with m.Switch(rev_in):
                        for code, lane in ((0b00, None), (0b01, 8), (0b10, 16), (0b11, 32)):
                            with m.Case(code):
                                if lane is None:
                                    word = raw
                                else:
                                    word = _reflect_lanes(raw, min(lane, nbits))
                                m.d.comb += data_in.eq(word << (32 - nbits))
                    m.d.comb += data_bits.eq(nbits)

        # Bit-serial division, MSbit first.
        shift = Signal(32)
        count = Signal(range(33))
        m.d.comb += self.busy.eq(count != 0)

        with m.If(count != 0):
            feedback = top ^ shift[31]
            shifted = (self.crc << 1)[:32]
            m.d.sync += [
                self.crc.eq(Mux(feedback, shifted ^ self.pol, shifted) & mask),
                shift.eq(shift << 1),
                count.eq(count - 1),
            ]
        with m.Elif(self.w_en):
            with m.Switch(self.addr):
                with m.Case(constants.DR):
                    m.d.sync += [
                        shift.eq(data_in),
                        count.eq(data_bits),
                    ]
                with m.Case(constants.INIT):
                    m.d.sync += self.init.eq(self.w_data)
                with m.Case(constants.POL):
                    m.d.sync += self.pol.eq(self.w_data)
                with m.Case(constants.CR):
                    m.d.sync += self.cr.eq(Cat(Const(0, 1), self.w_data[1:8]))
                    with m.If(self.w_data[0]):
                        m.d.sync += self.crc.eq(self.init)

        with m.Switch(self.addr):
            with m.Case(constants.DR):
                m.d.comb += self.r_data.eq(result)
            with m.Case(constants.INIT):
                m.d.comb += self.r_data.eq(self.init)
            with m.Case(constants.POL):
                m.d.comb += self.r_data.eq(self.pol)
            with m.Case(constants.CR):
                m.d.comb += self.r_data.eq(self.cr)

        return m
