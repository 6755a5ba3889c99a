"""
Register contract of the CRC peripheral, as seen from the bus.

``CrcPeripheral`` is the collaborator the hardware adapter drives. Concrete
peripherals implement two bus primitives, ``_write`` and ``_read``; the
named register accessors on top of them are shared.
"""

from contextlib import contextmanager
from enum import IntEnum

from . import constants


__all__ = [
    "SIZE_BYTE", "SIZE_HALFWORD", "SIZE_WORD", "SIZES",
    "CR_RESET", "POLYSIZE", "encode_control", "decode_control",
    "ExtendedRegister", "PeripheralBusy", "CrcPeripheral",
]


# Bus access sizes, indexed by data port width.
SIZE_BYTE     = 0
SIZE_HALFWORD = 1
SIZE_WORD     = 2
SIZES = {8: SIZE_BYTE, 16: SIZE_HALFWORD, 32: SIZE_WORD}

# Control register fields.
CR_RESET        = 1 << 0
CR_POLYSIZE_POS = 3
CR_REV_IN_POS   = 5
CR_REV_OUT      = 1 << 7

# POLYSIZE field codes, by polynomial width.
POLYSIZE = {32: 0b00, 16: 0b01, 8: 0b10, 7: 0b11}


def encode_control(rev_in, rev_out, polysize, reset):
    """
    Packs the control register fields into a register value.

    ``rev_in`` is the REV_IN field code, ``polysize`` the POLYSIZE code.
    """
    assert 0 <= rev_in <= 0b11 and 0 <= polysize <= 0b11
    value = (rev_in << CR_REV_IN_POS) | (polysize << CR_POLYSIZE_POS)
    if rev_out:
        value |= CR_REV_OUT
    if reset:
        value |= CR_RESET
    return value


def decode_control(value):
    """
    Splits a control register value into ``(rev_in, rev_out, polysize, reset)``.
    """
    return ((value >> CR_REV_IN_POS) & 0b11,
            bool(value & CR_REV_OUT),
            (value >> CR_POLYSIZE_POS) & 0b11,
            bool(value & CR_RESET))


class ExtendedRegister(IntEnum):
    """
    Registers that exist in the silicon but are missing from the vendor
    register description, by offset.

    These are only written through ``CrcPeripheral.write_extended``.
    """
    POL = constants.POL


class PeripheralBusy(RuntimeError):
    """Raised when a second calculation tries to claim a peripheral in use."""


class CrcPeripheral:
    """
    Bus-level access to one CRC peripheral.

    A peripheral is owned by at most one calculation at a time; use
    ``claim()`` around the register sequence of a calculation.
    """
    def __init__(self):
        self._claimed = False

    @contextmanager
    def claim(self):
        if self._claimed:
            raise PeripheralBusy(f"{self!r} is already claimed by another calculation")
        self._claimed = True
        try:
            yield self
        finally:
            self._claimed = False

    def _write(self, offset, value, size):
        raise NotImplementedError # :nocov:

    def _read(self, offset):
        raise NotImplementedError # :nocov:

    def write_init(self, value):
        self._write(constants.INIT, value, SIZE_WORD)

    def write_control(self, value):
        self._write(constants.CR, value, SIZE_WORD)

    def write_data(self, width, value):
        """
        Writes ``value`` to the ``width``-bit data port (8, 16 or 32).
        """
        self._write(constants.DR, value, SIZES[width])

    def read_data(self):
        return self._read(constants.DR)

    def read_control(self):
        return self._read(constants.CR)

    def write_extended(self, register, value):
        """
        Writes a register that the vendor register description omits.

        Only offsets named by ``ExtendedRegister`` are accepted, so raw
        address arithmetic stays out of callers.
        """
        register = ExtendedRegister(register)
        self._write(register.value, value, SIZE_WORD)
