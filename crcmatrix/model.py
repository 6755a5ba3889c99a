"""
Configuration and data model of a single CRC test vector.

A ``CrcCalculation`` bundles one ``CrcConfig`` with the ordered ``Step``
sequence to feed, and is handed read-only to both the software engine and
the hardware adapter.
"""

from enum import Enum

from .constants import CALCULATION_SIZE, STEP_SIZE
from .reflect import reflect_byte, reflect_halfword, reflect_word


__all__ = ["Polynomial", "BitReflection", "CrcConfig", "Step", "CrcCalculation"]


class Polynomial:
    """
    CRC generator polynomial, tagged with its width class.

    The peripheral supports exactly four polynomial sizes. Everything that
    depends on the size (register mask, report label, output reflection)
    branches on the ``width`` tag.

    Parameters
    ----------
    width : int
        One of 7, 8, 16 or 32.
    value : int
        Polynomial coefficients without the implicit ``x**width`` term,
        highest order term in the most significant bit.
    """
    WIDTHS = (7, 8, 16, 32)

    __slots__ = ("_width", "_value")

    def __init__(self, width, value):
        if width not in self.WIDTHS:
            raise ValueError(f"Polynomial width must be one of {self.WIDTHS}, not {width!r}")
        if not isinstance(value, int) or not 0 <= value < 2 ** width:
            raise ValueError(f"Polynomial value {value!r} does not fit in {width} bits")
        self._width = width
        self._value = value

    @classmethod
    def crc7(cls, value):
        return cls(7, value)

    @classmethod
    def crc8(cls, value):
        return cls(8, value)

    @classmethod
    def crc16(cls, value):
        return cls(16, value)

    @classmethod
    def crc32(cls, value):
        return cls(32, value)

    @property
    def width(self):
        return self._width

    @property
    def value(self):
        return self._value

    @property
    def mask(self):
        return (1 << self._width) - 1

    @property
    def label(self):
        return f"Crc{self._width}"

    def reflect_output(self, output):
        """
        Bit-reflects a CRC register value the way the peripheral does with
        REV_OUT set.

        A 7-bit result is reflected as a byte and then shifted down by one
        to land back in the 7-bit field. Applying this twice does not in
        general give back the original value.
        """
        if self._width == 7:
            return reflect_byte(output) >> 1
        elif self._width == 8:
            return reflect_byte(output)
        elif self._width == 16:
            return reflect_halfword(output)
        else:
            return reflect_word(output)

    def __eq__(self, other):
        if not isinstance(other, Polynomial):
            return NotImplemented
        return (self._width, self._value) == (other._width, other._value)

    def __hash__(self):
        return hash((self._width, self._value))

    def __repr__(self):
        return f"Polynomial.{self.label.lower()}(0x{self._value:0{(self._width + 3) // 4}x})"


class BitReflection(Enum):
    """
    Input reflection mode of the peripheral. Member values are the REV_IN
    field codes of the control register.
    """
    NONE     = 0b00
    BYTE     = 0b01
    HALFWORD = 0b10
    WORD     = 0b11

    @property
    def granularity(self):
        """Reflection lane size in bits, or ``None`` for no reflection."""
        return {
            BitReflection.NONE: None,
            BitReflection.BYTE: 8,
            BitReflection.HALFWORD: 16,
            BitReflection.WORD: 32,
        }[self]

    @property
    def label(self):
        if self is BitReflection.NONE:
            return "Disabled"
        return f"By{self.granularity}Bits"

    def apply(self, step):
        """
        Returns the value of ``step`` as the peripheral sees it after input
        reflection.

        A step narrower than the reflection granularity is reflected over
        its own width only: under ``WORD`` an 8-bit step is byte-reflected
        and a 16-bit step is halfword-reflected.
        """
        if self is BitReflection.NONE:
            return step.value
        lane = min(self.granularity, step.width)
        if lane == 8:
            return reflect_byte(step.value)
        elif lane == 16:
            return reflect_halfword(step.value)
        else:
            return reflect_word(step.value)


class CrcConfig:
    """
    Peripheral configuration for one calculation.

    Parameters
    ----------
    reflect_input : BitReflection
    reflect_output : bool
    initial_value : int
        32-bit value for the INIT register. Narrower polynomials only use
        its low ``polynomial.width`` bits.
    polynomial : Polynomial
    """
    __slots__ = ("_reflect_input", "_reflect_output", "_initial_value", "_polynomial")

    def __init__(self, reflect_input, reflect_output, initial_value, polynomial):
        if not isinstance(reflect_input, BitReflection):
            raise TypeError(f"Input reflection must be a BitReflection, not {reflect_input!r}")
        if not isinstance(polynomial, Polynomial):
            raise TypeError(f"Polynomial must be a Polynomial, not {polynomial!r}")
        if not isinstance(initial_value, int) or not 0 <= initial_value <= 0xFFFF_FFFF:
            raise ValueError(f"Initial value {initial_value!r} does not fit in 32 bits")
        self._reflect_input = reflect_input
        self._reflect_output = bool(reflect_output)
        self._initial_value = initial_value
        self._polynomial = polynomial

    @property
    def reflect_input(self):
        return self._reflect_input

    @property
    def reflect_output(self):
        return self._reflect_output

    @property
    def initial_value(self):
        return self._initial_value

    @property
    def polynomial(self):
        return self._polynomial

    def __repr__(self):
        return f"CrcConfig(reflect_input={self._reflect_input}," \
               f" reflect_output={self._reflect_output}," \
               f" initial_value=0x{self._initial_value:08x}," \
               f" polynomial={self._polynomial!r})"


class Step:
    """
    One write to the peripheral's data port, ``width`` bits wide.
    """
    WIDTHS = (8, 16, 32)

    __slots__ = ("_width", "_value")

    def __init__(self, width, value):
        if width not in self.WIDTHS:
            raise ValueError(f"Step width must be one of {self.WIDTHS}, not {width!r}")
        if not isinstance(value, int) or not 0 <= value < 2 ** width:
            raise ValueError(f"Step value {value!r} does not fit in {width} bits")
        self._width = width
        self._value = value

    @classmethod
    def data8(cls, value):
        return cls(8, value)

    @classmethod
    def data16(cls, value):
        return cls(16, value)

    @classmethod
    def data32(cls, value):
        return cls(32, value)

    @property
    def width(self):
        return self._width

    @property
    def value(self):
        return self._value

    def __eq__(self, other):
        if not isinstance(other, Step):
            return NotImplemented
        return (self._width, self._value) == (other._width, other._value)

    def __hash__(self):
        return hash((self._width, self._value))

    def __repr__(self):
        return f"Step.data{self._width}(0x{self._value:0{self._width // 4}x})"


class CrcCalculation:
    """
    A complete test vector: a configuration and the steps to feed, in order.
    """
    __slots__ = ("_config", "_steps")

    def __init__(self, config, steps):
        if not isinstance(config, CrcConfig):
            raise TypeError(f"Config must be a CrcConfig, not {config!r}")
        steps = tuple(steps)
        for step in steps:
            if not isinstance(step, Step):
                raise TypeError(f"Steps must be Step instances, not {step!r}")
        self._config = config
        self._steps = steps

    @property
    def config(self):
        return self._config

    @property
    def steps(self):
        return self._steps

    @property
    def footprint(self):
        """Working memory needed to hold this record, in bytes."""
        return CALCULATION_SIZE + STEP_SIZE * len(self._steps)

    def __repr__(self):
        return f"CrcCalculation(config={self._config!r}, steps={list(self._steps)!r})"
