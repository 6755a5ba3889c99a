"""
Hardware path: runs a ``CrcCalculation`` on a CRC peripheral, letting the
peripheral apply its own input and output reflection.
"""

from .model import CrcCalculation
from .peripheral import POLYSIZE, ExtendedRegister, encode_control


__all__ = ["run_hardware"]


def run_hardware(calculation, peripheral):
    """
    Programs ``peripheral`` for ``calculation``, feeds its steps unreflected
    and returns the 32-bit data register.

    The peripheral is claimed for the whole register sequence; claiming a
    peripheral that is already in use raises ``PeripheralBusy``.
    """
    assert isinstance(calculation, CrcCalculation)
    config = calculation.config
    polynomial = config.polynomial

    with peripheral.claim():
        peripheral.write_init(config.initial_value)
        peripheral.write_extended(ExtendedRegister.POL, polynomial.value)
        # Reset goes in the same write as the configuration, so the CRC
        # register is reloaded from INIT before any data arrives.
        peripheral.write_control(encode_control(
            rev_in=config.reflect_input.value,
            rev_out=config.reflect_output,
            polysize=POLYSIZE[polynomial.width],
            reset=True))
        for step in calculation.steps:
            peripheral.write_data(step.width, step.value)
        return peripheral.read_data()
