"""
Bit-exact validation of a hardware CRC peripheral against a software
reference, over a matrix of polynomial, reflection, initial value and
input chunking settings.
"""

from .model import Polynomial, BitReflection, CrcConfig, Step, CrcCalculation
from .software import run_software
from .hardware import run_hardware
from .matrix import iter_cases, run_matrix


__all__ = [
    "Polynomial", "BitReflection", "CrcConfig", "Step", "CrcCalculation",
    "run_software", "run_hardware", "iter_cases", "run_matrix",
]
