"""
Fixed parameters of the CRC validation bench: working-memory sizing and the
register layout of the CRC peripheral.
"""


__all__ = [
    "HEAP_SIZE", "CALCULATION_SIZE", "STEP_SIZE",
    "CRC_BASE", "DR", "IDR", "CR", "INIT", "POL",
    "RESET_INIT", "RESET_POL", "RESET_CR", "RESET_DR",
]


# Capacity of the working-memory arena, in bytes.
HEAP_SIZE = 2048

# Footprint of one calculation record and of each step it owns, in bytes.
CALCULATION_SIZE = 16
STEP_SIZE = 8

# Register offsets, relative to the peripheral base address.
CRC_BASE = 0x4002_3000
DR   = 0x00
IDR  = 0x04
CR   = 0x08
INIT = 0x10
POL  = 0x14

# Register values after a peripheral reset.
RESET_INIT = 0xFFFF_FFFF
RESET_POL  = 0x04C1_1DB7
RESET_CR   = 0x0000_0000
RESET_DR   = 0xFFFF_FFFF
