"""
Validation matrix comparing the CRC peripheral with the software reference.

Every combination of polynomial, input reflection, output reflection,
initial value and step sequence is run on both paths, in a fixed nested
order, and reported as it completes.
"""

import itertools
import logging

from .hardware import run_hardware
from .model import BitReflection, CrcCalculation, CrcConfig, Polynomial, Step
from .report import HEADER, format_case, format_summary
from .software import run_software


__all__ = [
    "POLYNOMIALS", "REFLECT_INPUTS", "REFLECT_OUTPUTS", "INITIAL_VALUES", "STEP_SEQUENCES",
    "Case", "MatrixResult", "iter_cases", "run_case", "run_matrix",
]


logger = logging.getLogger(__name__)


POLYNOMIALS = (
    Polynomial.crc7(0x09),
    Polynomial.crc8(0x07),
    Polynomial.crc16(0x8005),
    Polynomial.crc32(0x1EDC6F41),
    Polynomial.crc32(0x04C11DB7),
)

REFLECT_INPUTS = tuple(BitReflection)

REFLECT_OUTPUTS = (False, True)

INITIAL_VALUES = (
    0x0000_0000,
    0xFFFF_FFFF,
    0x0000_00FF,
)

STEP_SEQUENCES = (
    (),
    (Step.data8(0x42),),
    (Step.data16(0x4232),),
    (Step.data8(0x42), Step.data8(0x32), Step.data8(0x68), Step.data8(0xA4)),
    (Step.data16(0x4232), Step.data16(0x68A4)),
    (Step.data32(0x423268A4),),
    (Step.data32(0x423268A4), Step.data32(0xAD91FE38)),
)


class Case:
    """
    One matrix entry. ``index`` is the position of its step sequence in
    ``STEP_SEQUENCES``.
    """
    __slots__ = ("index", "calculation")

    def __init__(self, index, calculation):
        self.index = index
        self.calculation = calculation

    def __repr__(self):
        return f"Case(index={self.index}, calculation={self.calculation!r})"


class MatrixResult:
    def __init__(self, passed=0, failed=0):
        self.passed = passed
        self.failed = failed

    @property
    def total(self):
        return self.passed + self.failed

    @property
    def ok(self):
        return self.failed == 0

    def __repr__(self):
        return f"MatrixResult(passed={self.passed}, failed={self.failed})"


def iter_cases(polynomials=POLYNOMIALS, reflect_inputs=REFLECT_INPUTS,
               reflect_outputs=REFLECT_OUTPUTS, initial_values=INITIAL_VALUES,
               step_sequences=STEP_SEQUENCES):
    """
    Yields every ``Case`` of the matrix, nested in argument order with the
    step sequence varying fastest.
    """
    for polynomial, reflect_input, reflect_output, initial_value in itertools.product(
            polynomials, reflect_inputs, reflect_outputs, initial_values):
        config = CrcConfig(reflect_input, reflect_output, initial_value, polynomial)
        for index, steps in enumerate(step_sequences):
            yield Case(index, CrcCalculation(config, steps))


def run_case(case, peripheral):
    """
    Runs one case on both paths, returning ``(output, expected)``.
    """
    expected = run_software(case.calculation)
    output = run_hardware(case.calculation, peripheral)
    return output, expected


def run_matrix(peripheral, sink, arena, cases=None):
    """
    Runs ``cases`` (the full matrix by default) against ``peripheral``,
    writing the report to ``sink``.

    Each case is held in ``arena`` only while it runs, and its report line
    is written before the next case starts. A hardware result that differs
    from the software result is reported and counted as a failure.
    """
    if cases is None:
        cases = iter_cases()

    result = MatrixResult()
    for line in HEADER:
        sink.write_line(line)

    for case in cases:
        with arena.allocate(case.calculation.footprint):
            output, expected = run_case(case, peripheral)
            sink.write_line(format_case(case.index, case.calculation, output, expected))
        if output == expected:
            result.passed += 1
            logger.debug("Case %d passed: %r", case.index, case.calculation)
        else:
            result.failed += 1
            logger.warning("Case %d failed: %r gave 0x%08x, expected 0x%08x",
                           case.index, case.calculation, output, expected)

    sink.write_line(format_summary(result.passed, result.failed))
    logger.info("%d cases passed, %d failed", result.passed, result.failed)
    return result
