"""
Line-oriented test report.
"""


__all__ = ["HEADER", "format_case", "format_summary", "TextSink"]


HEADER = (
    "Type  | Polynomial | Input refl | Output refl |   Init val | Test |     Output | Result",
    "---------------------------------------------------------------------------------------",
)


def format_case(index, calculation, output, expected):
    """
    Formats the report row of one case. ``output`` is the hardware result,
    ``expected`` the software result.
    """
    config = calculation.config
    polynomial = config.polynomial
    reflect_output = "Enabled" if config.reflect_output else "Disabled"
    if output == expected:
        outcome = "    OK"
    else:
        outcome = f"failed - expected 0x{expected:08x}"
    return f"{polynomial.label:>5} | 0x{polynomial.value:08x} |" \
           f" {config.reflect_input.label:>10} | {reflect_output:>11} |" \
           f" 0x{config.initial_value:08x} | {index:>4} | 0x{output:08x} | {outcome}"


def format_summary(passed, failed):
    status = "ok" if failed == 0 else "FAILED"
    return f"test result: {status}. {passed} passed; {failed} failed"


class TextSink:
    """
    Report sink writing each line to a text stream, such as a serial port
    wrapper or ``sys.stdout``, and flushing it immediately.
    """
    def __init__(self, stream, newline="\r\n"):
        self.stream = stream
        self.newline = newline

    def write_line(self, line):
        self.stream.write(line + self.newline)
        self.stream.flush()
