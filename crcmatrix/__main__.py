import argparse
import logging
import sys

from .arena import Arena
from .constants import HEAP_SIZE
from .matrix import run_matrix
from .report import TextSink
from .sim import SimulatedCrcPeripheral


NEWLINES = {"crlf": "\r\n", "lf": "\n"}


def main_parser(parser=None):
    if parser is None:
        parser = argparse.ArgumentParser(
            prog="python -m crcmatrix",
            description="Compare the CRC peripheral with the software reference "
                        "over the full configuration matrix.")
    parser.add_argument("-v", "--verbose",
        action="store_true",
        help="log every case and peripheral access")
    parser.add_argument("--heap-size",
        metavar="BYTES", type=int, default=HEAP_SIZE,
        help="working memory available to calculation records (default: %(default)s)")
    parser.add_argument("--newline",
        choices=tuple(NEWLINES), default="crlf",
        help="line terminator of the report (default: %(default)s)")
    parser.add_argument("--vcd",
        metavar="VCD-FILE", type=str, default=None,
        help="write the waveform of the last peripheral simulation to VCD-FILE")
    return parser


def main_runner(args):
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    arena = Arena(args.heap_size)
    peripheral = SimulatedCrcPeripheral(vcd_file=args.vcd)
    sink = TextSink(sys.stdout, newline=NEWLINES[args.newline])
    result = run_matrix(peripheral, sink, arena)
    return 0 if result.ok else 1


def main(argv=None):
    args = main_parser().parse_args(argv)
    sys.exit(main_runner(args))


if __name__ == "__main__":
    main()
