"""
CRC peripheral backed by the ``CrcUnit`` gateware running in ``amaranth.sim``.
"""

import logging

from amaranth.sim import Simulator

from . import constants
from .gateware import CrcUnit
from .peripheral import CrcPeripheral


__all__ = ["SimulatedCrcPeripheral"]


logger = logging.getLogger(__name__)


class SimulatedCrcPeripheral(CrcPeripheral):
    """
    ``CrcPeripheral`` implemented by simulating ``CrcUnit``.

    Writes are posted: they are queued and only clocked into the gateware
    when a register is next read. Each read runs one simulation that starts
    from the register state left by the previous one, replays the queued
    writes, samples the read and captures the new register state. Seen
    through the bus this is indistinguishable from a peripheral that
    executes every write immediately.

    Parameters
    ----------
    vcd_file : str or None
        If given, the waveform of each simulation is written here,
        overwriting the previous one.
    """
    STATE = ("init", "pol", "cr", "crc")

    def __init__(self, vcd_file=None):
        super().__init__()
        self.vcd_file = vcd_file
        self.cycles = 0
        self._state = {
            "init": constants.RESET_INIT,
            "pol": constants.RESET_POL,
            "cr": constants.RESET_CR,
            "crc": constants.RESET_DR,
        }
        self._posted = []

    def _write(self, offset, value, size):
        self._posted.append((offset, value, size))

    def _read(self, offset):
        writes, self._posted = self._posted, []
        dut = CrcUnit(**self._state)
        result = {}

        async def testbench(ctx):
            cycles = 0
            for w_offset, w_value, w_size in writes:
                ctx.set(dut.addr, w_offset)
                ctx.set(dut.w_data, w_value)
                ctx.set(dut.w_size, w_size)
                ctx.set(dut.w_en, 1)
                await ctx.tick()
                ctx.set(dut.w_en, 0)
                cycles += 1
                while ctx.get(dut.busy):
                    await ctx.tick()
                    cycles += 1
            ctx.set(dut.addr, offset)
            result["data"] = ctx.get(dut.r_data)
            result["state"] = {name: ctx.get(getattr(dut, name)) for name in self.STATE}
            result["cycles"] = cycles

        sim = Simulator(dut)
        sim.add_clock(1e-6)
        sim.add_testbench(testbench)
        if self.vcd_file is not None:
            with sim.write_vcd(self.vcd_file):
                sim.run()
        else:
            sim.run()

        self._state = result["state"]
        self.cycles += result["cycles"]
        logger.debug("Replayed %d posted writes in %d cycles, read 0x%02x -> 0x%08x",
                     len(writes), result["cycles"], offset, result["data"])
        return result["data"]

    def __repr__(self):
        return f"SimulatedCrcPeripheral(cycles={self.cycles})"
