from typing import NamedTuple

from chip8.cpu import CPU
from chip8.display import Display, DisplayStats
from chip8.keypad import Keypad
from chip8.memory import Memory


class EmulatorStats(NamedTuple):
    cycles_executed: int
    program_counter: int
    index_register: int
    display: DisplayStats
    waiting_for_key: bool


class Emulator:
    """Owns one machine's memory, display, keypad and CPU.

    There is no run loop here: the caller decides how often to ``step``,
    when to ``tick_timers`` (60Hz) and when to poll input with
    ``update_input``.
    """

    def __init__(self, backend=None, write_protected=None, rng=None):
        self.memory = Memory(write_protected)
        self.display = Display()
        self.keypad = Keypad(backend)
        self.cpu = CPU(rng)
        self.cycles_executed = 0

    def __str__(self):
        return f"{self.cpu}\nKEYPAD:{self.keypad}"

    def load_rom(self, rom):
        self.memory.load_rom(rom)

    def load_rom_file(self, path):
        return self.memory.load_rom_file(path)

    def step(self):
        self.cpu.step(self.memory, self.display, self.keypad)
        self.cycles_executed += 1

    def run_cycles(self, count):
        """step ``count`` times, stopping early on the first error (it propagates)"""
        for _ in range(count):
            self.step()

    def update_input(self):
        self.keypad.update()

    def tick_timers(self):
        self.cpu.tick_timers()

    def reset(self):
        """back to power-on state, the loaded ROM is wiped as well"""
        self.memory.reset()
        self.display.clear()
        self.keypad.clear()
        self.cpu.reset()
        self.cycles_executed = 0

    def stats(self):
        return EmulatorStats(
            cycles_executed=self.cycles_executed,
            program_counter=self.cpu.pc,
            index_register=self.cpu.idx,
            display=self.display.stats(),
            waiting_for_key=self.cpu.state.is_waiting,
        )
