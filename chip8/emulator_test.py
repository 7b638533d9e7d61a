import unittest

from chip8.emulator import Emulator
from chip8.errors import ExecutionError, WriteProtectedError
from chip8.keypad import ScriptedBackend

# IBM-logo style program: draw the "1" glyph at (8, 4), then wait for a key, then loop forever
ROM = bytes([
    0x00, 0xE0,     # CLS
    0x60, 0x01,     # LD V0, 01
    0xF0, 0x29,     # LD F, V0
    0x61, 0x08,     # LD V1, 08
    0x62, 0x04,     # LD V2, 04
    0xD1, 0x25,     # DRW V1, V2, 5
    0xF3, 0x0A,     # LD V3, K
    0x12, 0x0E,     # JP 20E
])


class TestEmulator(unittest.TestCase):
    def test_run_until_key_wait(self):
        backend = ScriptedBackend()
        emu = Emulator(backend, write_protected=True)
        emu.load_rom(ROM)
        emu.run_cycles(7)
        stats = emu.stats()
        self.assertTrue(stats.waiting_for_key)
        self.assertEqual(stats.program_counter, 0x20E)
        self.assertEqual(stats.display.pixels_on, 8)    # the "1" glyph
        self.assertTrue(emu.display.get_pixel(10, 4))

        backend.push(0xC)
        emu.update_input()
        emu.run_cycles(3)
        self.assertFalse(emu.stats().waiting_for_key)
        self.assertEqual(emu.cpu.v_regs[3], 0xC)
        self.assertEqual(emu.cpu.pc, 0x20E)
        self.assertEqual(emu.cycles_executed, 10)

    def test_errors_stop_the_run(self):
        emu = Emulator()
        emu.load_rom(bytes([0x12, 0x00, 0xFF, 0xFF]))
        emu.cpu.pc = 0x202
        with self.assertRaises(ExecutionError):
            emu.run_cycles(5)
        self.assertEqual(emu.cycles_executed, 0)

    def test_write_protection_setting(self):
        self.assertTrue(Emulator(write_protected=True).memory.write_protected)
        emu = Emulator(write_protected=False)
        emu.memory.write_byte(0x100, 1)
        with self.assertRaises(WriteProtectedError):
            Emulator(write_protected=True).memory.write_byte(0x100, 1)

    def test_timers_and_reset(self):
        emu = Emulator()
        emu.load_rom(bytes([0x60, 0x03, 0xF0, 0x15]))
        emu.run_cycles(2)
        emu.tick_timers()
        self.assertEqual(emu.cpu.dt, 2)
        emu.reset()
        self.assertEqual(emu.cpu.dt, 0)
        self.assertEqual(emu.memory.read_word(0x200), 0)
        self.assertEqual(emu.cycles_executed, 0)


if __name__ == "__main__":
    unittest.main()
