import os
import tempfile
import unittest
from unittest import mock

from chip8 import config
from chip8.config import FONT, FONT_START_ADDRESS, MAX_ROM_SIZE, ROM_START_ADDRESS
from chip8.errors import (
    AddressOutOfBoundsError, InvalidFontDigitError, RomEmptyError,
    RomNotFoundError, RomTooLargeError, WriteProtectedError,
)
from chip8.memory import Memory


class TestAccess(unittest.TestCase):
    def setUp(self):
        self.mem = Memory(write_protected=True)

    def test_font_loaded(self):
        self.assertEqual(self.mem.read_byte(FONT_START_ADDRESS), 0xF0)
        self.assertEqual(self.mem.font_sprite(0xA),
                         FONT[50:55])

    def test_byte_round_trip(self):
        self.mem.write_byte(0x300, 0x1AB)
        self.assertEqual(self.mem.read_byte(0x300), 0xAB)

    def test_word_is_big_endian(self):
        self.mem.write_byte(0x200, 0x6A)
        self.mem.write_byte(0x201, 0xFF)
        self.assertEqual(self.mem.read_word(0x200), 0x6AFF)

    def test_out_of_bounds(self):
        with self.assertRaises(AddressOutOfBoundsError):
            self.mem.read_byte(0x1000)
        with self.assertRaises(AddressOutOfBoundsError):
            self.mem.write_byte(0x1000, 1)
        with self.assertRaises(IndexError):
            self.mem.read_word(0xFFF)

    def test_last_address_is_readable(self):
        self.assertEqual(self.mem.read_byte(0xFFF), 0)
        self.assertEqual(self.mem.read_word(0xFFE), 0)

    def test_write_protection(self):
        with self.assertRaises(WriteProtectedError) as cm:
            self.mem.write_byte(0x100, 0x42)
        self.assertEqual(cm.exception.address, 0x100)
        with self.assertRaises(WriteProtectedError):
            self.mem.write_byte(0x1FF, 0x42)
        self.mem.write_byte(0x200, 0x42)

    def test_write_protection_disabled(self):
        mem = Memory(write_protected=False)
        mem.write_byte(0x100, 0x42)
        self.assertEqual(mem.read_byte(0x100), 0x42)
        self.assertFalse(mem.stats().write_protected)

    def test_protection_defaults_to_setting(self):
        with mock.patch.object(config, "WRITE_PROTECTION", False):
            mem = Memory()
        mem.write_byte(0x100, 0x42)
        self.assertEqual(mem.read_byte(0x100), 0x42)
        with mock.patch.object(config, "WRITE_PROTECTION", True):
            self.assertTrue(Memory().write_protected)

    def test_font_digit_range(self):
        self.assertEqual(self.mem.font_address(0xF), FONT_START_ADDRESS + 75)
        with self.assertRaises(InvalidFontDigitError):
            self.mem.font_address(0x10)

    def test_reset_keeps_font(self):
        self.mem.write_byte(0x300, 0x11)
        self.mem.reset()
        self.assertEqual(self.mem.read_byte(0x300), 0)
        self.assertEqual(self.mem.font_sprite(0), FONT[:5])


class TestRomLoading(unittest.TestCase):
    def test_rom_too_large(self):
        mem = Memory()
        with self.assertRaises(RomTooLargeError):
            mem.load_rom(bytes(MAX_ROM_SIZE + 1))

    def test_rom_fills_working_range(self):
        mem = Memory()
        mem.load_rom(bytes([0xAA]) * 3584)
        self.assertEqual(mem.read_byte(ROM_START_ADDRESS), 0xAA)
        self.assertEqual(mem.read_byte(0xFFF), 0xAA)

    def test_load_from_file(self):
        mem = Memory()
        fd, path = tempfile.mkstemp(suffix=".ch8")
        with os.fdopen(fd, "wb") as f:
            f.write(bytes([0x00, 0xE0, 0x12, 0x00]))
        try:
            self.assertEqual(mem.load_rom_file(path), 4)
        finally:
            os.remove(path)
        self.assertEqual(mem.read_word(0x202), 0x1200)

    def test_missing_and_empty_files(self):
        mem = Memory()
        with self.assertRaises(RomNotFoundError):
            mem.load_rom_file("/nonexistent/rom.ch8")
        fd, path = tempfile.mkstemp(suffix=".ch8")
        os.close(fd)
        try:
            with self.assertRaises(RomEmptyError):
                mem.load_rom_file(path)
        finally:
            os.remove(path)


if __name__ == "__main__":
    unittest.main()
