import logging
from pathlib import Path
from typing import NamedTuple

from chip8 import config
from chip8.config import (
    FONT, FONT_HEIGHT, FONT_START_ADDRESS, INTERPRETER_END_ADDRESS,
    MAX_ROM_SIZE, MEMORY_SIZE, ROM_START_ADDRESS,
)
from chip8.errors import (
    AddressOutOfBoundsError, InvalidFontDigitError, RomEmptyError,
    RomNotFoundError, RomTooLargeError, WriteProtectedError,
)

log = logging.getLogger(__name__)


class MemoryStats(NamedTuple):
    total_size: int
    font_start: int
    font_size: int
    program_start: int
    max_rom_size: int
    write_protected: bool


# ********** WRAPS A BYTEARRAY TO REPRESENT THE MAIN MEMORY WITH A LIMITED SIZE OF 4KB
class Memory:
    """4KB address space with the hex font preloaded at 0x050.

    Writes below 0x200 are rejected unless ``write_protected`` is False;
    when not given it follows the CHIP8_WRITE_PROTECTION setting.
    """

    def __init__(self, write_protected=None):
        if write_protected is None:
            write_protected = config.WRITE_PROTECTION
        self.inner = bytearray(MEMORY_SIZE)
        self._write_protected = write_protected
        self._load_font()

    def __repr__(self):
        return f"Memory(write_protected={self._write_protected})"

    def _load_font(self):
        # written straight into the buffer, the protection check doesn't apply here
        self.inner[FONT_START_ADDRESS:FONT_START_ADDRESS+len(FONT)] = FONT

    @staticmethod
    def _check_address(address, span=1):
        if address < 0 or address + span > MEMORY_SIZE:
            raise AddressOutOfBoundsError(address, MEMORY_SIZE)

    @property
    def write_protected(self):
        return self._write_protected

    def read_byte(self, address: int) -> int:
        self._check_address(address)
        return self.inner[address]

    def write_byte(self, address: int, value: int) -> None:
        self._check_address(address)
        if self._write_protected and address <= INTERPRETER_END_ADDRESS:
            raise WriteProtectedError(address)
        self.inner[address] = value & 0xFF

    def read_word(self, address: int) -> int:
        """big-endian 16 bit read, used to fetch opcodes"""
        self._check_address(address, span=2)
        return self.inner[address] << 8 | self.inner[address + 1]

    def write_word(self, address: int, value: int) -> None:
        self._check_address(address, span=2)
        self.write_byte(address, (value >> 8) & 0xFF)
        self.write_byte(address + 1, value & 0xFF)

    def load_rom(self, rom: bytes) -> None:
        """copy the ROM bytes to 0x200, nothing else gets reset"""
        if len(rom) > MAX_ROM_SIZE:
            raise RomTooLargeError(len(rom), MAX_ROM_SIZE)
        self.inner[ROM_START_ADDRESS:ROM_START_ADDRESS+len(rom)] = rom
        log.info("loaded a %d byte ROM at 0x%04x", len(rom), ROM_START_ADDRESS)

    def load_rom_file(self, path) -> int:
        """load ROM file from the given path and return its size"""
        rom = read_rom_file(path)
        self.load_rom(rom)
        return len(rom)

    def font_address(self, digit: int) -> int:
        if not 0 <= digit <= 0xF:
            raise InvalidFontDigitError(digit)
        return FONT_START_ADDRESS + digit * FONT_HEIGHT

    def font_sprite(self, digit: int) -> bytes:
        start = self.font_address(digit)
        return bytes(self.inner[start:start+FONT_HEIGHT])

    def reset(self):
        """zero the whole address space and put the font back"""
        self.inner[:] = bytes(MEMORY_SIZE)
        self._load_font()

    def stats(self) -> MemoryStats:
        return MemoryStats(
            total_size=MEMORY_SIZE,
            font_start=FONT_START_ADDRESS,
            font_size=len(FONT),
            program_start=ROM_START_ADDRESS,
            max_rom_size=MAX_ROM_SIZE,
            write_protected=self._write_protected,
        )


def read_rom_file(path) -> bytes:
    """read a ROM from disk, checking it is neither missing, empty nor too large"""
    path = Path(path)
    if not path.is_file():
        raise RomNotFoundError(f"ROM file '{path}' not found")
    rom = path.read_bytes()
    if not rom:
        raise RomEmptyError(f"ROM file '{path}' is empty")
    if len(rom) > MAX_ROM_SIZE:
        raise RomTooLargeError(len(rom), MAX_ROM_SIZE)
    return rom
