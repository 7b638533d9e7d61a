# CHIP-8 INFO
# https://chip-8.github.io/extensions/#chip-8
#
# MASTERING CHIP-8
# https://github.com/mattmikolay/chip-8/wiki/Mastering-CHIP%E2%80%908

import logging
import os


# ******************** MACHINE SECTION
MEMORY_SIZE = 4096
INTERPRETER_END_ADDRESS = 0x1FF
FONT_START_ADDRESS = 0x050
ROM_START_ADDRESS = 0x200
MAX_ROM_SIZE = MEMORY_SIZE - ROM_START_ADDRESS

NUM_REGISTERS = 16
FLAG_REGISTER = 0xF
STACK_SIZE = 16
NUM_KEYS = 16

SCREEN_WIDTH = 64
SCREEN_HEIGHT = 32
SPRITE_WIDTH = 8

TIMER_FREQUENCY = 60    # Hz, timers decay at this rate whatever the instruction rate is

# ********** 4x5 HEX DIGIT GLYPHS, ONE ROW PER BYTE
FONT_HEIGHT = 5
FONT = bytes([
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
])

# ********** KEYPAD LAYOUT, KEYBOARD CHARACTER -> CHIP-8 KEY
#   1 2 3 C        1 2 3 4
#   4 5 6 D   <=   Q W E R
#   7 8 9 E        A S D F
#   A 0 B F        Z X C V
KEY_LAYOUT = {
    '1': 0x1, '2': 0x2, '3': 0x3, '4': 0xC,
    'q': 0x4, 'w': 0x5, 'e': 0x6, 'r': 0xD,
    'a': 0x7, 's': 0x8, 'd': 0x9, 'f': 0xE,
    'z': 0xA, 'x': 0x0, 'c': 0xB, 'v': 0xF,
}


# ******************** ENVIRONMENT SECTION
def _env_flag(name, default):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() not in ('0', 'false', 'no', 'off', '')

DEBUG = True if int(os.getenv('DEBUG', 0)) >= 1 else False
WRITE_PROTECTION = _env_flag('CHIP8_WRITE_PROTECTION', True)
PIXEL_ON = os.getenv('CHIP8_PIXEL_ON', '█')
PIXEL_OFF = os.getenv('CHIP8_PIXEL_OFF', ' ')


def configure_logging(level=None):
    """set up the root logger, DEBUG level when the DEBUG env var is set"""
    if level is None:
        level = logging.DEBUG if DEBUG else logging.INFO
    logging.basicConfig(level=level, format="%(name)s: %(message)s")
