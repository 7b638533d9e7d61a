"""CHIP-8 virtual machine core: memory, display, keypad, decoder and CPU."""
from chip8.cpu import CPU, RUNNING, CpuState, Stack
from chip8.display import Display
from chip8.emulator import Emulator
from chip8.errors import *  # noqa: F401,F403
from chip8.instruction import Instruction, Op, decode
from chip8.keypad import HeadlessBackend, KeyEvent, Keypad, KeypadBackend, ScriptedBackend
from chip8.memory import Memory

__version__ = "0.1.0"
