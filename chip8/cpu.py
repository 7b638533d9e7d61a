import logging
import random
from typing import NamedTuple, Optional

from chip8.bus import DisplayBus, InputBus, MemoryBus
from chip8.config import (
    FLAG_REGISTER, FONT_HEIGHT, FONT_START_ADDRESS, MEMORY_SIZE, NUM_REGISTERS,
    ROM_START_ADDRESS, STACK_SIZE,
)
from chip8.errors import (
    AddressOutOfBoundsError, Chip8Error, ExecutionError, InvalidRegisterError,
    StackOverflowError, StackUnderflowError,
)
from chip8.instruction import Instruction, Op, decode

log = logging.getLogger(__name__)


# ********** WRAPS A LIST TO REPRESENT A STACK WITH A LIMITED SIZE OF 16 ADDRESSES
class Stack:
    def __init__(self, size=STACK_SIZE):
        self.addr_list = []
        self.max_size = size

    def __len__(self):
        return len(self.addr_list)

    def __repr__(self):
        return "[" + ", ".join(f"0x{a:04x}" for a in self.addr_list) + "]"

    def append(self, address):
        if len(self.addr_list) >= self.max_size:
            raise StackOverflowError(self.max_size)
        self.addr_list.append(address)

    def pop(self):
        if not self.addr_list:
            raise StackUnderflowError()
        return self.addr_list.pop()

    def clear(self):
        self.addr_list.clear()


class CpuState(NamedTuple):
    """RUNNING, or blocked on LD Vx, K until a key shows up for ``waiting_for``"""
    waiting_for: Optional[int] = None

    @classmethod
    def waiting(cls, register):
        return cls(register)

    @property
    def is_waiting(self):
        return self.waiting_for is not None

    def __str__(self):
        return f"WAITING_FOR_KEY(V{self.waiting_for:X})" if self.is_waiting else "RUNNING"


RUNNING = CpuState()


# ******************** CPU SECTION
class CPU:
    """CHIP-8 register file, stack, timers and the fetch/decode/execute cycle.

    Memory, display and keypad are not owned by the CPU: ``step`` borrows
    them for the length of one cycle. Timers only move when ``tick_timers``
    is called, however many cycles run in between.
    """

    def __init__(self, rng=None):
        self.rng = rng if rng is not None else random.Random()
        self.stack = Stack()
        self.v_regs = [0] * NUM_REGISTERS
        self.pc = ROM_START_ADDRESS
        self.idx = 0    # specify where the sprites reside in memory
        self.dt = 0     # delay timer, active when non-zero
        self.st = 0     # sound timer, active when non-zero
        self.state = RUNNING
        self.draw = False
        self.mem = self.screen = self.keypad = None
        self.instructions = {
            Op.SYS: self._sys,
            Op.CLS: self._clear_screen,
            Op.RET: self._return,
            Op.JP: self._jump,
            Op.CALL: self._call_addr,
            Op.SE_BYTE: self._skip_if_eq,
            Op.SNE_BYTE: self._skip_if_not_eq,
            Op.SE_REG: self._skip_if_eq_regs,
            Op.LD_BYTE: self._set_vk,
            Op.ADD_BYTE: self._add_to_vk,
            Op.LD_REG: self._set_vx_to_vy,
            Op.OR: self._set_vx_or_vy,
            Op.AND: self._set_vx_and_vy,
            Op.XOR: self._set_vx_xor_vy,
            Op.ADD_REG: self._add_vx_vy,
            Op.SUB: self._sub_vx_vy,
            Op.SHR: self._shr,
            Op.SUBN: self._subn_vx_vy,
            Op.SHL: self._shl,
            Op.SNE_REG: self._skip_if_not_eq_regs,
            Op.LD_I: self._set_idx,
            Op.JP_V0: self._jump_plus,
            Op.RND: self._random_byte_and,
            Op.DRW: self._to_screen,
            Op.SKP: self._skip_if_pressed,
            Op.SKNP: self._skip_if_not_pressed,
            Op.LD_VX_DT: self._set_vx_dt,
            Op.LD_VX_K: self._wait_keypress,
            Op.LD_DT_VX: self._set_dt_vx,
            Op.LD_ST_VX: self._set_st,
            Op.ADD_I: self._add_to_idx,
            Op.LD_F: self._select_char,
            Op.LD_B: self._bcd_repr,
            Op.LD_MEM_VX: self._store_vregs,
            Op.LD_VX_MEM: self._load_vregs,
        }

    def __str__(self):
        registers = f"PC_REGISTER:0x{self.pc:04x} | IDX_REGISTER:0x{self.idx:04x} | VARIABLE_REGISTERS:{self.v_regs}"
        timers = f"DT:{self.dt} | ST:{self.st}"
        stack = f"STACK:{self.stack}"
        return f"{registers}\n{timers}\n{stack}\nSTATE:{self.state}"

    # ******************** CYCLE
    def step(self, memory: MemoryBus, display: DisplayBus, keypad: InputBus) -> None:
        """run one machine cycle: fetch, decode and execute, or poll while waiting for a key"""
        self.draw = False
        if self.state.is_waiting:
            self._poll_keypad(keypad)
            return
        self.mem, self.screen, self.keypad = memory, display, keypad
        address, opcode = self.pc, None
        try:
            # fetch (each instruction is two bytes long)
            opcode = self.mem.read_word(self.pc)
            self._goto_next_instruction()
            instruction = decode(opcode)
            if log.isEnabledFor(logging.DEBUG):
                log.debug("mem_addr: 0x%04x    instruction: %s", address, instruction.mnemonic)
            self.execute(instruction)
        except Chip8Error as e:
            raise ExecutionError(opcode, address, e) from e
        finally:
            self.mem = self.screen = self.keypad = None

    def execute(self, instruction: Instruction) -> None:
        self.instructions[instruction.op](instruction)

    def _poll_keypad(self, keypad):
        # no fetch while blocked, memory isn't touched at all
        key = keypad.try_get_key_press()
        if key is None:
            return
        self.v_regs[self.state.waiting_for] = key & 0xF
        self.state = RUNNING

    def tick_timers(self) -> None:
        """decrement delay/sound timers, meant to be called at 60Hz"""
        if self.dt > 0:
            self.dt -= 1
        if self.st > 0:
            self.st -= 1

    def reset(self):
        self.stack.clear()
        self.v_regs = [0] * NUM_REGISTERS
        self.pc = ROM_START_ADDRESS
        self.idx = 0
        self.dt = self.st = 0
        self.state = RUNNING
        self.draw = False

    # ******************** ACCESSORS
    @property
    def sp(self):
        return len(self.stack)

    @property
    def should_beep(self):
        return self.st > 0

    def get_register(self, register):
        if not 0 <= register < NUM_REGISTERS:
            raise InvalidRegisterError(register)
        return self.v_regs[register]

    def set_register(self, register, value):
        if not 0 <= register < NUM_REGISTERS:
            raise InvalidRegisterError(register)
        self.v_regs[register] = value & 0xFF

    def _goto_next_instruction(self):
        self.pc += 0x2

    def _set_flag(self, value):
        self.v_regs[FLAG_REGISTER] = value

    def _check_idx_span(self, count):
        # the whole block must fit before any byte moves
        if self.idx + count > MEMORY_SIZE:
            raise AddressOutOfBoundsError(self.idx, MEMORY_SIZE)

    # ******************** FLOW CONTROL
    def _sys(self, ins):
        """jump to a machine code routine at nnn, ignored by modern interpreters"""

    def _clear_screen(self, ins):
        self.screen.clear()
        self.draw = True

    def _return(self, ins):
        """return from a subroutine"""
        self.pc = self.stack.pop()

    def _jump(self, ins):
        self.pc = ins.nnn

    def _call_addr(self, ins):
        # pc already points past the CALL
        self.stack.append(self.pc)
        self.pc = ins.nnn

    def _jump_plus(self, ins):
        self.pc = ins.nnn + self.v_regs[0x0]

    def _skip_if_eq(self, ins):
        if self.v_regs[ins.x] == ins.kk:
            self._goto_next_instruction()

    def _skip_if_not_eq(self, ins):
        if self.v_regs[ins.x] != ins.kk:
            self._goto_next_instruction()

    def _skip_if_eq_regs(self, ins):
        if self.v_regs[ins.x] == self.v_regs[ins.y]:
            self._goto_next_instruction()

    def _skip_if_not_eq_regs(self, ins):
        if self.v_regs[ins.x] != self.v_regs[ins.y]:
            self._goto_next_instruction()

    # ******************** REGISTERS AND ARITHMETIC
    def _set_vk(self, ins):
        """set the value of one of the 16 variable registers, Vx"""
        self.v_regs[ins.x] = ins.kk

    def _add_to_vk(self, ins):
        """add to Vx, wrapping around, VF is left untouched"""
        self.v_regs[ins.x] = (self.v_regs[ins.x] + ins.kk) & 0xFF

    def _set_vx_to_vy(self, ins):
        self.v_regs[ins.x] = self.v_regs[ins.y]

    def _set_vx_or_vy(self, ins):
        self.v_regs[ins.x] |= self.v_regs[ins.y]

    def _set_vx_and_vy(self, ins):
        self.v_regs[ins.x] &= self.v_regs[ins.y]

    def _set_vx_xor_vy(self, ins):
        self.v_regs[ins.x] ^= self.v_regs[ins.y]

    def _add_vx_vy(self, ins):
        """set Vx = Vx + Vy, VF = carry"""
        total = self.v_regs[ins.x] + self.v_regs[ins.y]
        self.v_regs[ins.x] = total & 0xFF     # keep only the lowest 8 bits from the result
        self._set_flag(1 if total > 0xFF else 0)

    def _sub_vx_vy(self, ins):
        """set Vx = Vx - Vy, VF = NOT borrow"""
        vx, vy = self.v_regs[ins.x], self.v_regs[ins.y]
        self.v_regs[ins.x] = (vx - vy) & 0xFF
        self._set_flag(1 if vx >= vy else 0)

    def _subn_vx_vy(self, ins):
        """set Vx = Vy - Vx, VF = NOT borrow"""
        vx, vy = self.v_regs[ins.x], self.v_regs[ins.y]
        self.v_regs[ins.x] = (vy - vx) & 0xFF
        self._set_flag(1 if vy >= vx else 0)

    def _shr(self, ins):
        """set Vx = Vx SHR 1, VF = the bit shifted out"""
        lsb = self.v_regs[ins.x] & 0x1
        self.v_regs[ins.x] >>= 1
        self._set_flag(lsb)

    def _shl(self, ins):
        """set Vx = Vx SHL 1, VF = the bit shifted out"""
        msb = (self.v_regs[ins.x] & 0x80) >> 7
        self.v_regs[ins.x] = (self.v_regs[ins.x] << 1) & 0xFF
        self._set_flag(msb)

    def _random_byte_and(self, ins):
        self.v_regs[ins.x] = self.rng.randint(0, 255) & ins.kk

    # ******************** INDEX REGISTER AND MEMORY
    def _set_idx(self, ins):
        self.idx = ins.nnn

    def _add_to_idx(self, ins):
        """set I = I + Vx"""
        self.idx = (self.idx + self.v_regs[ins.x]) & 0xFFFF

    def _select_char(self, ins):
        """set I to location of sprite for digit Vx"""
        self.idx = FONT_START_ADDRESS + (self.v_regs[ins.x] & 0xF) * FONT_HEIGHT    # each character font is made of 5 bytes

    def _bcd_repr(self, ins):
        """hundreds digit of Vx at I, the tens digit at I+1, the ones digit at I+2"""
        value = self.v_regs[ins.x]
        self._check_idx_span(3)
        for offset, digit in enumerate((value // 100, value // 10 % 10, value % 10)):
            self.mem.write_byte(self.idx + offset, digit)

    def _store_vregs(self, ins):
        """store registers V0 through Vx (included) in memory starting at location I"""
        self._check_idx_span(ins.x + 1)
        for offset in range(ins.x + 1):
            self.mem.write_byte(self.idx + offset, self.v_regs[offset])

    def _load_vregs(self, ins):
        """read registers V0 through Vx (included) from memory starting at location I"""
        self._check_idx_span(ins.x + 1)
        for offset in range(ins.x + 1):
            self.v_regs[offset] = self.mem.read_byte(self.idx + offset)

    # ******************** TIMERS
    def _set_vx_dt(self, ins):
        self.v_regs[ins.x] = self.dt

    def _set_dt_vx(self, ins):
        self.dt = self.v_regs[ins.x]

    def _set_st(self, ins):
        self.st = self.v_regs[ins.x]

    # ******************** DISPLAY
    def _to_screen(self, ins):
        """display n-byte sprite starting at memory location I at (Vx, Vy), set VF = collision"""
        sprite = bytes(self.mem.read_byte(self.idx + i) for i in range(ins.n))
        collision = self.screen.draw_sprite(self.v_regs[ins.x], self.v_regs[ins.y], sprite)
        self._set_flag(1 if collision else 0)
        self.draw = True

    # ******************** INPUT
    def _skip_if_pressed(self, ins):
        """skip the following instruction if the key in the low nibble of Vx is held down"""
        if self.keypad.is_key_down(self.v_regs[ins.x] & 0xF):
            self._goto_next_instruction()

    def _skip_if_not_pressed(self, ins):
        if not self.keypad.is_key_down(self.v_regs[ins.x] & 0xF):
            self._goto_next_instruction()

    def _wait_keypress(self, ins):
        """wait for a key press and store its value in Vx"""
        key = self.keypad.try_get_key_press()
        if key is None:
            # pc already points at the next instruction, stay put until a key arrives
            self.state = CpuState.waiting(ins.x)
        else:
            self.v_regs[ins.x] = key & 0xF
