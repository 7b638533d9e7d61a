"""Opcode decoding.

``decode`` is the one place where raw opcode bits get interpreted. The CPU
and the disassembler both work on the ``Instruction`` it returns.
"""
import enum
from typing import NamedTuple, Optional

from chip8.errors import UnknownInstructionError


class Op(enum.Enum):
    """every documented CHIP-8 instruction, valued by its opcode pattern with operands zeroed"""
    SYS = 0x0000
    CLS = 0x00E0
    RET = 0x00EE
    JP = 0x1000
    CALL = 0x2000
    SE_BYTE = 0x3000
    SNE_BYTE = 0x4000
    SE_REG = 0x5000
    LD_BYTE = 0x6000
    ADD_BYTE = 0x7000
    LD_REG = 0x8000
    OR = 0x8001
    AND = 0x8002
    XOR = 0x8003
    ADD_REG = 0x8004
    SUB = 0x8005
    SHR = 0x8006
    SUBN = 0x8007
    SHL = 0x800E
    SNE_REG = 0x9000
    LD_I = 0xA000
    JP_V0 = 0xB000
    RND = 0xC000
    DRW = 0xD000
    SKP = 0xE09E
    SKNP = 0xE0A1
    LD_VX_DT = 0xF007
    LD_VX_K = 0xF00A
    LD_DT_VX = 0xF015
    LD_ST_VX = 0xF018
    ADD_I = 0xF01E
    LD_F = 0xF029
    LD_B = 0xF033
    LD_MEM_VX = 0xF055
    LD_VX_MEM = 0xF065


# mask applied to an opcode, per top nibble, to get back its Op pattern
FAMILY_MASKS = {
    0x5: 0xF00F,
    0x8: 0xF00F,
    0x9: 0xF00F,
    0xE: 0xF0FF,
    0xF: 0xF0FF,
}
DEFAULT_MASK = 0xF000

# operand fields carried by each instruction
OPERANDS = {
    Op.SYS: ('nnn',),
    Op.CLS: (),
    Op.RET: (),
    Op.JP: ('nnn',),
    Op.CALL: ('nnn',),
    Op.SE_BYTE: ('x', 'kk'),
    Op.SNE_BYTE: ('x', 'kk'),
    Op.SE_REG: ('x', 'y'),
    Op.LD_BYTE: ('x', 'kk'),
    Op.ADD_BYTE: ('x', 'kk'),
    Op.LD_REG: ('x', 'y'),
    Op.OR: ('x', 'y'),
    Op.AND: ('x', 'y'),
    Op.XOR: ('x', 'y'),
    Op.ADD_REG: ('x', 'y'),
    Op.SUB: ('x', 'y'),
    Op.SHR: ('x', 'y'),
    Op.SUBN: ('x', 'y'),
    Op.SHL: ('x', 'y'),
    Op.SNE_REG: ('x', 'y'),
    Op.LD_I: ('nnn',),
    Op.JP_V0: ('nnn',),
    Op.RND: ('x', 'kk'),
    Op.DRW: ('x', 'y', 'n'),
    Op.SKP: ('x',),
    Op.SKNP: ('x',),
    Op.LD_VX_DT: ('x',),
    Op.LD_VX_K: ('x',),
    Op.LD_DT_VX: ('x',),
    Op.LD_ST_VX: ('x',),
    Op.ADD_I: ('x',),
    Op.LD_F: ('x',),
    Op.LD_B: ('x',),
    Op.LD_MEM_VX: ('x',),
    Op.LD_VX_MEM: ('x',),
}

MNEMONICS = {
    Op.SYS: "SYS {nnn:03X}",
    Op.CLS: "CLS",
    Op.RET: "RET",
    Op.JP: "JP {nnn:03X}",
    Op.CALL: "CALL {nnn:03X}",
    Op.SE_BYTE: "SE V{x:X}, {kk:02X}",
    Op.SNE_BYTE: "SNE V{x:X}, {kk:02X}",
    Op.SE_REG: "SE V{x:X}, V{y:X}",
    Op.LD_BYTE: "LD V{x:X}, {kk:02X}",
    Op.ADD_BYTE: "ADD V{x:X}, {kk:02X}",
    Op.LD_REG: "LD V{x:X}, V{y:X}",
    Op.OR: "OR V{x:X}, V{y:X}",
    Op.AND: "AND V{x:X}, V{y:X}",
    Op.XOR: "XOR V{x:X}, V{y:X}",
    Op.ADD_REG: "ADD V{x:X}, V{y:X}",
    Op.SUB: "SUB V{x:X}, V{y:X}",
    Op.SHR: "SHR V{x:X}",
    Op.SUBN: "SUBN V{x:X}, V{y:X}",
    Op.SHL: "SHL V{x:X}",
    Op.SNE_REG: "SNE V{x:X}, V{y:X}",
    Op.LD_I: "LD I, {nnn:03X}",
    Op.JP_V0: "JP V0, {nnn:03X}",
    Op.RND: "RND V{x:X}, {kk:02X}",
    Op.DRW: "DRW V{x:X}, V{y:X}, {n:X}",
    Op.SKP: "SKP V{x:X}",
    Op.SKNP: "SKNP V{x:X}",
    Op.LD_VX_DT: "LD V{x:X}, DT",
    Op.LD_VX_K: "LD V{x:X}, K",
    Op.LD_DT_VX: "LD DT, V{x:X}",
    Op.LD_ST_VX: "LD ST, V{x:X}",
    Op.ADD_I: "ADD I, V{x:X}",
    Op.LD_F: "LD F, V{x:X}",
    Op.LD_B: "LD B, V{x:X}",
    Op.LD_MEM_VX: "LD [I], V{x:X}",
    Op.LD_VX_MEM: "LD V{x:X}, [I]",
}

SKIPS = frozenset({Op.SE_BYTE, Op.SNE_BYTE, Op.SE_REG, Op.SNE_REG, Op.SKP, Op.SKNP})


class Instruction(NamedTuple):
    """a decoded opcode; operands the instruction doesn't use are None"""
    op: Op
    x: Optional[int] = None
    y: Optional[int] = None
    n: Optional[int] = None
    kk: Optional[int] = None
    nnn: Optional[int] = None

    @property
    def mnemonic(self):
        return MNEMONICS[self.op].format(**self._asdict())

    @property
    def is_skip(self):
        return self.op in SKIPS

    def __str__(self):
        return self.mnemonic


def _pattern(opcode):
    family = opcode >> 12
    if family == 0x0:
        # anything in 0nnn other than CLS/RET is a machine code call (SYS)
        return opcode if opcode in (Op.CLS.value, Op.RET.value) else Op.SYS.value
    return opcode & FAMILY_MASKS.get(family, DEFAULT_MASK)


def decode(opcode: int) -> Instruction:
    """decode a 16 bit opcode, raise UnknownInstructionError if it isn't documented"""
    if not 0 <= opcode <= 0xFFFF:
        raise UnknownInstructionError(opcode)
    try:
        op = Op(_pattern(opcode))
    except ValueError:
        raise UnknownInstructionError(opcode) from None
    fields = {
        'x': (opcode & 0x0F00) >> 8,
        'y': (opcode & 0x00F0) >> 4,
        'n': opcode & 0x000F,
        'kk': opcode & 0x00FF,
        'nnn': opcode & 0x0FFF,
    }
    return Instruction(op, **{name: fields[name] for name in OPERANDS[op]})
