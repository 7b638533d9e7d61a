from collections import Counter
from typing import List, NamedTuple

from chip8.config import MEMORY_SIZE, ROM_START_ADDRESS
from chip8.errors import DecodeError
from chip8.instruction import Instruction, decode


class DisassembledInstruction(NamedTuple):
    address: int
    opcode: int
    instruction: Instruction

    def __str__(self):
        return f"{self.address:04X}     {self.opcode:04X}    {self.instruction.mnemonic}"


def disassemble(memory, start=ROM_START_ADDRESS, end=MEMORY_SIZE) -> List[DisassembledInstruction]:
    """linear sweep from ``start``, two bytes at a time

    Stops at the first 0x0000 word or the first word that doesn't decode,
    which is usually where the code ends and sprite data begins.
    """
    listing = []
    address = start
    while address + 1 < end:
        opcode = memory.read_word(address)
        if opcode == 0x0000:
            break
        try:
            instruction = decode(opcode)
        except DecodeError:
            break
        listing.append(DisassembledInstruction(address, opcode, instruction))
        address += 2
    return listing


def format_listing(listing):
    lines = ["Address  Opcode  Mnemonic", "------------------------"]
    lines.extend(str(entry) for entry in listing)
    return "\n".join(lines)


def instruction_usage(listing):
    """how many times each Op shows up in the listing"""
    return Counter(entry.instruction.op for entry in listing)
