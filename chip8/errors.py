"""Exceptions raised by the CHIP-8 core.

Each error also derives from the builtin it most resembles, so callers
that only know about ``IndexError`` or ``ValueError`` still catch them.
"""


class Chip8Error(Exception):
    pass


# ******************** MEMORY
class MemoryAccessError(Chip8Error):
    pass


class AddressOutOfBoundsError(MemoryAccessError, IndexError):
    def __init__(self, address, limit):
        self.address = address
        self.limit = limit
        super().__init__(f"Address 0x{address:04x} is out of bounds (max: 0x{limit - 1:04x})")


class WriteProtectedError(MemoryAccessError):
    def __init__(self, address):
        self.address = address
        super().__init__(f"Cannot write to interpreter area at 0x{address:04x} (write protection enabled)")


class RomTooLargeError(MemoryAccessError, ValueError):
    def __init__(self, size, max_size):
        self.size = size
        self.max_size = max_size
        super().__init__(f"ROM too large: {size} bytes (max: {max_size} bytes)")


class RomEmptyError(MemoryAccessError, ValueError):
    pass


class RomNotFoundError(MemoryAccessError, FileNotFoundError):
    pass


class InvalidFontDigitError(MemoryAccessError, ValueError):
    def __init__(self, digit):
        self.digit = digit
        super().__init__(f"Invalid font digit: {digit} (must be 0-15)")


# ******************** DECODER
class DecodeError(Chip8Error):
    pass


class UnknownInstructionError(DecodeError):
    def __init__(self, opcode):
        self.opcode = opcode
        super().__init__(f"Unknown instruction: 0x{opcode:04x}")


# ******************** CPU
class CpuError(Chip8Error):
    pass


class StackOverflowError(CpuError, IndexError):
    def __init__(self, max_depth):
        self.max_depth = max_depth
        super().__init__(f"The CHIP-8 stack can contain at most {max_depth} addresses. Limit exceeded")


class StackUnderflowError(CpuError, IndexError):
    def __init__(self):
        super().__init__("Cannot return from subroutine, the stack is empty")


class InvalidRegisterError(CpuError, IndexError):
    def __init__(self, register):
        self.register = register
        super().__init__(f"Invalid register index: {register} (must be 0-15)")


class ExecutionError(CpuError):
    """A fetch/decode/execute fault, tagged with where it happened.

    ``opcode`` is None when the fetch itself failed. The underlying error
    is available as ``__cause__``.
    """

    def __init__(self, opcode, address, reason):
        self.opcode = opcode
        self.address = address
        self.reason = reason
        what = "fetch" if opcode is None else f"instruction 0x{opcode:04x}"
        super().__init__(f"{what} at 0x{address:04x} failed: {reason}")


# ******************** INPUT
class InputError(Chip8Error):
    pass


class InvalidKeyError(InputError, ValueError):
    def __init__(self, key):
        self.key = key
        super().__init__(f"Invalid key value: {key} (must be 0-15)")


class InputBackendError(InputError):
    pass
