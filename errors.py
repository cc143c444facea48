"""
CHIP-8 fault types
Raised by the machine state and the CPU, handled by the driver
"""

from utils import format_word


class Chip8Error(Exception):
    """Base class for everything the virtual machine raises"""


class Chip8Fault(Chip8Error):
    """An instruction could not complete; the machine state is not safe to continue"""

    def __init__(self, address, msg, word=None):
        super().__init__(msg)
        self.address = address
        self.word = word
        self.msg = msg

    def __str__(self) -> str:
        if self.word is None:
            return "$%03X: %s" % (self.address, self.msg)
        return "$%03X [%s]: %s" % (self.address, format_word(self.word), self.msg)


class AddressFault(Chip8Fault):
    """PC or I would reference memory outside the address space"""


class StackOverflow(Chip8Fault):
    """CALL with all 16 return slots in use"""


class StackUnderflow(Chip8Fault):
    """RET outside of any subroutine"""


class UnknownOpcode(Chip8Fault):
    """The fetched word is not a CHIP-8 instruction"""


class ProgramTooLarge(Chip8Error):
    def __init__(self, size, limit):
        self.size = size
        self.limit = limit
        super().__init__(f"Program is {size} bytes, at most {limit} fit in memory")
