"""
CHIP-8 Machine State
Memory, registers, return stack and timers of one virtual machine
"""

from errors import AddressFault, StackOverflow, StackUnderflow, ProgramTooLarge

RAM_SIZE = 0x1000
PROGRAM_START = 0x200
STACK_SIZE = 16
REGISTER_COUNT = 16

FONT_GLYPH_SIZE = 5  # Bytes per hex digit glyph

# Hex digit glyphs 0-F, resident at 0x000
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


class MachineState:
    def __init__(self):
        # Memory
        self.memory = bytearray(RAM_SIZE)
        self.stack = [0] * STACK_SIZE

        # Registers
        self.registers = [0] * REGISTER_COUNT  # V0..VF
        self.I = 0  # Address register
        self.DT = 0  # Delay timer
        self.ST = 0  # Sound timer

        # Pointers
        self.PC = PROGRAM_START  # Program counter
        self.SP = 0  # Number of return addresses on the stack

        # Register index waiting for a key press (Fx0A), or None
        self.halted_on_key = None

        self.reset()

    def reset(self):
        """Zero all state, reinstall the font and point PC at the program area"""
        self.memory[:] = bytes(RAM_SIZE)
        self.memory[:len(FONT)] = FONT
        self.stack[:] = [0] * STACK_SIZE
        self.registers[:] = [0] * REGISTER_COUNT
        self.I = 0
        self.DT = 0
        self.ST = 0
        self.PC = PROGRAM_START
        self.SP = 0
        self.halted_on_key = None

    def load_program(self, program):
        """Copy a program image into memory at 0x200"""
        limit = RAM_SIZE - PROGRAM_START
        if len(program) > limit:
            raise ProgramTooLarge(len(program), limit)
        self.memory[PROGRAM_START:PROGRAM_START + len(program)] = bytes(program)

    def fetch(self):
        """Read the big-endian word at PC and advance PC past it"""
        if self.PC + 2 > RAM_SIZE:
            raise AddressFault(self.PC, "Instruction fetch past end of memory")
        word = (self.memory[self.PC] << 8) | self.memory[self.PC + 1]
        self.PC += 2
        return word

    def push_return(self, addr):
        if self.SP == STACK_SIZE:
            raise StackOverflow(self.PC, "Stack overflow. Too many subroutine calls")
        self.stack[self.SP] = addr
        self.SP += 1

    def pop_return(self):
        if self.SP == 0:
            raise StackUnderflow(self.PC, "Cannot return from outside a subroutine")
        self.SP -= 1
        return self.stack[self.SP]

    def jump(self, addr):
        if not 0 <= addr < RAM_SIZE:
            raise AddressFault(self.PC, f"Jump target 0x{addr:X} outside memory")
        self.PC = addr

    def skip(self):
        """Skip the next instruction; PC is left alone if that would leave memory"""
        if self.PC + 2 >= RAM_SIZE:
            raise AddressFault(self.PC, "Skip past end of memory")
        self.PC += 2

    def check_range(self, start, length):
        """Fault unless memory[start:start + length] lies inside memory"""
        if start < 0 or start + length > RAM_SIZE:
            raise AddressFault(
                self.PC, f"I range 0x{start:X}+{length} outside memory"
            )

    def snapshot(self):
        """Get register state for debugging"""
        state = {f"V{i:X}": value for i, value in enumerate(self.registers)}
        state.update({
            "I": self.I,
            "PC": self.PC,
            "SP": self.SP,
            "DT": self.DT,
            "ST": self.ST,
            "waiting_for_key": self.halted_on_key is not None,
        })
        return state
