"""
Main CHIP-8 Emulator Class
Coordinates the machine state, CPU, timers and display/keypad
"""

from config import TIMING, merge_quirks
from cpu import CPU
from display import Display
from errors import ProgramTooLarge
from state import PROGRAM_START, RAM_SIZE, MachineState
from timers import Timers
from utils import debug_print


class Chip8:
    def __init__(self, quirks=None, rng=None, timer_hz=None):
        self.quirks = merge_quirks(quirks)

        # Initialize components
        self.state = MachineState()
        self.display = Display(lsb_left=self.quirks["sprite_lsb_left"])
        self.cpu = CPU(self.state, self.display, quirks=self.quirks, rng=rng)
        self.timers = Timers(self.state, hz=timer_hz or TIMING["timer_hz"])

        self.program = b""  # Last loaded program image, reinstalled on reset
        self.frames = 0

    def load_rom(self, rom_path: str):
        """Read a program file and load it at 0x200.
        Raises OSError if the file cannot be read, ProgramTooLarge if it does not fit.
        """
        with open(rom_path, "rb") as f:
            program = f.read()
        self.load_bytes(program)
        debug_print(f"CHIP8: Program '{rom_path}' loaded ({len(program)} bytes)")

    def load_bytes(self, program):
        """Reset the machine and install a program image"""
        program = bytes(program)
        limit = RAM_SIZE - PROGRAM_START
        if len(program) > limit:
            raise ProgramTooLarge(len(program), limit)
        self.program = program
        self.reset()

    def reset(self):
        """Power-on reset; the loaded program stays resident"""
        self.state.reset()
        self.state.load_program(self.program)
        self.display.reset()
        self.timers.reset()
        self.cpu.instructions_executed = 0
        self.frames = 0
        debug_print(f"CHIP8: Reset complete, PC=0x{self.state.PC:03X}")

    @property
    def waiting_for_key(self):
        return self.cpu.waiting_for_key

    def step(self, elapsed_ms=0.0):
        """One driver tick: advance timers, then run one instruction or poll the keypad.
        Faults propagate to the caller.
        """
        self.timers.update(elapsed_ms)
        return self.cpu.step()

    def step_frame(self, elapsed_ms=None, instructions=None):
        """Run one frame worth of instructions; timers see the frame's elapsed time once"""
        if elapsed_ms is None:
            elapsed_ms = 1000.0 / TIMING["target_fps"]
        if instructions is None:
            instructions = TIMING["instructions_per_frame"]

        self.timers.update(elapsed_ms)
        for _ in range(instructions):
            self.step()
        self.frames += 1
        return self.display.screen

    def set_keys(self, codes):
        """Set keypad state from the front end: codes currently held"""
        self.display.set_keys(codes)

    def get_screen(self):
        return self.display.screen

    @property
    def sound_active(self):
        return self.timers.sound_active

    def get_cpu_state(self):
        """Get CPU state for debugging"""
        snapshot = self.state.snapshot()
        snapshot["instructions"] = self.cpu.instructions_executed
        snapshot["frames"] = self.frames
        return snapshot
