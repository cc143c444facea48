"""
CHIP-8 CPU
Fetches, decodes and executes instructions against a MachineState.
Drawing and key queries go through an injected Display/Input object.
"""

import random

from config import merge_quirks
from decoder import decode
from errors import Chip8Fault, UnknownOpcode
from state import FONT_GLYPH_SIZE
from utils import debug_print, format_word


class CPU:
    def __init__(self, state, io, quirks=None, rng=None):
        self.state = state
        self.io = io  # clear_screen / draw_sprite / is_key_down / poll_any_key_down
        self.quirks = merge_quirks(quirks)
        self.rng = rng if rng is not None else random.Random()

        self.instructions_executed = 0

        # Mnemonic -> handler
        self.instruction_dispatch = {
            "CLS": self.execute_cls,
            "RET": self.execute_ret,
            "JP": self.execute_jp,
            "CALL": self.execute_call,
            "SE": self.execute_se,
            "SNE": self.execute_sne,
            "SE_REG": self.execute_se_reg,
            "LD": self.execute_ld,
            "ADD": self.execute_add,
            "LD_REG": self.execute_ld_reg,
            "OR": self.execute_or,
            "AND": self.execute_and,
            "XOR": self.execute_xor,
            "ADD_REG": self.execute_add_reg,
            "SUB": self.execute_sub,
            "SHR": self.execute_shr,
            "SUBN": self.execute_subn,
            "SHL": self.execute_shl,
            "SNE_REG": self.execute_sne_reg,
            "LD_I": self.execute_ld_i,
            "JP_V0": self.execute_jp_v0,
            "RND": self.execute_rnd,
            "DRW": self.execute_drw,
            "SKP": self.execute_skp,
            "SKNP": self.execute_sknp,
            "LD_VX_DT": self.execute_ld_vx_dt,
            "LD_VX_K": self.execute_ld_vx_k,
            "LD_DT": self.execute_ld_dt,
            "LD_ST": self.execute_ld_st,
            "ADD_I": self.execute_add_i,
            "LD_F": self.execute_ld_f,
            "LD_B": self.execute_ld_b,
            "LD_MEM": self.execute_ld_mem,
            "LD_REGS": self.execute_ld_regs,
        }

    @property
    def waiting_for_key(self):
        return self.state.halted_on_key is not None

    def step(self):
        """Run one instruction, or poll the keypad while halted on Fx0A.
        Returns the executed Operation, or None if no instruction ran.
        """
        if self.waiting_for_key:
            self.wait_for_key()
            return None

        pc = self.state.PC
        word = self.state.fetch()
        op = decode(word)
        debug_print(f"CPU: {pc:03X}  {format_word(word)}  {op.disassemble()}")

        try:
            self.execute(op)
        except Chip8Fault as fault:
            # Report the faulting instruction, not the already advanced PC
            fault.address = pc
            fault.word = word
            raise

        self.instructions_executed += 1
        return op

    def execute(self, op):
        """Apply a decoded operation; PC must already point past it"""
        if op.is_unknown:
            raise UnknownOpcode(self.state.PC, "Invalid instruction", op.word)
        self.instruction_dispatch[op.name](op)

    def wait_for_key(self):
        key = self.io.poll_any_key_down()
        if key is None:
            return
        target = self.state.halted_on_key
        self.state.registers[target] = key & 0xF
        self.state.halted_on_key = None
        debug_print(f"CPU: Key {key:X} stored in V{target:X}, resuming")

    # ------------------------ Flow control ------------------------

    def execute_cls(self, op):
        self.io.clear_screen()

    def execute_ret(self, op):
        self.state.PC = self.state.pop_return()

    def execute_jp(self, op):
        self.state.jump(op.addr)

    def execute_call(self, op):
        self.state.push_return(self.state.PC)
        self.state.jump(op.addr)

    def execute_jp_v0(self, op):
        self.state.jump(op.addr + self.state.registers[0])

    def execute_se(self, op):
        if self.state.registers[op.x] == op.kk:
            self.state.skip()

    def execute_sne(self, op):
        if self.state.registers[op.x] != op.kk:
            self.state.skip()

    def execute_se_reg(self, op):
        regs = self.state.registers
        if regs[op.x] == regs[op.y]:
            self.state.skip()

    def execute_sne_reg(self, op):
        regs = self.state.registers
        if regs[op.x] != regs[op.y]:
            self.state.skip()

    def execute_skp(self, op):
        if self.io.is_key_down(self.state.registers[op.x]):
            self.state.skip()

    def execute_sknp(self, op):
        if not self.io.is_key_down(self.state.registers[op.x]):
            self.state.skip()

    # ------------------------ Registers / ALU ------------------------

    def execute_ld(self, op):
        self.state.registers[op.x] = op.kk

    def execute_add(self, op):
        regs = self.state.registers
        regs[op.x] = (regs[op.x] + op.kk) & 0xFF

    def execute_ld_reg(self, op):
        regs = self.state.registers
        regs[op.x] = regs[op.y]

    def execute_or(self, op):
        regs = self.state.registers
        regs[op.x] |= regs[op.y]

    def execute_and(self, op):
        regs = self.state.registers
        regs[op.x] &= regs[op.y]

    def execute_xor(self, op):
        regs = self.state.registers
        regs[op.x] ^= regs[op.y]

    # Flag-setting instructions write VF last, so VF as destination keeps the flag

    def execute_add_reg(self, op):
        regs = self.state.registers
        total = regs[op.x] + regs[op.y]
        regs[op.x] = total & 0xFF
        regs[0xF] = 1 if total > 0xFF else 0

    def execute_sub(self, op):
        regs = self.state.registers
        vx, vy = regs[op.x], regs[op.y]
        regs[op.x] = (vx - vy) & 0xFF
        regs[0xF] = 1 if vx >= vy else 0

    def execute_subn(self, op):
        regs = self.state.registers
        vx, vy = regs[op.x], regs[op.y]
        regs[op.x] = (vy - vx) & 0xFF
        regs[0xF] = 1 if vy >= vx else 0

    def execute_shr(self, op):
        regs = self.state.registers
        source = regs[op.y] if self.quirks["shift_uses_vy"] else regs[op.x]
        regs[op.x] = source >> 1
        regs[0xF] = source & 1

    def execute_shl(self, op):
        regs = self.state.registers
        source = regs[op.y] if self.quirks["shift_uses_vy"] else regs[op.x]
        regs[op.x] = (source << 1) & 0xFF
        regs[0xF] = (source >> 7) & 1

    def execute_rnd(self, op):
        self.state.registers[op.x] = self.rng.randrange(256) & op.kk

    # ------------------------ Memory / I ------------------------

    def execute_ld_i(self, op):
        self.state.I = op.addr

    def execute_add_i(self, op):
        state = self.state
        target = state.I + state.registers[op.x]
        state.check_range(target, 0)
        state.I = target

    def execute_ld_f(self, op):
        self.state.I = self.state.registers[op.x] * FONT_GLYPH_SIZE

    def execute_ld_b(self, op):
        state = self.state
        state.check_range(state.I, 3)
        value = state.registers[op.x]
        state.memory[state.I] = value // 100
        state.memory[state.I + 1] = (value // 10) % 10
        state.memory[state.I + 2] = value % 10

    def execute_ld_mem(self, op):
        state = self.state
        state.check_range(state.I, op.x + 1)
        for i in range(op.x + 1):
            state.memory[state.I + i] = state.registers[i]

    def execute_ld_regs(self, op):
        state = self.state
        state.check_range(state.I, op.x + 1)
        for i in range(op.x + 1):
            state.registers[i] = state.memory[state.I + i]

    def execute_drw(self, op):
        state = self.state
        state.check_range(state.I, op.n)
        rows = bytes(state.memory[state.I:state.I + op.n])
        collision = self.io.draw_sprite(state.registers[op.x], state.registers[op.y], rows)
        state.registers[0xF] = 1 if collision else 0

    # ------------------------ Timers / keypad ------------------------

    def execute_ld_vx_dt(self, op):
        self.state.registers[op.x] = self.state.DT

    def execute_ld_dt(self, op):
        self.state.DT = self.state.registers[op.x]

    def execute_ld_st(self, op):
        self.state.ST = self.state.registers[op.x]

    def execute_ld_vx_k(self, op):
        # Presses made before the halt do not release it
        while self.io.poll_any_key_down() is not None:
            pass
        self.state.halted_on_key = op.x
        debug_print(f"CPU: Waiting for key press into V{op.x:X}")

