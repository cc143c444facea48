"""
CHIP-8 Instruction Decoder
Turns 16-bit instruction words into Operation descriptors
"""

from collections import namedtuple

from utils import format_word

# Families identified by the high nibble alone
FAMILY_OPS = {
    0x1: "JP",
    0x2: "CALL",
    0x3: "SE",
    0x4: "SNE",
    0x6: "LD",
    0x7: "ADD",
    0xA: "LD_I",
    0xB: "JP_V0",
    0xC: "RND",
    0xD: "DRW",
}

# 0x0 family, full word
SYSTEM_OPS = {
    0x00E0: "CLS",
    0x00EE: "RET",
}

# 0x8 family, low nibble
ALU_OPS = {
    0x0: "LD_REG",
    0x1: "OR",
    0x2: "AND",
    0x3: "XOR",
    0x4: "ADD_REG",
    0x5: "SUB",
    0x6: "SHR",
    0x7: "SUBN",
    0xE: "SHL",
}

# 0xE family, low byte
KEY_OPS = {
    0x9E: "SKP",
    0xA1: "SKNP",
}

# 0xF family, low byte
MISC_OPS = {
    0x07: "LD_VX_DT",
    0x0A: "LD_VX_K",
    0x15: "LD_DT",
    0x18: "LD_ST",
    0x1E: "ADD_I",
    0x29: "LD_F",
    0x33: "LD_B",
    0x55: "LD_MEM",
    0x65: "LD_REGS",
}

# 0x5 / 0x9 families, only valid with a zero low nibble
REGISTER_SKIP_OPS = {
    0x5: "SE_REG",
    0x9: "SNE_REG",
}

# Assembly text for each mnemonic
ASSEMBLY = {
    "CLS": "CLS",
    "RET": "RET",
    "JP": "JP {addr}",
    "CALL": "CALL {addr}",
    "SE": "SE V{x}, {kk}",
    "SNE": "SNE V{x}, {kk}",
    "SE_REG": "SE V{x}, V{y}",
    "LD": "LD V{x}, {kk}",
    "ADD": "ADD V{x}, {kk}",
    "LD_REG": "LD V{x}, V{y}",
    "OR": "OR V{x}, V{y}",
    "AND": "AND V{x}, V{y}",
    "XOR": "XOR V{x}, V{y}",
    "ADD_REG": "ADD V{x}, V{y}",
    "SUB": "SUB V{x}, V{y}",
    "SHR": "SHR V{x}",
    "SUBN": "SUBN V{x}, V{y}",
    "SHL": "SHL V{x}",
    "SNE_REG": "SNE V{x}, V{y}",
    "LD_I": "LD I, {addr}",
    "JP_V0": "JP V0, {addr}",
    "RND": "RND V{x}, {kk}",
    "DRW": "DRW V{x}, V{y}, {n}",
    "SKP": "SKP V{x}",
    "SKNP": "SKNP V{x}",
    "LD_VX_DT": "LD V{x}, DT",
    "LD_VX_K": "LD V{x}, K",
    "LD_DT": "LD DT, V{x}",
    "LD_ST": "LD ST, V{x}",
    "ADD_I": "ADD I, V{x}",
    "LD_F": "LD F, V{x}",
    "LD_B": "LD B, V{x}",
    "LD_MEM": "LD [I], V{x}",
    "LD_REGS": "LD V{x}, [I]",
}

# Every mnemonic decode() can produce besides UNKNOWN
MNEMONICS = frozenset(ASSEMBLY)

UNKNOWN = "UNKNOWN"


class Operation(namedtuple("Operation", ["name", "word", "x", "y", "n", "kk", "addr"])):
    """A decoded instruction and all of its operand fields"""

    __slots__ = ()

    @property
    def is_unknown(self):
        return self.name == UNKNOWN

    def disassemble(self):
        """Render the operation as assembly text"""
        if self.is_unknown:
            return f".word {format_word(self.word)}"
        return ASSEMBLY[self.name].format(
            x=f"{self.x:X}",
            y=f"{self.y:X}",
            n=self.n,
            kk=f"0x{self.kk:02X}",
            addr=f"0x{self.addr:03X}",
        )


def decode(word):
    """Decode one instruction word; unrecognised words decode to UNKNOWN"""
    word &= 0xFFFF
    family = word >> 12
    x = (word >> 8) & 0xF
    y = (word >> 4) & 0xF
    n = word & 0xF
    kk = word & 0xFF
    addr = word & 0xFFF

    if family == 0x0:
        name = SYSTEM_OPS.get(word, UNKNOWN)
    elif family == 0x8:
        name = ALU_OPS.get(n, UNKNOWN)
    elif family == 0xE:
        name = KEY_OPS.get(kk, UNKNOWN)
    elif family == 0xF:
        name = MISC_OPS.get(kk, UNKNOWN)
    elif family in REGISTER_SKIP_OPS:
        name = REGISTER_SKIP_OPS[family] if n == 0 else UNKNOWN
    else:
        name = FAMILY_OPS[family]

    return Operation(name, word, x, y, n, kk, addr)
