#!/usr/bin/env python3
"""
Tests for instruction decoding and disassembly text
"""

import pytest

from decoder import MNEMONICS, UNKNOWN, decode

KNOWN_WORDS = [
    (0x00E0, "CLS"),
    (0x00EE, "RET"),
    (0x1ABC, "JP"),
    (0x2ABC, "CALL"),
    (0x3A12, "SE"),
    (0x4A12, "SNE"),
    (0x5AB0, "SE_REG"),
    (0x6A12, "LD"),
    (0x7A12, "ADD"),
    (0x8AB0, "LD_REG"),
    (0x8AB1, "OR"),
    (0x8AB2, "AND"),
    (0x8AB3, "XOR"),
    (0x8AB4, "ADD_REG"),
    (0x8AB5, "SUB"),
    (0x8AB6, "SHR"),
    (0x8AB7, "SUBN"),
    (0x8ABE, "SHL"),
    (0x9AB0, "SNE_REG"),
    (0xAABC, "LD_I"),
    (0xBABC, "JP_V0"),
    (0xCA12, "RND"),
    (0xDAB5, "DRW"),
    (0xEA9E, "SKP"),
    (0xEAA1, "SKNP"),
    (0xFA07, "LD_VX_DT"),
    (0xFA0A, "LD_VX_K"),
    (0xFA15, "LD_DT"),
    (0xFA18, "LD_ST"),
    (0xFA1E, "ADD_I"),
    (0xFA29, "LD_F"),
    (0xFA33, "LD_B"),
    (0xFA55, "LD_MEM"),
    (0xFA65, "LD_REGS"),
]


@pytest.mark.parametrize("word,name", KNOWN_WORDS)
def test_known_instructions(word, name):
    assert decode(word).name == name


def test_every_mnemonic_is_reachable():
    assert {name for _, name in KNOWN_WORDS} == MNEMONICS


@pytest.mark.parametrize("word", [0x0000, 0x0123, 0x00E1, 0x5121, 0x9AB1, 0x8AB8, 0x8ABF, 0xE000, 0xEA9F, 0xF000, 0xFAFF])
def test_unrecognised_words_decode_to_unknown(word):
    op = decode(word)
    assert op.name == UNKNOWN
    assert op.is_unknown
    assert op.word == word


def test_operand_fields():
    op = decode(0xD12F)
    assert (op.x, op.y, op.n) == (0x1, 0x2, 0xF)
    op = decode(0x6A2B)
    assert op.x == 0xA
    assert op.kk == 0x2B
    op = decode(0xAFED)
    assert op.addr == 0xFED


def test_decode_is_pure():
    assert decode(0x7305) == decode(0x7305)


def test_disassembly_text():
    assert decode(0x6A2B).disassemble() == "LD VA, 0x2B"
    assert decode(0x2FFF).disassemble() == "CALL 0xFFF"
    assert decode(0xD125).disassemble() == "DRW V1, V2, 5"
    assert decode(0xF355).disassemble() == "LD [I], V3"
    assert decode(0x8AB6).disassemble() == "SHR VA"
    assert decode(0x00E0).disassemble() == "CLS"
    assert decode(0xFFFF).disassemble() == ".word 0xFFFF"
