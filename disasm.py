#!/usr/bin/env python3
"""
Print an address / word / mnemonic listing of a CHIP-8 program
"""

import argparse
import sys

from decoder import decode
from state import PROGRAM_START


def disassemble(data, start_addr=PROGRAM_START):
    """Listing lines for every word in data; a trailing odd byte is shown as .byte"""
    output = []
    for offset in range(0, len(data) - 1, 2):
        word = (data[offset] << 8) | data[offset + 1]
        op = decode(word)
        output.append(f"  ${start_addr + offset:03X}: {word:04X}  {op.disassemble()}")
    if len(data) % 2:
        last = len(data) - 1
        output.append(f"  ${start_addr + last:03X}: {data[last]:02X}    .byte 0x{data[last]:02X}")
    return output


def main(argv=None):
    parser = argparse.ArgumentParser(description="Disassemble a CHIP-8 program")
    parser.add_argument("rom", help="Path to program file")
    parser.add_argument("--count", type=int, default=None, help="Only list the first N words")
    args = parser.parse_args(argv)

    try:
        with open(args.rom, "rb") as f:
            data = f.read()
    except OSError as e:
        print(f"Cannot read {args.rom}: {e}")
        return 1

    if args.count is not None:
        data = data[:args.count * 2]

    for line in disassemble(data):
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
