#!/usr/bin/env python3
import sys
import time
import argparse

from chip8 import Chip8
from config import DISPLAY, TIMING
from errors import Chip8Error, Chip8Fault
from utils import set_debug


def parse_keys(text):
    """Comma separated hex keypad codes, e.g. '5,A'"""
    if not text:
        return []
    codes = []
    for part in text.split(","):
        code = int(part.strip(), 16)
        if not 0 <= code <= 0xF:
            raise argparse.ArgumentTypeError(f"Keypad code out of range: {part}")
        codes.append(code)
    return codes


def build_parser():
    parser = argparse.ArgumentParser(description="Headless CHIP-8 run without SDL.")
    parser.add_argument("rom", help="Path to program file")
    parser.add_argument("--frames", type=int, default=60, help="Number of 60 Hz frames to run")
    parser.add_argument(
        "--ipf",
        type=int,
        default=TIMING["instructions_per_frame"],
        help="Instructions executed per frame",
    )
    parser.add_argument("--keys", type=parse_keys, default=[], help="Keypad codes held down, e.g. 5,A")
    parser.add_argument("--screenshot", default=None, help="Write the final framebuffer to this PNG")
    parser.add_argument("--legacy-shift", action="store_true", help="8xy6/8xyE shift Vy into Vx")
    parser.add_argument("--lsb-left", action="store_true", help="Sprite bit 0 is the leftmost pixel")
    parser.add_argument("--debug", action="store_true", help="Trace every instruction")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    set_debug(args.debug)

    chip8 = Chip8(quirks={"shift_uses_vy": args.legacy_shift, "sprite_lsb_left": args.lsb_left})
    try:
        chip8.load_rom(args.rom)
    except (OSError, Chip8Error) as e:
        print(f"Failed to load program: {args.rom}: {e}")
        return 1

    chip8.set_keys(args.keys)
    frame_ms = 1000.0 / TIMING["target_fps"]

    status = 0
    start = time.time()
    try:
        for _ in range(args.frames):
            chip8.step_frame(frame_ms, args.ipf)
    except Chip8Fault as fault:
        print(f"Execution halted: {type(fault).__name__} {fault}")
        status = 1
    elapsed = time.time() - start

    if args.screenshot:
        img = chip8.display.to_image(DISPLAY["foreground"], DISPLAY["background"], DISPLAY["scale"])
        try:
            img.save(args.screenshot)
            print(f"Screenshot saved as: {args.screenshot}")
        except OSError as e:
            print(f"Error taking screenshot: {e}")
            status = 1

    state = chip8.get_cpu_state()
    sys.stdout.write(
        f"Headless run complete: frames={state['frames']}, instructions={state['instructions']}, "
        f"PC=0x{state['PC']:03X}, waiting_for_key={state['waiting_for_key']}, "
        f"lit_pixels={chip8.display.lit_count()}, elapsed={elapsed:.3f}s\n"
    )
    return status


if __name__ == "__main__":
    raise SystemExit(main())
