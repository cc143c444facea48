"""
Configuration for the CHIP-8 emulator
Interpreter quirks, timing, display theme and keypad bindings
"""

# Interpreter quirks. The defaults follow the modern convention; flip them for
# programs written against the original COSMAC VIP interpreter.
QUIRKS = {
    "shift_uses_vy": False,  # 8xy6/8xyE shift Vy into Vx instead of shifting Vx
    "sprite_lsb_left": False,  # Bit 0 of a sprite byte is the leftmost pixel
}

# Timing
TIMING = {
    "timer_hz": 60,  # Delay/sound timer decrement rate
    "instructions_per_frame": 10,  # Instructions executed per rendered frame
    "target_fps": 60,  # Frame pacing of the SDL front end
}

# Window / theme
DISPLAY = {
    "scale": 16,  # 64x32 native pixels -> 1024x512 window
    "background": (0, 0, 0),  # Unlit pixel colour
    "foreground": (255, 255, 255),  # Lit pixel colour
}

# Keypad code -> SDL key name
KEY_BINDINGS = {
    0x0: "0",
    0x1: "1",
    0x2: "2",
    0x3: "3",
    0x4: "4",
    0x5: "5",
    0x6: "6",
    0x7: "7",
    0x8: "8",
    0x9: "9",
    0xA: "A",
    0xB: "B",
    0xC: "C",
    0xD: "D",
    0xE: "E",
    0xF: "F",
}


def merge_quirks(overrides=None):
    """Return the default quirks updated with overrides, rejecting unknown names"""
    quirks = dict(QUIRKS)
    if overrides:
        unknown = set(overrides) - set(QUIRKS)
        if unknown:
            raise ValueError(f"Unknown quirk(s): {', '.join(sorted(unknown))}")
        quirks.update(overrides)
    return quirks


def describe_config(quirks=None):
    """Print the active settings"""
    quirks = merge_quirks(quirks)
    print("CHIP-8 configuration:")
    enabled = [k for k, v in quirks.items() if v]
    print(f"  Quirks: {', '.join(enabled) if enabled else 'none'}")
    print(
        f"  Timing: {TIMING['timer_hz']} Hz timers, "
        f"{TIMING['instructions_per_frame']} instructions/frame, "
        f"{TIMING['target_fps']} fps"
    )
    print(f"  Display: scale x{DISPLAY['scale']}")
