"""
CHIP-8 Display and Keypad
64x32 monochrome framebuffer with XOR sprite compositing, plus the 16-key
hex keypad. This is the Display/Input capability the CPU talks to; the SDL
front end only rasterizes the framebuffer and feeds key events in.
"""

from collections import deque

from PIL import Image

from utils import debug_print

WIDTH = 64
HEIGHT = 32
KEY_COUNT = 16


class Display:
    def __init__(self, lsb_left=False):
        self.width = WIDTH
        self.height = HEIGHT
        self.lsb_left = lsb_left  # Sprite bit order: bit 0 leftmost when True

        # Framebuffer, one entry per pixel (0 = unlit, 1 = lit)
        self.screen = [0] * (WIDTH * HEIGHT)
        self.dirty = True  # Set whenever the framebuffer changes

        # Keypad
        self.keys = [False] * KEY_COUNT
        self.pending_presses = deque(maxlen=KEY_COUNT)  # Up->down transitions not yet polled, oldest dropped

    def reset(self):
        self.clear_screen()
        self.keys = [False] * KEY_COUNT
        self.discard_presses()

    # ------------------------ Display side ------------------------

    def clear_screen(self):
        self.screen = [0] * (WIDTH * HEIGHT)
        self.dirty = True

    def draw_sprite(self, x, y, rows):
        """XOR rows of 8 pixels onto the framebuffer at (x, y), wrapping at the edges.
        Returns True if any lit pixel was turned off.
        """
        collision = False
        screen = self.screen
        for row_index, row in enumerate(rows):
            py = (y + row_index) % HEIGHT
            for bit in range(8):
                if self.lsb_left:
                    lit = (row >> bit) & 1
                else:
                    lit = (row >> (7 - bit)) & 1
                if not lit:
                    continue
                offset = py * WIDTH + (x + bit) % WIDTH
                if screen[offset]:
                    collision = True
                screen[offset] ^= 1
        self.dirty = True
        return collision

    def get_pixel(self, x, y):
        return self.screen[(y % HEIGHT) * WIDTH + (x % WIDTH)]

    def lit_count(self):
        return sum(self.screen)

    def to_image(self, foreground=(255, 255, 255), background=(0, 0, 0), scale=1):
        """Render the framebuffer as a PIL image"""
        img = Image.new("RGB", (WIDTH, HEIGHT), background)
        pixels = img.load()
        for offset, lit in enumerate(self.screen):
            if lit:
                pixels[offset % WIDTH, offset // WIDTH] = foreground
        if scale != 1:
            img = img.resize((WIDTH * scale, HEIGHT * scale), Image.Resampling.NEAREST)
        return img

    # ------------------------ Keypad side ------------------------

    def press_key(self, code):
        if not self.keys[code]:
            self.pending_presses.append(code)
            debug_print(f"KEYPAD: Key {code:X} pressed")
        self.keys[code] = True

    def release_key(self, code):
        self.keys[code] = False

    def set_keys(self, codes):
        """Set the full keypad state: codes held down, everything else released"""
        held = set(codes)
        for code in range(KEY_COUNT):
            if code in held:
                self.press_key(code)
            else:
                self.release_key(code)

    def discard_presses(self):
        self.pending_presses.clear()

    def is_key_down(self, code):
        # Codes past the keypad are never down
        return 0 <= code < KEY_COUNT and self.keys[code]

    def poll_any_key_down(self):
        """Return the oldest key press not yet observed, or None"""
        if self.pending_presses:
            return self.pending_presses.popleft()
        return None
