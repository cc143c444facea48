"""
CHIP-8 Emulator with SDL2 Graphics
Main entry point for the emulator
"""

import os
import sys
import time

import sdl2

from buzzer import Buzzer, SAMPLE_RATE
from chip8 import Chip8
from config import DISPLAY, KEY_BINDINGS, TIMING, describe_config
from display import HEIGHT, WIDTH
from errors import Chip8Error, Chip8Fault
from utils import set_debug


class Chip8Emulator:
    def __init__(self):
        self.chip8 = Chip8()
        self.running = False

        # Display settings
        self.scale = DISPLAY["scale"]
        self.window_width = WIDTH * self.scale
        self.window_height = HEIGHT * self.scale
        self.foreground = DISPLAY["foreground"]
        self.background = DISPLAY["background"]

        # SDL components
        self.window = None
        self.renderer = None
        self.texture = None
        self.audio_device = None
        self.buzzer = Buzzer()

        # SDL keycode -> keypad code
        self.key_map = {}

        # Timing
        self.target_fps = TIMING["target_fps"]
        self.frame_time = 1.0 / self.target_fps

    def initialize_sdl(self):
        """Initialize SDL2"""
        if sdl2.SDL_Init(sdl2.SDL_INIT_VIDEO | sdl2.SDL_INIT_AUDIO | sdl2.SDL_INIT_EVENTS) != 0:
            print(f"SDL2 initialization failed: {sdl2.SDL_GetError()}")
            return False

        self.window = sdl2.SDL_CreateWindow(
            b"CHIP-8",
            sdl2.SDL_WINDOWPOS_CENTERED,
            sdl2.SDL_WINDOWPOS_CENTERED,
            self.window_width,
            self.window_height,
            sdl2.SDL_WINDOW_SHOWN,
        )
        if not self.window:
            print(f"Window creation failed: {sdl2.SDL_GetError()}")
            return False

        self.renderer = sdl2.SDL_CreateRenderer(
            self.window,
            -1,
            sdl2.SDL_RENDERER_ACCELERATED | sdl2.SDL_RENDERER_PRESENTVSYNC,
        )
        if not self.renderer:
            print(f"Renderer creation failed: {sdl2.SDL_GetError()}")
            return False

        # Native resolution texture, scaled up by SDL_RenderCopy
        self.texture = sdl2.SDL_CreateTexture(
            self.renderer,
            sdl2.SDL_PIXELFORMAT_ABGR8888,
            sdl2.SDL_TEXTUREACCESS_STREAMING,
            WIDTH,
            HEIGHT,
        )
        if not self.texture:
            print(f"Texture creation failed: {sdl2.SDL_GetError()}")
            return False

        desired = sdl2.SDL_AudioSpec(SAMPLE_RATE, sdl2.AUDIO_S16, 1, 1024)
        obtained = sdl2.SDL_AudioSpec(0, 0, 0, 0)
        self.audio_device = sdl2.SDL_OpenAudioDevice(None, 0, desired, obtained, 0)
        if self.audio_device == 0:
            # The buzzer is optional; run silently
            print(f"Audio device creation failed: {sdl2.SDL_GetError()}")
            self.audio_device = None

        for code, name in KEY_BINDINGS.items():
            keycode = sdl2.SDL_GetKeyFromName(name.encode())
            if keycode == sdl2.SDLK_UNKNOWN:
                print(f"Unknown key name '{name}' for keypad {code:X}")
                continue
            self.key_map[keycode] = code

        print("SDL2 initialized successfully")
        return True

    def take_screenshot(self, filename="exit_screenshot.png"):
        """Save the framebuffer as an image at window scale"""
        try:
            img = self.chip8.display.to_image(self.foreground, self.background, self.scale)
            img.save(filename)
        except OSError as e:
            print(f"Error taking screenshot: {e}")
            return False
        print(f"Screenshot saved as: {filename}")
        return True

    def cleanup_sdl(self):
        """Clean up SDL2 resources"""
        if self.renderer and self.window:
            self.take_screenshot("exit_screenshot.png")

        if self.audio_device:
            sdl2.SDL_CloseAudioDevice(self.audio_device)
        if self.texture:
            sdl2.SDL_DestroyTexture(self.texture)
        if self.renderer:
            sdl2.SDL_DestroyRenderer(self.renderer)
        if self.window:
            sdl2.SDL_DestroyWindow(self.window)
        sdl2.SDL_Quit()

    def handle_events(self):
        """Handle SDL events"""
        event = sdl2.SDL_Event()
        while sdl2.SDL_PollEvent(event):
            if event.type == sdl2.SDL_QUIT:
                self.running = False
            elif event.type == sdl2.SDL_KEYDOWN:
                self.handle_keydown(event.key.keysym.sym)
            elif event.type == sdl2.SDL_KEYUP:
                self.handle_keyup(event.key.keysym.sym)

    def handle_keydown(self, key):
        """Handle key press"""
        if key == sdl2.SDLK_ESCAPE:
            self.running = False
        elif key == sdl2.SDLK_F5:
            self.chip8.reset()
            print("Reset CHIP-8")
        elif key == sdl2.SDLK_F12:
            self.take_screenshot(f"screenshot_{int(time.time())}.png")
        elif key in self.key_map:
            self.chip8.display.press_key(self.key_map[key])

    def handle_keyup(self, key):
        """Handle key release"""
        if key in self.key_map:
            self.chip8.display.release_key(self.key_map[key])

    def update_texture(self):
        """Update SDL texture with the framebuffer"""
        on = bytes(self.foreground) + b"\xff"  # R, G, B, A for ABGR8888 on little-endian
        off = bytes(self.background) + b"\xff"
        pixels = b"".join(on if lit else off for lit in self.chip8.get_screen())
        sdl2.SDL_UpdateTexture(self.texture, None, pixels, WIDTH * 4)
        self.chip8.display.dirty = False

    def render(self):
        """Render the current frame"""
        sdl2.SDL_SetRenderDrawColor(self.renderer, 0, 0, 0, 255)
        sdl2.SDL_RenderClear(self.renderer)
        sdl2.SDL_RenderCopy(self.renderer, self.texture, None, None)
        sdl2.SDL_RenderPresent(self.renderer)

    def queue_audio(self):
        if not self.audio_device:
            return
        audio_data = self.buzzer.frame_audio(self.chip8.sound_active, self.target_fps)
        if audio_data:
            sdl2.SDL_QueueAudio(self.audio_device, audio_data, len(audio_data))

    def run(self, rom_path):
        """Run the emulator"""
        try:
            self.chip8.load_rom(rom_path)
        except (OSError, Chip8Error) as e:
            print(f"Failed to load program '{rom_path}': {e}")
            return False

        if not self.initialize_sdl():
            self.cleanup_sdl()
            return False

        self.running = True
        if self.audio_device:
            sdl2.SDL_PauseAudioDevice(self.audio_device, 0)

        print("Starting emulator...")
        print("Controls:")
        print("  0-9, A-F: Keypad")
        print("  F5: Reset")
        print("  F12: Take screenshot")
        print("  Escape: Quit")

        last_time = time.time()
        try:
            while self.running:
                frame_start = time.time()
                self.handle_events()

                elapsed_ms = (frame_start - last_time) * 1000.0
                last_time = frame_start
                self.chip8.step_frame(elapsed_ms)

                if self.chip8.display.dirty:
                    self.update_texture()
                self.render()
                self.queue_audio()

                frame_duration = time.time() - frame_start
                if frame_duration < self.frame_time:
                    sleep_time = self.frame_time - frame_duration
                    if sleep_time > 0.001:
                        time.sleep(sleep_time)
        except Chip8Fault as fault:
            print(f"Execution halted: {type(fault).__name__} {fault}")
            return False
        finally:
            self.cleanup_sdl()
        return True


def main():
    """Main entry point"""
    args = sys.argv[1:]
    if "--debug" in args:
        set_debug(True)
        args.remove("--debug")

    if len(args) != 1:
        print("Usage: python main.py [--debug] <program_file>")
        print("Example: python main.py pong.ch8")
        return 1

    rom_path = args[0]
    if not os.path.exists(rom_path):
        print(f"Program file not found: {rom_path}")
        return 1

    describe_config()
    emulator = Chip8Emulator()

    try:
        success = emulator.run(rom_path)
        return 0 if success else 1
    except KeyboardInterrupt:
        print("\nEmulator stopped by user")
        return 0


if __name__ == "__main__":
    sys.exit(main())
