"""
CHIP-8 Buzzer
Square wave tone played while the sound timer is nonzero
"""

import struct

SAMPLE_RATE = 48000


class Buzzer:
    def __init__(self, frequency=440, volume=0.25, sample_rate=SAMPLE_RATE):
        self.frequency = frequency
        self.sample_rate = sample_rate
        self.amplitude = int(32767 * volume)
        self.phase = 0  # Samples into the current wave period

    def generate(self, count):
        """Next `count` signed 16-bit samples of the tone"""
        period = max(1, self.sample_rate // self.frequency)
        half = period // 2
        samples = []
        for _ in range(count):
            samples.append(self.amplitude if self.phase < half else -self.amplitude)
            self.phase = (self.phase + 1) % period
        return samples

    def frame_audio(self, active, fps=60):
        """PCM bytes for one video frame; empty when the sound timer is idle"""
        if not active:
            self.phase = 0
            return b""
        samples = self.generate(self.sample_rate // fps)
        return struct.pack(f"{len(samples)}h", *samples)
