"""
CHIP-8 Delay and Sound Timers
Count down at a fixed wall-clock rate, independent of instruction throughput
"""

from utils import debug_print


class Timers:
    def __init__(self, state, hz=60):
        self.state = state
        self.hz = hz
        self.period_ms = 1000.0 / hz
        self.accumulator = 0.0  # Elapsed milliseconds not yet consumed

    def reset(self):
        self.accumulator = 0.0

    def update(self, elapsed_ms):
        """Advance by elapsed wall-clock milliseconds; returns the number of ticks applied"""
        if elapsed_ms < 0:
            raise ValueError("Elapsed time cannot be negative")

        self.accumulator += elapsed_ms
        ticks = 0
        while self.accumulator >= self.period_ms:
            self.accumulator -= self.period_ms
            self.tick()
            ticks += 1
        return ticks

    def tick(self):
        """One 60 Hz period: decrement both timers, saturating at zero"""
        state = self.state
        if state.DT > 0:
            state.DT -= 1
        if state.ST > 0:
            state.ST -= 1
            if state.ST == 0:
                debug_print("TIMERS: Sound timer expired")

    @property
    def sound_active(self):
        return self.state.ST > 0
