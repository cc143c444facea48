#!/usr/bin/env python3
"""
Tests for the 60 Hz delay/sound timers
"""

import pytest

from state import MachineState
from timers import Timers


def make_timers(hz=60):
    state = MachineState()
    return Timers(state, hz=hz), state


def test_partial_periods_accumulate():
    timers, state = make_timers()
    state.DT = 5
    state.ST = 5
    assert timers.update(16) == 0
    assert state.DT == 5
    assert timers.update(1) == 1
    assert state.DT == 4
    assert state.ST == 4


def test_excess_is_carried_over():
    timers, state = make_timers()
    state.DT = 10
    assert timers.update(51) == 3  # 3 periods of 16.67 ms, 1 ms left over
    assert state.DT == 7
    assert timers.update(15) == 0
    assert timers.update(1) == 1
    assert state.DT == 6


def test_timers_saturate_at_zero():
    timers, state = make_timers()
    state.DT = 1
    state.ST = 0
    timers.update(101)
    assert state.DT == 0
    assert state.ST == 0


def test_sound_active_follows_sound_timer():
    timers, state = make_timers()
    state.ST = 2
    assert timers.sound_active
    timers.update(34)
    assert state.ST == 0
    assert not timers.sound_active


def test_custom_rate():
    timers, state = make_timers(hz=30)
    state.DT = 10
    timers.update(20)
    assert state.DT == 10
    timers.update(14)
    assert state.DT == 9


def test_negative_elapsed_rejected():
    timers, _ = make_timers()
    with pytest.raises(ValueError):
        timers.update(-1)


def test_reset_drops_accumulated_time():
    timers, state = make_timers()
    state.DT = 3
    timers.update(16)
    timers.reset()
    timers.update(1)
    assert state.DT == 3
