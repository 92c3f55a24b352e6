import time

import pytest

from solong.clock import FrameClock


def _wait_for(predicate, timeout=3.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.005)
    return False


def test_rejects_non_positive_fps():
    with pytest.raises(ValueError):
        FrameClock(0, lambda n: None)
    clock = FrameClock(60, lambda n: None)
    with pytest.raises(ValueError):
        clock.fps = -5


def test_no_tick_before_start():
    clock = FrameClock(1000, lambda n: None)
    time.sleep(0.02)
    assert clock.take_render_tick() is False


def test_running_clock_produces_ticks_and_stops():
    clock = FrameClock(50, lambda n: None)
    clock.start()
    try:
        assert clock.running is True
        assert _wait_for(clock.take_render_tick)
    finally:
        clock.stop()
    assert clock.running is False
    clock.take_render_tick()
    time.sleep(0.1)
    assert clock.take_render_tick() is False


def test_reports_frames_counted_in_the_last_second():
    reports = []
    clock = FrameClock(50, reports.append)
    for _ in range(3):
        clock.note_frame()
    with clock:
        assert _wait_for(lambda: len(reports) >= 1, timeout=4.0)
    assert reports[0] == 3


def test_stop_without_start_is_harmless():
    clock = FrameClock(30, lambda n: None)
    clock.stop()
    assert clock.running is False
    assert clock.take_render_tick() is False