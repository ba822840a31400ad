import time

import pytest

from ttylink.timer import Timer


class FakeClock:
    def __init__(self, *readings: float) -> None:
        self._readings = list(readings)

    def __call__(self) -> float:
        return self._readings.pop(0)


def test_elapsed_counts_milliseconds_since_creation():
    timer = Timer(FakeClock(10.0, 10.25))
    assert timer.elapsed_ms() == 250


def test_elapsed_truncates_partial_milliseconds():
    timer = Timer(FakeClock(5.0, 5.0019))
    assert timer.elapsed_ms() == 1


def test_elapsed_is_zero_without_time_passing():
    timer = Timer(FakeClock(3.0, 3.0))
    assert timer.elapsed_ms() == 0


def test_reset_restarts_measurement():
    timer = Timer(FakeClock(0.0, 2.0, 2.5, 2.5))
    first_start_elapsed = timer.elapsed_ms()
    timer.reset()
    after_reset = timer.elapsed_ms()
    assert first_start_elapsed == 2000
    assert after_reset == 0


def test_successive_readings_do_not_decrease():
    timer = Timer(FakeClock(1.0, 1.1, 1.2, 1.7))
    readings = [timer.elapsed_ms() for _ in range(3)]
    assert readings == sorted(readings)
    assert readings[-1] == 700


@pytest.mark.parametrize("seconds", [0.001, 0.5, 3.0, 120.0])
def test_whole_seconds_and_fractions(seconds):
    timer = Timer(FakeClock(100.0, 100.0 + seconds))
    assert timer.elapsed_ms() == round(seconds * 1000)


def test_clock_going_backwards_never_gives_negative():
    timer = Timer(FakeClock(50.0, 49.0))
    assert timer.elapsed_ms() == 0


def test_default_clock_measures_real_time():
    timer = Timer()
    time.sleep(0.02)
    elapsed = timer.elapsed_ms()
    assert elapsed >= 15
    assert elapsed < 10_000