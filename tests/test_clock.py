import pytest

from game.clock import FixedStepClock


def test_first_call_only_primes():
    clock = FixedStepClock(60)
    assert clock.advance(5000) == 0


def test_remainder_carries_over():
    clock = FixedStepClock(60)
    clock.advance(0)
    # 40ms is 2.4 steps, 0.4 carried
    assert clock.advance(40) == 2
    # 0.4 + 1.2 steps
    assert clock.advance(60) == 1
    assert clock.accumulator == pytest.approx(60 - 3 * 1000 / 60)


def test_stall_is_capped():
    clock = FixedStepClock(60, max_steps=5)
    clock.advance(0)
    assert clock.advance(1000) == 5
    assert clock.accumulator == 0
    assert clock.advance(1010) == 0


def test_time_going_backwards_runs_nothing():
    clock = FixedStepClock(60)
    clock.advance(100)
    assert clock.advance(50) == 0


def test_reset():
    clock = FixedStepClock(60)
    clock.advance(0)
    clock.advance(10)
    clock.reset()
    assert clock.advance(500) == 0


def test_fps_must_be_positive():
    with pytest.raises(ValueError):
        FixedStepClock(0)
