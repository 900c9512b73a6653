"""Tests for RepeatingTimer and Cooldown."""

from __future__ import annotations

import pytest

from complexcity.simulation.timers import Cooldown, RepeatingTimer


class TestRepeatingTimer:
    """Repeating timer semantics."""

    def test_finishes_once_per_period(self):
        timer = RepeatingTimer(3.0)
        assert timer.tick(1.0) == 0
        assert timer.tick(1.0) == 0
        assert timer.tick(1.0) == 1
        assert timer.just_finished
        assert timer.tick(1.0) == 0
        assert not timer.just_finished

    def test_long_step_counts_every_period(self):
        timer = RepeatingTimer(1.0)
        assert timer.tick(3.5) == 3
        assert timer.elapsed == pytest.approx(0.5)

    def test_fractional_steps_hit_boundary(self):
        """Ten steps of 0.1 complete a 1.0 period despite float drift."""
        timer = RepeatingTimer(1.0)
        finished = sum(timer.tick(0.1) for _ in range(10))
        assert finished == 1

    def test_reset(self):
        timer = RepeatingTimer(2.0)
        timer.tick(1.5)
        timer.reset()
        assert timer.elapsed == 0.0
        assert timer.tick(1.5) == 0

    def test_rejects_non_positive_duration(self):
        with pytest.raises(ValueError):
            RepeatingTimer(0)


class TestCooldown:
    """One-shot cooldown semantics."""

    def test_expires_once(self):
        cooldown = Cooldown(2.0)
        assert cooldown.tick(1.0) is False
        assert cooldown.remaining == pytest.approx(1.0)
        assert cooldown.tick(1.0) is True
        assert cooldown.expired
        assert cooldown.tick(1.0) is False
        assert cooldown.expired
        assert cooldown.remaining == 0.0

    def test_restart(self):
        cooldown = Cooldown(2.0)
        cooldown.tick(5.0)
        cooldown.restart()
        assert not cooldown.expired
        assert cooldown.remaining == pytest.approx(2.0)
