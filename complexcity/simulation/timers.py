"""Elapsed-time timers driving the periodic parts of the simulation."""

from __future__ import annotations

# Absorbs float drift when step sizes sum to exactly one duration.
_EPSILON = 1e-9


class RepeatingTimer:
    """Timer that finishes every `duration` seconds of accumulated time.

    `tick()` returns how many periods completed during the step, so callers
    can run a periodic action once per elapsed period even on long steps.
    """

    def __init__(self, duration: float):
        if duration <= 0:
            raise ValueError(f"Timer duration must be positive, got {duration}")
        self.duration = duration
        self.elapsed = 0.0
        self.times_finished = 0

    def tick(self, delta: float) -> int:
        """Advance the timer and return the number of periods completed."""
        self.elapsed += delta
        finished = int((self.elapsed + _EPSILON) // self.duration)
        if finished:
            self.elapsed = max(0.0, self.elapsed - finished * self.duration)
        self.times_finished = finished
        return finished

    @property
    def just_finished(self) -> bool:
        return self.times_finished > 0

    def reset(self) -> None:
        self.elapsed = 0.0
        self.times_finished = 0


class Cooldown:
    """One-shot countdown that stays expired until restarted.

    The expiry is reported exactly once: `tick()` returns True only on the
    step that crosses the duration. Once expired, further ticks are ignored.
    """

    def __init__(self, duration: float):
        if duration <= 0:
            raise ValueError(f"Cooldown duration must be positive, got {duration}")
        self.duration = duration
        self.elapsed = 0.0
        self.expired = False

    @property
    def remaining(self) -> float:
        return 0.0 if self.expired else max(0.0, self.duration - self.elapsed)

    def tick(self, delta: float) -> bool:
        """Advance the countdown; True only on the step it expires."""
        if self.expired:
            return False
        self.elapsed += delta
        if self.elapsed + _EPSILON >= self.duration:
            self.expired = True
            return True
        return False

    def restart(self) -> None:
        self.elapsed = 0.0
        self.expired = False
