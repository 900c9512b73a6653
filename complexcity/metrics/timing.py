"""Performance timing instrumentation for complexcity simulations."""

from dataclasses import dataclass

# Per-phase fields of TickTiming, in pipeline order
PHASES = ("spawn", "need_decay", "social", "movement", "destack", "scoring")


@dataclass
class TickTiming:
    """Timing breakdown for a single tick."""

    spawn_ms: float = 0.0
    need_decay_ms: float = 0.0
    social_ms: float = 0.0
    movement_ms: float = 0.0
    destack_ms: float = 0.0
    scoring_ms: float = 0.0
    total_ms: float = 0.0
    population: int = 0


class PerformanceMonitor:
    """Tracks per-phase tick timing and the population it was measured at."""

    def __init__(self):
        self._tick_timings: list[TickTiming] = []

    def record_tick(self, timing: TickTiming) -> None:
        self._tick_timings.append(timing)

    def reset(self) -> None:
        self._tick_timings = []

    @property
    def tick_count(self) -> int:
        return len(self._tick_timings)

    def _average(self, name: str) -> float:
        return sum(getattr(t, name) for t in self._tick_timings) / len(self._tick_timings)

    @property
    def summary(self) -> dict:
        if not self._tick_timings:
            return {}
        return {
            "total_ticks": len(self._tick_timings),
            "avg_tick_ms": self._average("total_ms"),
            "avg_need_decay_ms": self._average("need_decay_ms"),
            "avg_social_ms": self._average("social_ms"),
            "avg_movement_ms": self._average("movement_ms"),
            "avg_scoring_ms": self._average("scoring_ms"),
            "slowest_tick_ms": max(t.total_ms for t in self._tick_timings),
            "peak_population": max(t.population for t in self._tick_timings),
            "phase_breakdown": {
                phase: round(self._average(f"{phase}_ms"), 4) for phase in PHASES
            },
        }
