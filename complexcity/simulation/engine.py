"""Simulation engine for the town.

Owns persons, buildings, timers and scores, and runs the per-tick pipeline:
spawn, availability, needs, social classification, movement, de-stacking and
scoring.
"""

from __future__ import annotations

import logging
import math
import random
import time
from dataclasses import dataclass, field

from complexcity.agents.registry import PersonRegistry
from complexcity.agents.selection import SelectionTracker, current_problems
from complexcity.config import SimulationConfig
from complexcity.errors import EngineStateError, ValidationError
from complexcity.memory.social import SocialGraph
from complexcity.metrics.score import ScoreAggregator
from complexcity.metrics.timing import PerformanceMonitor, TickTiming
from complexcity.simulation.availability import BuildingAvailability
from complexcity.simulation.entities import Building, BuildingKind, Person
from complexcity.simulation.geometry import Vec2
from complexcity.simulation.movement import ForceBreakdown, MovementResolver
from complexcity.simulation.needs import NeedsModel
from complexcity.simulation.snapshot import BuildingView, PersonView, WorldSnapshot
from complexcity.simulation.timers import RepeatingTimer
from complexcity.simulation.world import World

logger = logging.getLogger(__name__)


@dataclass
class PersonTickRecord:
    """Record of one person's state change in a tick."""

    person_id: int
    needs_before: dict[str, float]
    needs_after: dict[str, float]
    position_before: tuple[float, float]
    position_after: tuple[float, float]
    forces: ForceBreakdown
    replenished_by: list[BuildingKind] = field(default_factory=list)


@dataclass
class TickRecord:
    """Record of a single simulation tick."""

    tick: int
    elapsed: float
    person_records: list[PersonTickRecord] = field(default_factory=list)
    spawned: list[int] = field(default_factory=list)
    newly_available: set[BuildingKind] = field(default_factory=set)
    destacked_pairs: int = 0
    score: float | None = None

    def record_for(self, person_id: int) -> PersonTickRecord | None:
        for record in self.person_records:
            if record.person_id == person_id:
                return record
        return None


@dataclass
class SimulationTimers:
    """The repeating timers shared by all persons."""

    spawn: RepeatingTimer
    decay: RepeatingTimer
    idle_direction: RepeatingTimer

    @classmethod
    def from_config(cls, config: SimulationConfig) -> SimulationTimers:
        return cls(
            spawn=RepeatingTimer(config.spawn_interval),
            decay=RepeatingTimer(config.decay_interval),
            idle_direction=RepeatingTimer(config.idle_direction_interval),
        )

    def reset(self) -> None:
        self.spawn.reset()
        self.decay.reset()
        self.idle_direction.reset()


@dataclass
class SimulationState:
    """Current state of the simulation."""

    tick: int = 0
    time: float = 0.0
    running: bool = False
    history: list[TickRecord] = field(default_factory=list)


class SimulationEngine:
    """Core simulation engine.

    All randomness comes from one `random.Random`, seeded from the config
    unless a generator is injected.
    """

    def __init__(self, config: SimulationConfig | None = None, rng: random.Random | None = None):
        self.config = config or SimulationConfig()
        self.rng = rng or random.Random(self.config.seed)
        self.world = World(self.config.building_min_distance)
        self.registry = PersonRegistry(self.config.population_cap)
        self.selection = SelectionTracker(self.registry, self.config.person_size)
        self.social = SocialGraph(self.rng)
        self.needs_model = NeedsModel(self.config, self.rng)
        self.movement = MovementResolver(self.config, self.world, self.social)
        self.availability = BuildingAvailability.from_config(self.config)
        self.scores = ScoreAggregator()
        self.timers = SimulationTimers.from_config(self.config)
        self.state = SimulationState()

        # Performance monitoring (lazy init)
        self._perf_monitor: PerformanceMonitor | None = None

    @property
    def persons(self) -> list[Person]:
        """All persons, in spawn order."""
        return self.registry.living()

    @property
    def score(self) -> float | None:
        return self.scores.score

    @property
    def perf_monitor(self) -> PerformanceMonitor:
        """Get or create performance monitor (lazy init)."""
        if self._perf_monitor is None:
            self._perf_monitor = PerformanceMonitor()
        return self._perf_monitor

    # --- Lifecycle ---

    def start(self) -> Person:
        """Begin a session with a single seed person at the origin."""
        if self.state.running:
            raise EngineStateError("Simulation already started")
        seed_person = self.registry.spawn(Vec2())
        if seed_person is None:
            raise EngineStateError("Population cap leaves no room for the seed person")
        self.state.running = True
        self.selection.ensure_valid()
        self.scores.update(self.registry.living())
        logger.info(f"Simulation started with seed {self.config.seed}")
        return seed_person

    def reset(self) -> None:
        """Clear every person and building and rewind all timers."""
        self.registry.clear()
        self.world.clear()
        self.availability.reset()
        self.timers.reset()
        self.selection.clear()
        self.scores.reset()
        self.state = SimulationState()
        if self._perf_monitor is not None:
            self._perf_monitor.reset()
        logger.info("Simulation reset")

    # --- Player actions ---

    def request_placement(self, kind: BuildingKind | str) -> Building | None:
        """Place a building if its kind is available.

        Args:
            kind: A BuildingKind or its key ("house", "restaurant", ...)

        Returns:
            The new building, or None if the kind is still cooling down or
            gated by population score
        """
        if isinstance(kind, str):
            kind = BuildingKind.from_key(kind)
        if not self.availability.is_available(kind):
            return None

        gate = self.config.placement_score_gates.get(kind.value)
        if gate is not None and (self.score is None or self.score <= gate):
            logger.debug(f"Placement of {kind.value} refused: score {self.score} <= {gate}")
            return None

        self.availability.consume(kind)
        building = self.world.add_building(kind)
        logger.info(
            f"Placed {kind.value} #{building.building_id} at {building.position.as_tuple()}"
        )
        return building

    def begin_drag(self, point: Vec2) -> list[Building]:
        return self.world.begin_drag(point)

    def drag_to(self, point: Vec2) -> None:
        self.world.drag_to(point)

    def end_drag(self) -> None:
        self.world.end_drag()

    def select_at(self, point: Vec2) -> int | None:
        return self.selection.select_at(point)

    def select_least_satisfied(self) -> int | None:
        return self.selection.select_least_satisfied()

    def select_next(self) -> int | None:
        return self.selection.select_next()

    def select_previous(self) -> int | None:
        return self.selection.select_previous()

    # --- Tick ---

    def step(self, elapsed: float) -> TickRecord:
        """Advance the simulation by `elapsed` seconds.

        Process:
        1. Spawn a person when the spawn timer fires (below the cap)
        2. Advance building cooldowns
        3. Reset movement vectors
        4. Decay needs once per elapsed decay interval
        5. Replenish needs near buildings
        6. Re-roll idle directions when their timer fires
        7. Classify unseen persons as liked/disliked
        8. Accumulate all forces, then resolve and apply them
        9. De-stack buildings
        10. Recompute satisfaction and score
        11. Build TickRecord
        """
        if not self.state.running:
            raise EngineStateError("Simulation not started; call start() first")
        if not (math.isfinite(elapsed) and elapsed >= 0):
            raise ValidationError(f"Elapsed time must be finite and non-negative, got {elapsed}")

        tick_start = time.perf_counter()
        cfg = self.config

        # --- Phase 1: Spawn ---
        spawned: list[int] = []
        for _ in range(self.timers.spawn.tick(elapsed)):
            person = self.registry.spawn(Vec2())
            if person is not None:
                spawned.append(person.person_id)
        self.selection.ensure_valid()
        t0 = time.perf_counter()

        # --- Phase 2: Building availability ---
        newly_available = self.availability.tick(elapsed)

        persons = self.registry.living()
        needs_before = {p.person_id: p.needs.as_dict() for p in persons}
        positions_before = {p.person_id: p.position.as_tuple() for p in persons}

        # --- Phase 3: Reset accumulators ---
        self.movement.reset(persons)

        # --- Phase 4: Decay ---
        t1 = time.perf_counter()
        for _ in range(self.timers.decay.tick(elapsed)):
            for person in persons:
                self.needs_model.decay(person.needs, cfg.decay_interval)

        # --- Phase 5: Replenish ---
        replenished: dict[int, list[BuildingKind]] = {}
        for person in persons:
            replenished[person.person_id] = self._replenish(person, elapsed)
        t2 = time.perf_counter()

        # --- Phase 6: Idle directions ---
        if self.timers.idle_direction.tick(elapsed):
            self.movement.reroll_idle_directions(persons, self.rng)

        # --- Phase 7: Social classification ---
        self.social.observe(persons, self.registry.ids())
        t3 = time.perf_counter()

        # --- Phase 8: Accumulate, then resolve ---
        breakdowns = self.movement.accumulate(persons)
        self.movement.apply(persons, elapsed)
        t4 = time.perf_counter()

        # --- Phase 9: De-stack ---
        destacked = self.world.destack()
        t5 = time.perf_counter()

        # --- Phase 10: Scores ---
        score = self.scores.update(persons)
        t6 = time.perf_counter()

        # --- Phase 11: Record ---
        record = TickRecord(
            tick=self.state.tick,
            elapsed=elapsed,
            person_records=[
                PersonTickRecord(
                    person_id=p.person_id,
                    needs_before=needs_before[p.person_id],
                    needs_after=p.needs.as_dict(),
                    position_before=positions_before[p.person_id],
                    position_after=p.position.as_tuple(),
                    forces=breakdowns[p.person_id],
                    replenished_by=replenished[p.person_id],
                )
                for p in persons
            ],
            spawned=spawned,
            newly_available=newly_available,
            destacked_pairs=destacked,
            score=score,
        )
        self.state.history.append(record)
        if len(self.state.history) > cfg.history_limit:
            del self.state.history[: len(self.state.history) - cfg.history_limit]
        self.state.tick += 1
        self.state.time += elapsed

        self.perf_monitor.record_tick(
            TickTiming(
                spawn_ms=(t0 - tick_start) * 1000,
                need_decay_ms=(t2 - t1) * 1000,
                social_ms=(t3 - t2) * 1000,
                movement_ms=(t4 - t3) * 1000,
                destack_ms=(t5 - t4) * 1000,
                scoring_ms=(t6 - t5) * 1000,
                total_ms=(time.perf_counter() - tick_start) * 1000,
                population=len(persons),
            )
        )
        return record

    def run(self, ticks: int, elapsed: float) -> list[TickRecord]:
        """Run `ticks` steps of `elapsed` seconds each."""
        return [self.step(elapsed) for _ in range(ticks)]

    def _replenish(self, person: Person, elapsed: float) -> list[BuildingKind]:
        """Apply every in-range building to a person; returns kinds applied."""
        applied: list[BuildingKind] = []
        for building in self.world.buildings_within(person.position, self.config.interaction_radius):
            if not building.kind.is_functional:
                continue
            if self.config.replenish_policy == "single" and building.kind in applied:
                continue
            self.needs_model.replenish(person.needs, building.kind, elapsed)
            applied.append(building.kind)
        return applied

    # --- Outputs ---

    def snapshot(self) -> WorldSnapshot:
        """Read-only view of the current state for rendering."""
        return WorldSnapshot(
            tick=self.state.tick,
            time=self.state.time,
            persons=tuple(
                PersonView(
                    person_id=p.person_id,
                    position=p.position.as_tuple(),
                    needs=p.needs.as_dict(),
                    satisfaction=p.satisfaction,
                    problems=tuple(current_problems(p.needs, self.config)),
                )
                for p in self.registry.living()
            ),
            buildings=tuple(
                BuildingView(
                    building_id=b.building_id,
                    kind=b.kind,
                    position=b.position.as_tuple(),
                )
                for b in self.world.buildings
            ),
            availability=self.availability.snapshot(),
            selected=self.selection.selected,
            score=self.scores.score,
        )
