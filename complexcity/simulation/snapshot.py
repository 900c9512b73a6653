"""Read-only views of simulation state for renderers and UIs."""

from __future__ import annotations

from dataclasses import dataclass, field

from complexcity.simulation.entities import BuildingKind


@dataclass(frozen=True)
class PersonView:
    """A person as seen from outside the simulation."""

    person_id: int
    position: tuple[float, float]
    needs: dict[str, float]
    satisfaction: float
    problems: tuple[str, ...] = ()


@dataclass(frozen=True)
class BuildingView:
    """A building as seen from outside the simulation."""

    building_id: int
    kind: BuildingKind
    position: tuple[float, float]


@dataclass(frozen=True)
class WorldSnapshot:
    """Everything a renderer needs to draw one frame."""

    tick: int
    time: float
    persons: tuple[PersonView, ...] = ()
    buildings: tuple[BuildingView, ...] = ()
    availability: dict[BuildingKind, bool] = field(default_factory=dict)
    selected: int | None = None
    score: float | None = None

    def person(self, person_id: int) -> PersonView | None:
        for view in self.persons:
            if view.person_id == person_id:
                return view
        return None

    @property
    def selected_person(self) -> PersonView | None:
        return None if self.selected is None else self.person(self.selected)
