"""The town: placed buildings, spatial queries, dragging and de-stacking.

Buildings are stored in placement order and queried by linear scan, which is
plenty for the number of buildings a player places by hand.
"""

from __future__ import annotations

from complexcity.simulation.entities import Building, BuildingKind, default_position
from complexcity.simulation.geometry import Vec2


class World:
    """The town containing all placed buildings."""

    def __init__(self, min_distance: float = 30.0):
        """Initialize an empty town.

        Args:
            min_distance: Buildings closer than this are pushed apart
        """
        self.min_distance = min_distance
        self._buildings: list[Building] = []
        self._next_id = 0

    @property
    def buildings(self) -> list[Building]:
        """All buildings, in placement order."""
        return list(self._buildings)

    def add_building(self, kind: BuildingKind, position: Vec2 | None = None) -> Building:
        """Place a building, at the kind's default position unless given."""
        building = Building(
            building_id=self._next_id,
            kind=kind,
            position=position if position is not None else default_position(kind),
        )
        self._next_id += 1
        self._buildings.append(building)
        return building

    def get_building(self, building_id: int) -> Building | None:
        for building in self._buildings:
            if building.building_id == building_id:
                return building
        return None

    def buildings_of_kind(self, kind: BuildingKind) -> list[Building]:
        return [b for b in self._buildings if b.kind is kind]

    def closest_of_kind(self, origin: Vec2, kind: BuildingKind) -> Vec2:
        """Position of the nearest building of `kind`.

        Returns `origin` itself when no such building exists, so that a pull
        toward it has zero length.
        """
        best: Vec2 | None = None
        best_distance = float("inf")
        for building in self._buildings:
            if building.kind is not kind:
                continue
            distance = origin.distance(building.position)
            if distance < best_distance:
                best = building.position
                best_distance = distance
        return best if best is not None else origin

    def buildings_within(self, origin: Vec2, radius: float) -> list[Building]:
        """Buildings whose center lies within `radius` of `origin`."""
        return [b for b in self._buildings if origin.distance(b.position) <= radius]

    # --- Dragging ---

    @property
    def drag_in_progress(self) -> bool:
        return any(b.being_dragged for b in self._buildings)

    def begin_drag(self, point: Vec2) -> list[Building]:
        """Grab every building whose footprint contains `point`."""
        grabbed = []
        for building in self._buildings:
            if building.contains_point(point):
                building.being_dragged = True
                grabbed.append(building)
        return grabbed

    def drag_to(self, point: Vec2) -> None:
        """Move all grabbed buildings to `point`."""
        for building in self._buildings:
            if building.being_dragged:
                building.position = point

    def end_drag(self) -> None:
        for building in self._buildings:
            building.being_dragged = False

    # --- De-stacking ---

    def destack(self) -> int:
        """Push overlapping buildings apart along the x axis.

        For each pair closer than `min_distance`, the first moves left and the
        second moves right by half the first one's width. One call is a single
        relaxation pass; clusters may need several. Skipped while dragging.

        Returns:
            Number of pairs nudged
        """
        if self.drag_in_progress:
            return 0
        nudged = 0
        buildings = self._buildings
        for i in range(len(buildings)):
            for j in range(i + 1, len(buildings)):
                first, second = buildings[i], buildings[j]
                if first.position.distance(second.position) < self.min_distance:
                    half_width = first.footprint[0] / 2.0
                    first.position = first.position - Vec2(half_width, 0.0)
                    second.position = second.position + Vec2(half_width, 0.0)
                    nudged += 1
        return nudged

    def min_pairwise_distance(self) -> float | None:
        """Smallest center distance between any two buildings."""
        buildings = self._buildings
        distances = [
            buildings[i].position.distance(buildings[j].position)
            for i in range(len(buildings))
            for j in range(i + 1, len(buildings))
        ]
        return min(distances) if distances else None

    def clear(self) -> None:
        """Remove all buildings and restart building ids."""
        self._buildings = []
        self._next_id = 0

    @property
    def count(self) -> int:
        return len(self._buildings)
