"""Rich terminal status view of a simulation snapshot."""

from __future__ import annotations

import io
import sys

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table

from complexcity.config import NEED_NAMES
from complexcity.simulation.entities import BuildingKind
from complexcity.simulation.snapshot import PersonView, WorldSnapshot

# Need bar colors by value band
_BAND_COLORS = ((25.0, "red"), (50.0, "yellow"), (101.0, "green"))

BUILDING_KEYS: dict[BuildingKind, str] = {
    BuildingKind.HOUSE: "H",
    BuildingKind.RESTAURANT: "R",
    BuildingKind.FORUM: "F",
    BuildingKind.CINEMA: "C",
    BuildingKind.HOSPITAL: "O",
    BuildingKind.POOL: "P",
    BuildingKind.CREATIVE: "E",
    BuildingKind.UNDERGROUND: "U",
}


def _make_console() -> Console:
    """Create a Rich Console that works on Windows (force UTF-8)."""
    if sys.platform == "win32" and hasattr(sys.stdout, "buffer"):
        utf8_stdout = io.TextIOWrapper(sys.stdout.buffer, encoding="utf-8", errors="replace")
        return Console(file=utf8_stdout, force_terminal=True)
    return Console()


def _need_color(value: float) -> str:
    for limit, color in _BAND_COLORS:
        if value < limit:
            return color
    return "green"


class Renderer:
    """Renders the selected person, building availability and score."""

    def __init__(self, console: Console | None = None):
        self.console = console or _make_console()

    def build(self, snapshot: WorldSnapshot) -> Group:
        """Build the renderable for one snapshot."""
        return Group(
            self._render_header(snapshot),
            self._render_person(snapshot.selected_person),
            self._render_availability(snapshot),
        )

    def render(self, snapshot: WorldSnapshot) -> None:
        self.console.print(self.build(snapshot))

    def render_text(self, snapshot: WorldSnapshot, width: int = 80) -> str:
        """Render a snapshot to plain text (no color codes)."""
        buffer = io.StringIO()
        Console(file=buffer, width=width, color_system=None).print(self.build(snapshot))
        return buffer.getvalue()

    # --- Panels ---

    @staticmethod
    def _render_header(snapshot: WorldSnapshot) -> str:
        score = "--" if snapshot.score is None else f"{snapshot.score:.0f}"
        return (
            f"complexcity | Tick {snapshot.tick:>6} | Time {snapshot.time:8.1f}s | "
            f"Persons {len(snapshot.persons):>3} | Buildings {len(snapshot.buildings):>3} | "
            f"Score {score}"
        )

    @staticmethod
    def _render_person(person: PersonView | None) -> Panel:
        if person is None:
            return Panel("(nobody selected)", title="Selected Person")
        table = Table(show_header=False, box=None)
        table.add_column("need")
        table.add_column("value", justify="right")
        for need in NEED_NAMES:
            value = person.needs[need]
            table.add_row(need.capitalize(), f"[{_need_color(value)}]{value:.0f}[/]")
        table.add_row("Satisfaction", f"{person.satisfaction:.0f}")
        problems = "\n".join(person.problems) if person.problems else "none"
        return Panel(
            Group(table, f"Current Problems:\n{problems}"),
            title=f"Selected Person: {person.person_id}",
        )

    @staticmethod
    def _render_availability(snapshot: WorldSnapshot) -> Table:
        table = Table(title="Buildings")
        table.add_column("Key")
        table.add_column("Kind")
        table.add_column("Ready")
        for kind, available in snapshot.availability.items():
            table.add_row(BUILDING_KEYS[kind], kind.value, "yes" if available else "no")
        return table
