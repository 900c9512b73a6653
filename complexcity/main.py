"""Entry point for a headless complexcity run.

Usage:
    python -m complexcity.main --ticks 600 --dt 0.1
    python -m complexcity.main --place house,restaurant --seed 7
"""

from __future__ import annotations

import argparse
import logging
import sys

import pydantic

from complexcity.config import SimulationConfig
from complexcity.errors import ComplexcityError
from complexcity.simulation.engine import SimulationEngine
from complexcity.simulation.entities import BuildingKind
from complexcity.simulation.renderer import Renderer

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="complexcity: townspeople chasing their needs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--ticks", type=int, default=600, help="Ticks to run (default: 600)")
    parser.add_argument("--dt", type=float, default=0.1, help="Seconds per tick (default: 0.1)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--cap", type=int, default=None, help="Population cap")
    parser.add_argument(
        "--place",
        type=str,
        default="",
        help="Comma-separated building kinds to place whenever available",
    )
    parser.add_argument(
        "--every",
        type=int,
        default=0,
        help="Print a status frame every N ticks (0 = only at the end)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return parser


def parse_kinds(raw: str) -> list[BuildingKind]:
    """Parse "house,restaurant" into building kinds."""
    return [BuildingKind.from_key(part) for part in raw.split(",") if part.strip()]


def run(args: argparse.Namespace, renderer: Renderer | None = None) -> SimulationEngine:
    """Run a headless session described by parsed arguments."""
    overrides: dict = {}
    if args.seed is not None:
        overrides["seed"] = args.seed
    if args.cap is not None:
        overrides["population_cap"] = args.cap
    config = SimulationConfig(**overrides)

    kinds = parse_kinds(args.place)
    renderer = renderer or Renderer()
    engine = SimulationEngine(config)
    engine.start()

    for tick in range(args.ticks):
        for kind in kinds:
            engine.request_placement(kind)
        engine.step(args.dt)
        if args.every and (tick + 1) % args.every == 0:
            renderer.render(engine.snapshot())

    renderer.render(engine.snapshot())
    summary = engine.perf_monitor.summary
    if summary:
        renderer.console.print(
            f"  {summary['total_ticks']} ticks, avg {summary['avg_tick_ms']:.3f} ms/tick, "
            f"slowest {summary['slowest_tick_ms']:.3f} ms, "
            f"peak population {summary['peak_population']}"
        )
    return engine


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        run(args)
    except ComplexcityError as e:
        logger.error(f"Simulation failed: {e}")
        return 1
    except pydantic.ValidationError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
