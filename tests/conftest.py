"""Shared test fixtures for the complexcity test suite."""

from __future__ import annotations

import random

import pytest

from complexcity.agents.registry import PersonRegistry
from complexcity.config import SimulationConfig
from complexcity.memory.social import SocialGraph
from complexcity.simulation.engine import SimulationEngine
from complexcity.simulation.world import World


@pytest.fixture
def config() -> SimulationConfig:
    """Default config with a fixed seed."""
    return SimulationConfig(seed=42)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def world(config: SimulationConfig) -> World:
    """An empty town."""
    return World(config.building_min_distance)


@pytest.fixture
def registry(config: SimulationConfig) -> PersonRegistry:
    return PersonRegistry(config.population_cap)


@pytest.fixture
def social_graph(rng: random.Random) -> SocialGraph:
    return SocialGraph(rng)


@pytest.fixture
def engine(config: SimulationConfig) -> SimulationEngine:
    """A fresh, not yet started, simulation engine."""
    return SimulationEngine(config)


@pytest.fixture
def started_engine(engine: SimulationEngine) -> SimulationEngine:
    """An engine with its seed person spawned."""
    engine.start()
    return engine
