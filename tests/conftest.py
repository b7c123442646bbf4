"""Shared test fixtures — seeded randomness and zero-pause engines."""

from __future__ import annotations

import random

import pytest
import pytest_asyncio

from evocycle.events.bus import EventBus
from evocycle.evolution.engine import EvolutionEngine
from evocycle.evolution.models import PhaseDescriptor
from evocycle.evolution.simulators.base import SimulationContext
from evocycle.strategies.registry import StrategyRegistries
from evocycle.telemetry.logging import setup_logging
from evocycle.types import ModelState

setup_logging("DEBUG", install_handler=False)


class FixedRandom(random.Random):
    """Random source whose random() always returns the same value.

    uniform(a, b) is a + (b - a) * random(), so every uniform draw lands at
    the same relative point of its range.
    """

    def __init__(self, value: float = 0.5) -> None:
        super().__init__(0)
        self.value = value

    def random(self) -> float:
        return self.value


def make_phase(
    name: str = "genetic_evolution",
    focus: str = "capability_optimization",
    phase_id: str = "phase_1",
    duration: float = 10.0,
) -> PhaseDescriptor:
    return PhaseDescriptor(id=phase_id, name=name, planned_duration=duration, focus=focus)


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def registries():
    regs = StrategyRegistries()
    regs.configure()
    return regs


@pytest.fixture
def context(registries, rng):
    return SimulationContext(registries=registries, model=ModelState(), rng=rng)


@pytest.fixture
def context_factory(registries):
    def _factory(
        value: float | None = None,
        model: ModelState | None = None,
        consciousness: float = 1.0,
    ) -> SimulationContext:
        return SimulationContext(
            registries=registries,
            model=model or ModelState(),
            rng=FixedRandom(value) if value is not None else random.Random(99),
            consciousness=consciousness,
        )
    return _factory


@pytest.fixture
def bus():
    return EventBus()


@pytest_asyncio.fixture
async def engine(bus):
    eng = EvolutionEngine(event_bus=bus, rng=random.Random(42), phase_pause=0)
    await eng.initialize()
    yield eng
    await bus.drain()
