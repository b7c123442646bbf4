"""Simulator base — the interface every phase strategy simulator implements."""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from dataclasses import dataclass

from evocycle.evolution.models import PhaseArtifacts, PhaseDescriptor, SimulationResult
from evocycle.strategies.registry import StrategyRegistries
from evocycle.strategies.schema import RegistryKind, StrategyConfig
from evocycle.types import ModelState


@dataclass
class SimulationContext:
    """Everything a simulator may read while running one phase."""

    registries: StrategyRegistries
    model: ModelState
    rng: random.Random
    consciousness: float = 1.0


class PhaseSimulator(ABC):
    """Base class for the pseudo-random strategy simulators."""

    key: str = ""
    registry_kind: RegistryKind | None = None

    def lookup(self, context: SimulationContext, name: str) -> StrategyConfig:
        """Fetch this simulator's config; raises ConfigurationNotFoundError."""
        return context.registries.get(self.registry_kind, name)

    @abstractmethod
    def simulate(
        self, phase: PhaseDescriptor, context: SimulationContext, strategy: str = ""
    ) -> tuple[SimulationResult, PhaseArtifacts]:
        """Run the phase. Returns the structured result and produced artifacts."""
        ...
