"""Strategy schema — immutable parameter sets for the simulated algorithms."""

from __future__ import annotations

from enum import Enum
from typing import ClassVar

from pydantic import BaseModel, Field


class RegistryKind(str, Enum):
    EVOLUTIONARY = "evolutionary"
    MUTATION = "mutation"
    TRANSFORMATION = "transformation"
    SCALE_GOAL = "scale_goal"


class StrategyConfig(BaseModel):
    """Base for every named strategy config. Frozen once built."""

    kind: ClassVar[RegistryKind]

    name: str
    label: str = ""

    model_config = {"frozen": True}


class EvolutionaryStrategy(StrategyConfig):
    """Genetic-algorithm style population parameters."""

    kind: ClassVar[RegistryKind] = RegistryKind.EVOLUTIONARY

    population_size: int
    mutation_rate: float
    crossover_rate: float
    selection_method: str
    fitness_function: str
    elitism: float = 0.0


class MutationOperator(StrategyConfig):
    """Quantum-flavoured mutation operator."""

    kind: ClassVar[RegistryKind] = RegistryKind.MUTATION

    type: str
    probability: float
    coherence_threshold: float | None = None
    collapse_frequency: str = ""
    entanglement_factor: float | None = None
    energy_threshold: float | None = None
    tunneling_efficiency: float | None = None
    state_transition: bool = False
    correlation_strength: float | None = None
    non_locality: bool = False
    synchronization: str = ""


class TransformationProcess(StrategyConfig):
    """Alchemical transformation recipe."""

    kind: ClassVar[RegistryKind] = RegistryKind.TRANSFORMATION

    process: str
    elements: tuple[str, ...] = ()
    catalyst: str = ""
    transmutation_rate: float = 0.0
    philosophical_stone: str = ""
    base_material: str = ""
    refined_product: str = ""
    purification_cycles: int = 0
    essence_extraction: bool = False
    stages: tuple[str, ...] = ()
    duration: str = ""
    completion: str = ""
    perfection: str = ""


class ScaleGoal(StrategyConfig):
    """Large-scale (planetary or cosmic) evolution goal."""

    kind: ClassVar[RegistryKind] = RegistryKind.SCALE_GOAL

    type: str
    levels: tuple[float, ...] = ()
    current_level: float = 0.0
    evolution_rate: float = 0.0
    service_impact: str = ""
    methods: tuple[str, ...] = ()
    effectiveness: float | None = None
    scale: str = ""
    sustainability: str = ""
    celestial_bodies: tuple[str, ...] = ()
    harmonic_resonance: float | None = None
    dimensional_bridge: str = ""

    def next_level(self) -> float:
        """The configured level after current_level, or current_level at the top."""
        for level in self.levels:
            if level > self.current_level:
                return level
        return self.current_level


class RegistrySizes(BaseModel):
    evolutionary: int = 0
    mutation: int = 0
    transformation: int = 0
    scale_goal: int = 0

    @property
    def total(self) -> int:
        return self.evolutionary + self.mutation + self.transformation + self.scale_goal


class StrategyListing(BaseModel):
    """Flat view of one registry entry, for display."""

    kind: RegistryKind
    name: str
    label: str
    parameters: dict = Field(default_factory=dict)
