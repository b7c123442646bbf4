"""Records produced and mutated during an evolution cycle."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, SerializeAsAny

from evocycle.types import CycleStatus, PhaseStatus, utcnow


# ── Artifacts ────────────────────────────────────────────────────


class QuantumEffect(BaseModel):
    coherence_improvement: float
    stability_increase: float
    entanglement_strength: float


class QuantumMutation(BaseModel):
    """One Bernoulli mutation trial."""

    phase_id: str
    type: str
    successful: bool
    effect: QuantumEffect | None = None
    reason: str = ""


class Transmutation(BaseModel):
    """One element refined by an alchemical process."""

    phase_id: str
    element: str
    from_state: str = "crude"
    to_state: str = "refined"
    purity: float
    energy: float
    wisdom: float


class Adaptation(BaseModel):
    """A consciousness-level change contributed by a phase."""

    phase_id: str
    kind: str
    impact: float
    detail: dict[str, Any] = Field(default_factory=dict)


class EvolutionStep(BaseModel):
    """The best candidate a genetic run settled on."""

    phase_id: str
    algorithm: str
    generation: int
    fitness: float
    detail: dict[str, Any] = Field(default_factory=dict)


class PhaseArtifacts(BaseModel):
    mutations: list[QuantumMutation] = Field(default_factory=list)
    adaptations: list[Adaptation] = Field(default_factory=list)
    transformations: list[Transmutation] = Field(default_factory=list)
    evolutions: list[EvolutionStep] = Field(default_factory=list)

    @property
    def count(self) -> int:
        return (
            len(self.mutations) + len(self.adaptations)
            + len(self.transformations) + len(self.evolutions)
        )


# ── Phase & cycle records ────────────────────────────────────────


class SimulationResult(BaseModel):
    """Base for the structured output of every strategy simulator."""

    simulator: str
    strategy: str = ""


class PhaseResult(BaseModel):
    """What one phase produced. Attached to its PhaseDescriptor."""

    phase_name: str
    focus: str
    process: SerializeAsAny[SimulationResult]
    produced_artifacts: PhaseArtifacts = Field(default_factory=PhaseArtifacts)
    effectiveness: float = 0.0


class PhaseDescriptor(BaseModel):
    """One ordered step of a cycle."""

    id: str
    name: str
    planned_duration: float
    focus: str
    start_time: datetime | None = None
    end_time: datetime | None = None
    status: PhaseStatus = PhaseStatus.PENDING
    result: PhaseResult | None = None


class CycleRecord(BaseModel):
    """A full evolution cycle, from allocation to finalization."""

    id: str
    type: str
    planned_duration: float
    start_time: datetime = Field(default_factory=utcnow)
    end_time: datetime | None = None
    phases: list[PhaseDescriptor] = Field(default_factory=list)
    mutations: list[QuantumMutation] = Field(default_factory=list)
    adaptations: list[Adaptation] = Field(default_factory=list)
    transformations: list[Transmutation] = Field(default_factory=list)
    evolutions: list[EvolutionStep] = Field(default_factory=list)
    fitness: float = 0.0
    complexity: float = 0.0
    consciousness: float = 0.0
    status: CycleStatus = CycleStatus.ACTIVE
    error: str = ""

    def __repr__(self) -> str:
        return (
            f"CycleRecord(id={self.id}, type={self.type}, "
            f"status={self.status.value}, fitness={self.fitness:.3f}, "
            f"complexity={self.complexity:.2f}, "
            f"consciousness={self.consciousness:.2f})"
        )
