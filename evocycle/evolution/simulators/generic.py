"""GenericSimulator — deterministic fallback for phases without a strategy."""

from __future__ import annotations

from pydantic import BaseModel, Field

from evocycle.evolution.models import PhaseArtifacts, PhaseDescriptor, SimulationResult
from evocycle.evolution.simulators.base import PhaseSimulator, SimulationContext


class Improvement(BaseModel):
    metric: str
    improvement: float


class GenericResult(SimulationResult):
    phase: str
    focus: str
    process: str = "generic_evolution"
    improvements: list[Improvement] = Field(default_factory=list)
    effectiveness: float = 0.75


class GenericSimulator(PhaseSimulator):
    key = "generic"

    def simulate(
        self, phase: PhaseDescriptor, context: SimulationContext, strategy: str = ""
    ) -> tuple[GenericResult, PhaseArtifacts]:
        result = GenericResult(
            simulator=self.key,
            phase=phase.name,
            focus=phase.focus,
            improvements=[
                Improvement(metric="performance", improvement=0.1),
                Improvement(metric="efficiency", improvement=0.08),
                Improvement(metric="capability", improvement=0.12),
            ],
        )
        return result, PhaseArtifacts()
