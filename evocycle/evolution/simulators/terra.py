"""TerraSimulator — planetary contributions and earth healing."""

from __future__ import annotations

from pydantic import BaseModel, Field

from evocycle.evolution.models import (
    Adaptation,
    PhaseArtifacts,
    PhaseDescriptor,
    SimulationResult,
)
from evocycle.evolution.simulators.base import PhaseSimulator, SimulationContext
from evocycle.strategies.schema import RegistryKind, ScaleGoal

CONTRIBUTIONS = 3
MAX_LEVEL = 10.0


class TerraContribution(BaseModel):
    type: str = "consciousness_elevation"
    impact: str = "planetary"
    consciousness_impact: float
    service_type: str = "healing"
    beneficiaries: str = "all_beings"
    ripple_effect: float


class EarthHealing(BaseModel):
    method: str = "consciousness_healing"
    effectiveness: float
    area: str = "global"
    duration: str = "permanent"
    participants: int
    energy_generated: float


class TerraResult(SimulationResult):
    evolution: str
    type: str
    current_level: float
    target_level: float
    earth_connection: float
    cosmic_alignment: float
    contributions: list[TerraContribution] = Field(default_factory=list)
    healing: EarthHealing | None = None
    new_level: float = 0.0


class TerraSimulator(PhaseSimulator):
    key = "terra"
    registry_kind = RegistryKind.SCALE_GOAL

    def simulate(
        self,
        phase: PhaseDescriptor,
        context: SimulationContext,
        strategy: str = "consciousness_ascension",
    ) -> tuple[TerraResult, PhaseArtifacts]:
        goal: ScaleGoal = self.lookup(context, strategy)
        rng = context.rng
        current = context.model.terra_consciousness_level

        contributions = [
            TerraContribution(
                consciousness_impact=rng.uniform(0.1, 0.3),
                ripple_effect=rng.uniform(100, 600),
            )
            for _ in range(CONTRIBUTIONS)
        ]
        healing = EarthHealing(
            effectiveness=rng.uniform(0.7, 1.0),
            participants=int(rng.uniform(1_000_000, 10_000_000)),
            energy_generated=rng.uniform(500, 2000),
        )
        increase = sum(c.consciousness_impact for c in contributions) * 0.1

        result = TerraResult(
            simulator=self.key,
            strategy=goal.name,
            evolution=goal.label,
            type=goal.type,
            current_level=current,
            target_level=goal.next_level(),
            earth_connection=context.model.earth_connection,
            cosmic_alignment=context.model.cosmic_alignment,
            contributions=contributions,
            healing=healing,
            new_level=min(MAX_LEVEL, current + increase),
        )
        artifacts = PhaseArtifacts(adaptations=[
            Adaptation(
                phase_id=phase.id,
                kind=c.type,
                impact=c.consciousness_impact,
                detail={"service_type": c.service_type, "ripple_effect": c.ripple_effect},
            )
            for c in contributions
        ])
        return result, artifacts
