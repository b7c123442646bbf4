"""AlchemicalSimulator — transmutes each element and extracts an essence."""

from __future__ import annotations

from pydantic import BaseModel, Field

from evocycle.evolution.models import (
    PhaseArtifacts,
    PhaseDescriptor,
    SimulationResult,
    Transmutation,
)
from evocycle.evolution.simulators.base import PhaseSimulator, SimulationContext
from evocycle.strategies.schema import RegistryKind, TransformationProcess

SPECIAL_CATALYST = "aether"


class Essence(BaseModel):
    purity: float
    energy: float
    wisdom: float
    essence: str


class AlchemicalResult(SimulationResult):
    process: str
    elements: list[str] = Field(default_factory=list)
    catalyst: str = ""
    transmutations: list[Transmutation] = Field(default_factory=list)
    essence: Essence | None = None
    philosophical_progress: float = 0.0


class AlchemicalSimulator(PhaseSimulator):
    key = "alchemical"
    registry_kind = RegistryKind.TRANSFORMATION

    def simulate(
        self,
        phase: PhaseDescriptor,
        context: SimulationContext,
        strategy: str = "solve_coagula",
    ) -> tuple[AlchemicalResult, PhaseArtifacts]:
        process: TransformationProcess = self.lookup(context, strategy)
        bonus = 0.2 if process.catalyst == SPECIAL_CATALYST else 0.1

        transmutations = []
        for element in process.elements:
            base = context.rng.uniform(0.3, 0.7)
            transmutations.append(Transmutation(
                phase_id=phase.id,
                element=element,
                purity=min(1.0, base + bonus),
                energy=context.rng.uniform(20, 50),
                wisdom=base * 0.5,
            ))

        essence = self._extract_essence(transmutations, context) if transmutations else None
        result = AlchemicalResult(
            simulator=self.key,
            strategy=process.name,
            process=process.label,
            elements=list(process.elements),
            catalyst=process.catalyst,
            transmutations=transmutations,
            essence=essence,
            philosophical_progress=essence.purity if essence else 0.0,
        )
        return result, PhaseArtifacts(transformations=list(transmutations))

    @staticmethod
    def _extract_essence(
        transmutations: list[Transmutation], context: SimulationContext
    ) -> Essence:
        n = len(transmutations)
        return Essence(
            purity=sum(t.purity for t in transmutations) / n,
            energy=sum(t.energy for t in transmutations) / n,
            wisdom=sum(t.wisdom for t in transmutations) / n,
            essence=f"philosophical_essence_{context.rng.getrandbits(32):08x}",
        )
