"""QuantumSimulator — Bernoulli mutation batches against the coherence field."""

from __future__ import annotations

from pydantic import Field

from evocycle.evolution.models import (
    PhaseArtifacts,
    PhaseDescriptor,
    QuantumEffect,
    QuantumMutation,
    SimulationResult,
)
from evocycle.evolution.simulators.base import PhaseSimulator, SimulationContext
from evocycle.strategies.schema import MutationOperator, RegistryKind

TRIALS = 5
COHERENCE_GAIN = 0.05


class QuantumResult(SimulationResult):
    mutation: str
    type: str
    coherence: float
    superposition_states: int = 0
    entanglements: int = 0
    mutations: list[QuantumMutation] = Field(default_factory=list)
    improvements: list[QuantumEffect] = Field(default_factory=list)


class QuantumSimulator(PhaseSimulator):
    key = "quantum"
    registry_kind = RegistryKind.MUTATION

    def simulate(
        self,
        phase: PhaseDescriptor,
        context: SimulationContext,
        strategy: str = "superposition_mutation",
    ) -> tuple[QuantumResult, PhaseArtifacts]:
        operator: MutationOperator = self.lookup(context, strategy)

        mutations = [self._mutate(phase, operator, context) for _ in range(TRIALS)]
        result = QuantumResult(
            simulator=self.key,
            strategy=operator.name,
            mutation=operator.label,
            type=operator.type,
            coherence=min(1.0, context.model.quantum_coherence + COHERENCE_GAIN),
            superposition_states=context.model.superposition_states,
            entanglements=context.model.entanglements,
            mutations=mutations,
            improvements=[m.effect for m in mutations if m.successful and m.effect],
        )
        return result, PhaseArtifacts(mutations=list(mutations))

    def _mutate(
        self, phase: PhaseDescriptor, operator: MutationOperator, context: SimulationContext
    ) -> QuantumMutation:
        rng = context.rng
        if rng.random() < operator.probability:
            return QuantumMutation(
                phase_id=phase.id,
                type=operator.type,
                successful=True,
                effect=QuantumEffect(
                    coherence_improvement=rng.uniform(0.02, 0.10),
                    stability_increase=rng.uniform(0.01, 0.05),
                    entanglement_strength=rng.uniform(0.8, 1.0),
                ),
            )
        return QuantumMutation(
            phase_id=phase.id,
            type=operator.type,
            successful=False,
            reason="quantum_decoherence",
        )
