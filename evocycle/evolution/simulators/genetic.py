"""GeneticSimulator — generational runs for capability and neural architectures."""

from __future__ import annotations

from typing import Any, NamedTuple

from pydantic import BaseModel, Field

from evocycle.evolution.models import (
    EvolutionStep,
    PhaseArtifacts,
    PhaseDescriptor,
    SimulationResult,
)
from evocycle.evolution.simulators.base import PhaseSimulator, SimulationContext
from evocycle.strategies.schema import EvolutionaryStrategy, RegistryKind


class GeneticProfile(NamedTuple):
    generations: int
    baseline: float
    step: float  # baseline gain per generation
    spread: float  # max random improvement per generation
    best_bonus: float
    architecture: bool = False


PROFILES: dict[str, GeneticProfile] = {
    "capability_evolution": GeneticProfile(10, 0.5, 0.05, 0.1, 0.1),
    "neural_architecture": GeneticProfile(8, 0.6, 0.04, 0.08, 0.05, architecture=True),
}

_CAPABILITIES = ["enhanced_reasoning", "improved_learning", "better_adaptation"]


class GenerationResult(BaseModel):
    generation: int
    average_fitness: float
    best_fitness: float
    best: dict[str, Any] = Field(default_factory=dict)
    mutations: int = 0
    crossovers: int = 0


class GeneticResult(SimulationResult):
    algorithm: str
    population_size: int
    generations: int
    best: dict[str, Any] = Field(default_factory=dict)
    average_fitness: float = 0.0
    improvements: list[GenerationResult] = Field(default_factory=list)


class GeneticSimulator(PhaseSimulator):
    """Simulate a genetic algorithm over a fixed number of generations."""

    key = "genetic"
    registry_kind = RegistryKind.EVOLUTIONARY

    def simulate(
        self,
        phase: PhaseDescriptor,
        context: SimulationContext,
        strategy: str = "capability_evolution",
    ) -> tuple[GeneticResult, PhaseArtifacts]:
        config: EvolutionaryStrategy = self.lookup(context, strategy)
        profile = PROFILES.get(config.name, PROFILES["capability_evolution"])

        generations = [
            self._generation(config, profile, g, context)
            for g in range(profile.generations)
        ]
        last = generations[-1]

        result = GeneticResult(
            simulator=self.key,
            strategy=config.name,
            algorithm=config.label,
            population_size=config.population_size,
            generations=profile.generations,
            best=last.best,
            average_fitness=sum(g.average_fitness for g in generations) / len(generations),
            improvements=generations,
        )
        artifacts = PhaseArtifacts(evolutions=[
            EvolutionStep(
                phase_id=phase.id,
                algorithm=config.name,
                generation=last.generation,
                fitness=last.best_fitness,
                detail=last.best,
            )
        ])
        return result, artifacts

    def _generation(
        self,
        config: EvolutionaryStrategy,
        profile: GeneticProfile,
        generation: int,
        context: SimulationContext,
    ) -> GenerationResult:
        base = profile.baseline + generation * profile.step
        improvement = context.rng.uniform(0, profile.spread)
        average = min(1.0, base + improvement)
        best = min(1.0, base + improvement + profile.best_bonus)

        if profile.architecture:
            best_candidate: dict[str, Any] = {
                "layers": 6 + generation,
                "neurons": 128 * (generation + 1),
                "activation": "gelu",
                "optimization": "adam",
                "performance": best,
            }
        else:
            best_candidate = {"capabilities": list(_CAPABILITIES), "fitness": best}

        return GenerationResult(
            generation=generation,
            average_fitness=average,
            best_fitness=best,
            best=best_candidate,
            mutations=int(config.population_size * config.mutation_rate),
            crossovers=int(config.population_size * config.crossover_rate / 2),
        )
