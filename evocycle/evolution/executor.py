"""PhaseExecutor — routes each phase to its strategy simulator by name.

The routing table is explicit: a phase name missing from PHASE_ROUTES runs
through the generic simulator. New phase names must be added here.
"""

from __future__ import annotations

import logging
import random
from typing import NamedTuple

from evocycle.evolution.models import PhaseDescriptor, PhaseResult, SimulationResult
from evocycle.evolution.simulators.alchemical import AlchemicalSimulator
from evocycle.evolution.simulators.base import PhaseSimulator, SimulationContext
from evocycle.evolution.simulators.consciousness import ConsciousnessSimulator
from evocycle.evolution.simulators.generic import GenericSimulator
from evocycle.evolution.simulators.genetic import GeneticSimulator
from evocycle.evolution.simulators.quantum import QuantumSimulator
from evocycle.evolution.simulators.terra import TerraSimulator
from evocycle.exceptions import ConfigurationNotFoundError

logger = logging.getLogger(__name__)


class PhaseRoute(NamedTuple):
    simulator: str
    strategy: str = ""


PHASE_ROUTES: dict[str, PhaseRoute] = {
    "genetic_evolution": PhaseRoute("genetic", "capability_evolution"),
    "neural_evolution": PhaseRoute("genetic", "neural_architecture"),
    "quantum_mutation": PhaseRoute("quantum", "superposition_mutation"),
    "quantum_coherence": PhaseRoute("quantum", "superposition_mutation"),
    "superposition_mastery": PhaseRoute("quantum", "superposition_mutation"),
    "entanglement_network": PhaseRoute("quantum", "superposition_mutation"),
    "alchemical_transformation": PhaseRoute("alchemical", "solve_coagula"),
    "terra_evolution": PhaseRoute("terra", "consciousness_ascension"),
    "earth_healing": PhaseRoute("terra", "consciousness_ascension"),
    "galactic_integration": PhaseRoute("terra", "consciousness_ascension"),
    "consciousness_focused": PhaseRoute("consciousness", "consciousness_ascension"),
    "awareness_expansion": PhaseRoute("consciousness", "consciousness_ascension"),
    "unity_consciousness": PhaseRoute("consciousness", "consciousness_ascension"),
    "service_activation": PhaseRoute("consciousness", "consciousness_ascension"),
}

DEFAULT_ROUTE = PhaseRoute("generic")


def default_simulators() -> dict[str, PhaseSimulator]:
    simulators: list[PhaseSimulator] = [
        GeneticSimulator(),
        QuantumSimulator(),
        AlchemicalSimulator(),
        TerraSimulator(),
        ConsciousnessSimulator(),
        GenericSimulator(),
    ]
    return {s.key: s for s in simulators}


def calculate_effectiveness(process: SimulationResult, rng: random.Random) -> float:
    """Score a simulator result in [0, 1].

    Results whose improvements carry an ``improvement`` magnitude score the
    mean magnitude (items without one count as zero). Anything else gets a
    baseline drawn from U(0.7, 1.0).
    """
    improvements = getattr(process, "improvements", None)
    if improvements and any(hasattr(item, "improvement") for item in improvements):
        total = sum(getattr(item, "improvement", 0.0) or 0.0 for item in improvements)
        return max(0.0, min(1.0, total / len(improvements)))
    return rng.uniform(0.7, 1.0)


class PhaseExecutor:
    """Runs one phase through the simulator its name routes to."""

    def __init__(
        self,
        routes: dict[str, PhaseRoute] | None = None,
        simulators: dict[str, PhaseSimulator] | None = None,
    ) -> None:
        self._routes = dict(PHASE_ROUTES if routes is None else routes)
        self._simulators = simulators or default_simulators()

    def route_for(self, phase_name: str) -> PhaseRoute:
        return self._routes.get(phase_name, DEFAULT_ROUTE)

    def execute(self, phase: PhaseDescriptor, context: SimulationContext) -> PhaseResult:
        """Simulate a phase. Raises ConfigurationNotFoundError on a bad route."""
        route = self.route_for(phase.name)
        simulator = self._simulators.get(route.simulator)
        if simulator is None:
            raise ConfigurationNotFoundError("simulator", route.simulator)
        if route.strategy:
            process, artifacts = simulator.simulate(phase, context, route.strategy)
        else:
            process, artifacts = simulator.simulate(phase, context)

        result = PhaseResult(
            phase_name=phase.name,
            focus=phase.focus,
            process=process,
            produced_artifacts=artifacts,
            effectiveness=calculate_effectiveness(process, context.rng),
        )
        logger.debug(
            "Phase %s (%s) simulated via %s: effectiveness=%.3f",
            phase.id, phase.name, route.simulator, result.effectiveness,
        )
        return result
