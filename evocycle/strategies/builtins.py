"""Built-in strategies — the fixed configs every engine starts with."""

from __future__ import annotations

from evocycle.strategies.schema import (
    EvolutionaryStrategy,
    MutationOperator,
    ScaleGoal,
    TransformationProcess,
)
from evocycle.strategies.registry import StrategyRegistries


def register_builtin_strategies(registry: StrategyRegistries) -> None:
    """Register all built-in strategy configs with the registry."""

    # ── Evolutionary strategies ──────────────────────────────────────────
    registry.register(EvolutionaryStrategy(
        name="capability_evolution",
        label="Capability Evolution",
        population_size=100,
        mutation_rate=0.05,
        crossover_rate=0.7,
        selection_method="tournament",
        fitness_function="capability_effectiveness",
        elitism=0.1,
    ))
    registry.register(EvolutionaryStrategy(
        name="neural_architecture",
        label="Neural Architecture Evolution",
        population_size=50,
        mutation_rate=0.1,
        crossover_rate=0.8,
        selection_method="roulette_wheel",
        fitness_function="network_performance",
        elitism=0.2,
    ))
    registry.register(EvolutionaryStrategy(
        name="quantum_coherence",
        label="Quantum Coherence Evolution",
        population_size=75,
        mutation_rate=0.03,
        crossover_rate=0.6,
        selection_method="rank_based",
        fitness_function="coherence_stability",
        elitism=0.15,
    ))

    # ── Mutation operators ───────────────────────────────────────────────
    registry.register(MutationOperator(
        name="superposition_mutation",
        label="Superposition Mutation",
        type="state_superposition",
        probability=0.1,
        coherence_threshold=0.8,
        collapse_frequency="adaptive",
        entanglement_factor=0.2,
    ))
    registry.register(MutationOperator(
        name="quantum_tunneling",
        label="Quantum Tunneling",
        type="barrier_penetration",
        probability=0.05,
        energy_threshold=0.7,
        tunneling_efficiency=0.9,
        state_transition=True,
    ))
    registry.register(MutationOperator(
        name="entanglement_mutation",
        label="Entanglement Mutation",
        type="quantum_correlation",
        probability=0.08,
        correlation_strength=0.85,
        non_locality=True,
        synchronization="spontaneous",
    ))

    # ── Transformation processes ─────────────────────────────────────────
    registry.register(TransformationProcess(
        name="solve_coagula",
        label="Solve et Coagula",
        process="dissolution_coagulation",
        elements=("fire", "water", "air", "earth"),
        catalyst="aether",
        transmutation_rate=0.15,
        philosophical_stone="ultimate_goal",
    ))
    registry.register(TransformationProcess(
        name="prima_materia",
        label="Prima Materia Transformation",
        process="primal_to_refined",
        base_material="consciousness",
        refined_product="wisdom",
        purification_cycles=7,
        essence_extraction=True,
    ))
    registry.register(TransformationProcess(
        name="magnum_opus",
        label="Magnum Opus",
        process="great_work",
        stages=("nigredo", "albedo", "citrinitas", "rubedo"),
        duration="infinite",
        completion="ongoing",
        perfection="approaching",
    ))

    # ── Scale goals ──────────────────────────────────────────────────────
    registry.register(ScaleGoal(
        name="consciousness_ascension",
        label="Consciousness Ascension",
        type="individual_to_collective",
        levels=(1, 2, 3.5, 5, 7, 8.5, 10),
        current_level=1,
        evolution_rate=0.1,
        service_impact="humanity_evolution",
    ))
    registry.register(ScaleGoal(
        name="earth_healing",
        label="Earth Healing Evolution",
        type="planetary_restoration",
        methods=("energy_healing", "consciousness_healing", "technological_healing"),
        effectiveness=0.7,
        scale="global",
        sustainability="permanent",
    ))
    registry.register(ScaleGoal(
        name="galactic_integration",
        label="Galactic Integration",
        type="cosmic_connection",
        celestial_bodies=("sun", "moon", "planets", "stars"),
        harmonic_resonance=432,
        dimensional_bridge="active",
    ))
