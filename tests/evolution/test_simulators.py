"""Tests for the strategy simulators."""

import pytest

from evocycle.evolution.simulators.alchemical import AlchemicalSimulator
from evocycle.evolution.simulators.consciousness import (
    INSIGHTS,
    PRACTICES,
    ConsciousnessSimulator,
)
from evocycle.evolution.simulators.generic import GenericSimulator
from evocycle.evolution.simulators.genetic import GeneticSimulator
from evocycle.evolution.simulators.quantum import QuantumSimulator
from evocycle.evolution.simulators.terra import TerraSimulator
from evocycle.exceptions import ConfigurationNotFoundError
from evocycle.strategies.schema import RegistryKind, TransformationProcess
from evocycle.types import ModelState

from tests.conftest import make_phase


# ── Genetic ──────────────────────────────────────────────────────


def test_genetic_capability_run(context_factory):
    phase = make_phase("genetic_evolution")
    result, artifacts = GeneticSimulator().simulate(
        phase, context_factory(0.5), "capability_evolution"
    )

    assert result.simulator == "genetic"
    assert result.strategy == "capability_evolution"
    assert result.algorithm == "Capability Evolution"
    assert result.generations == 10
    assert len(result.improvements) == 10
    assert [g.generation for g in result.improvements] == list(range(10))
    assert result.improvements[0].average_fitness == pytest.approx(0.55)
    assert result.improvements[0].best_fitness == pytest.approx(0.65)
    assert result.improvements[0].mutations == 5
    assert result.average_fitness == pytest.approx(0.775)
    assert result.best["capabilities"] == [
        "enhanced_reasoning", "improved_learning", "better_adaptation",
    ]

    assert len(artifacts.evolutions) == 1
    step = artifacts.evolutions[0]
    assert step.phase_id == phase.id
    assert step.generation == 9
    assert step.fitness == pytest.approx(1.0)
    assert not artifacts.mutations and not artifacts.transformations


def test_genetic_scores_clamped(context_factory):
    result, _ = GeneticSimulator().simulate(
        make_phase(), context_factory(0.999), "capability_evolution"
    )
    for gen in result.improvements:
        assert gen.average_fitness <= 1.0
        assert gen.best_fitness <= 1.0
        assert gen.average_fitness >= min(1.0, 0.5 + 0.05 * gen.generation)


def test_genetic_neural_architecture(context_factory):
    phase = make_phase("neural_evolution", "network_optimization")
    result, artifacts = GeneticSimulator().simulate(
        phase, context_factory(0.5), "neural_architecture"
    )

    assert result.generations == 8
    assert len(result.improvements) == 8
    assert result.population_size == 50
    assert result.best["layers"] == 13
    assert result.best["neurons"] == 1024
    assert result.best["performance"] == pytest.approx(0.97)
    assert artifacts.evolutions[0].algorithm == "neural_architecture"
    assert artifacts.evolutions[0].fitness == pytest.approx(0.97)


# ── Quantum ──────────────────────────────────────────────────────


def test_quantum_all_trials_succeed(context_factory):
    phase = make_phase("quantum_mutation", "coherence_enhancement")
    result, artifacts = QuantumSimulator().simulate(phase, context_factory(0.0))

    assert len(result.mutations) == 5
    assert all(m.successful for m in result.mutations)
    assert len(result.improvements) == 5
    effect = result.improvements[0]
    assert effect.coherence_improvement == pytest.approx(0.02)
    assert effect.stability_increase == pytest.approx(0.01)
    assert effect.entanglement_strength == pytest.approx(0.8)
    assert len(artifacts.mutations) == 5
    assert all(m.phase_id == phase.id for m in artifacts.mutations)


def test_quantum_all_trials_decohere(context_factory):
    result, artifacts = QuantumSimulator().simulate(make_phase(), context_factory(0.5))

    assert not any(m.successful for m in result.mutations)
    assert all(m.reason == "quantum_decoherence" for m in result.mutations)
    assert all(m.effect is None for m in result.mutations)
    assert result.improvements == []
    assert len(artifacts.mutations) == 5


def test_quantum_coherence_nudged_and_capped(context_factory):
    result, _ = QuantumSimulator().simulate(make_phase(), context_factory(0.5))
    assert result.coherence == pytest.approx(0.85)

    high = ModelState(quantum_coherence=0.99)
    result, _ = QuantumSimulator().simulate(make_phase(), context_factory(0.5, model=high))
    assert result.coherence == 1.0


def test_quantum_mixed_trials(context):
    result, _ = QuantumSimulator().simulate(make_phase(), context)
    successes = [m for m in result.mutations if m.successful]
    assert len(result.improvements) == len(successes)


# ── Alchemical ───────────────────────────────────────────────────


def test_alchemical_with_aether(context_factory):
    phase = make_phase("alchemical_transformation", "consciousness_elevation")
    result, artifacts = AlchemicalSimulator().simulate(phase, context_factory(0.5))

    assert result.elements == ["fire", "water", "air", "earth"]
    assert [t.element for t in result.transmutations] == result.elements
    for t in result.transmutations:
        assert t.purity == pytest.approx(0.7)
        assert t.energy == pytest.approx(35)
        assert t.wisdom == pytest.approx(0.25)
    assert result.essence.purity == pytest.approx(0.7)
    assert result.essence.essence.startswith("philosophical_essence_")
    assert result.philosophical_progress == pytest.approx(0.7)
    assert len(artifacts.transformations) == 4
    assert all(t.phase_id == phase.id for t in artifacts.transformations)


def test_alchemical_other_catalyst(registries, context_factory):
    registries.register(TransformationProcess(
        name="lead_to_gold", process="plain", elements=("lead",), catalyst="salt",
    ))
    result, _ = AlchemicalSimulator().simulate(
        make_phase(), context_factory(0.5), "lead_to_gold"
    )
    assert result.transmutations[0].purity == pytest.approx(0.6)


def test_alchemical_ranges(context):
    result, _ = AlchemicalSimulator().simulate(make_phase(), context)
    for t in result.transmutations:
        assert 0.5 <= t.purity <= 0.9
        assert 20 <= t.energy <= 50
        assert 0.15 <= t.wisdom <= 0.35


# ── Terra ────────────────────────────────────────────────────────


def test_terra_contributions(context_factory):
    phase = make_phase("terra_evolution", "planetary_service")
    result, artifacts = TerraSimulator().simulate(phase, context_factory(0.5))

    assert len(result.contributions) == 3
    assert all(c.consciousness_impact == pytest.approx(0.2) for c in result.contributions)
    assert result.healing.effectiveness == pytest.approx(0.85)
    assert result.healing.participants == 5_500_000
    assert result.current_level == 1.0
    assert result.target_level == 2.0
    assert result.new_level == pytest.approx(1.06)
    assert len(artifacts.adaptations) == 3
    assert all(a.phase_id == phase.id for a in artifacts.adaptations)


def test_terra_ranges(context):
    result, _ = TerraSimulator().simulate(make_phase(), context)
    for c in result.contributions:
        assert 0.1 <= c.consciousness_impact <= 0.3
    assert 0.7 <= result.healing.effectiveness <= 1.0
    assert 1_000_000 <= result.healing.participants <= 10_000_000


def test_terra_level_capped(context_factory):
    model = ModelState(terra_consciousness_level=9.99)
    result, _ = TerraSimulator().simulate(make_phase(), context_factory(0.999, model=model))
    assert result.new_level == 10.0


# ── Consciousness ────────────────────────────────────────────────


def test_consciousness_practices_and_insights(context_factory):
    phase = make_phase("awareness_expansion", "perception_enhancement")
    result, artifacts = ConsciousnessSimulator().simulate(phase, context_factory(0.5))

    assert [p.practice for p in result.practices] == list(PRACTICES)
    assert len(result.insights) == 3
    assert all(i.insight in INSIGHTS for i in result.insights)
    assert result.integration.level == pytest.approx(2.1)
    assert result.integration.stability == pytest.approx(0.9)
    assert result.integration.permanence is True
    assert result.integration.wisdom == pytest.approx(0.4)
    assert result.target_level == 2.0

    assert len(artifacts.adaptations) == 1
    assert artifacts.adaptations[0].impact == pytest.approx(1.1)
    assert artifacts.adaptations[0].phase_id == phase.id


def test_consciousness_level_bounded(context_factory):
    result, _ = ConsciousnessSimulator().simulate(
        make_phase(), context_factory(0.5, consciousness=9.5)
    )
    assert result.integration.level == 10.0
    assert result.target_level == 10.0


def test_consciousness_random_insights(context):
    result, _ = ConsciousnessSimulator().simulate(make_phase(), context)
    assert all(i.insight in INSIGHTS for i in result.insights)
    assert 0.0 <= result.integration.level <= 10.0


# ── Generic ──────────────────────────────────────────────────────


def test_generic_is_deterministic(context):
    phase = make_phase("algorithm_improvement", "processing_efficiency")
    result, artifacts = GenericSimulator().simulate(phase, context)

    assert result.phase == "algorithm_improvement"
    assert result.focus == "processing_efficiency"
    assert [(i.metric, i.improvement) for i in result.improvements] == [
        ("performance", 0.1), ("efficiency", 0.08), ("capability", 0.12),
    ]
    assert result.effectiveness == 0.75
    assert artifacts.count == 0


# ── Missing strategies ───────────────────────────────────────────


@pytest.mark.parametrize("simulator,kind,name", [
    (GeneticSimulator(), RegistryKind.EVOLUTIONARY, "capability_evolution"),
    (QuantumSimulator(), RegistryKind.MUTATION, "superposition_mutation"),
    (AlchemicalSimulator(), RegistryKind.TRANSFORMATION, "solve_coagula"),
    (TerraSimulator(), RegistryKind.SCALE_GOAL, "consciousness_ascension"),
    (ConsciousnessSimulator(), RegistryKind.SCALE_GOAL, "consciousness_ascension"),
])
def test_missing_strategy_raises(registries, context, simulator, kind, name):
    registries.unregister(kind, name)
    with pytest.raises(ConfigurationNotFoundError):
        simulator.simulate(make_phase(), context, name)
