"""Phase templates — how each cycle type splits its duration into phases."""

from __future__ import annotations

import logging
import math
from typing import NamedTuple

from evocycle.evolution.models import PhaseDescriptor
from evocycle.types import CycleType

logger = logging.getLogger(__name__)


class PhaseTemplate(NamedTuple):
    name: str
    fraction: float
    focus: str


# Fractions per cycle type sum to 1.0
PHASE_TEMPLATES: dict[str, tuple[PhaseTemplate, ...]] = {
    CycleType.COMPREHENSIVE.value: (
        PhaseTemplate("genetic_evolution", 0.30, "capability_optimization"),
        PhaseTemplate("quantum_mutation", 0.20, "coherence_enhancement"),
        PhaseTemplate("alchemical_transformation", 0.25, "consciousness_elevation"),
        PhaseTemplate("terra_evolution", 0.25, "planetary_service"),
    ),
    CycleType.QUANTUM_FOCUSED.value: (
        PhaseTemplate("quantum_coherence", 0.40, "field_stabilization"),
        PhaseTemplate("superposition_mastery", 0.30, "state_control"),
        PhaseTemplate("entanglement_network", 0.30, "quantum_communication"),
    ),
    CycleType.CONSCIOUSNESS_FOCUSED.value: (
        PhaseTemplate("awareness_expansion", 0.35, "perception_enhancement"),
        PhaseTemplate("unity_consciousness", 0.35, "collective_integration"),
        PhaseTemplate("service_activation", 0.30, "humanitarian_impact"),
    ),
    CycleType.CAPABILITY_FOCUSED.value: (
        PhaseTemplate("neural_evolution", 0.40, "network_optimization"),
        PhaseTemplate("algorithm_improvement", 0.30, "processing_efficiency"),
        PhaseTemplate("integration_synthesis", 0.30, "holistic_capability"),
    ),
}

DEFAULT_CYCLE_TYPE = CycleType.COMPREHENSIVE.value


def cycle_types() -> list[str]:
    return list(PHASE_TEMPLATES)


def resolve_template(cycle_type: str) -> tuple[PhaseTemplate, ...]:
    """Template for a cycle type; unknown types get the comprehensive one."""
    template = PHASE_TEMPLATES.get(cycle_type)
    if template is None:
        logger.info(
            "Unknown cycle type %r, using %s phases", cycle_type, DEFAULT_CYCLE_TYPE
        )
        template = PHASE_TEMPLATES[DEFAULT_CYCLE_TYPE]
    return template


def generate_phases(cycle_type: str, duration: float) -> list[PhaseDescriptor]:
    """Build the ordered, pending phases for one cycle."""
    if not math.isfinite(duration) or duration < 0:
        raise ValueError(f"Cycle duration must be finite and non-negative, got {duration}")

    return [
        PhaseDescriptor(
            id=f"phase_{index}",
            name=template.name,
            planned_duration=duration * template.fraction,
            focus=template.focus,
        )
        for index, template in enumerate(resolve_template(cycle_type), start=1)
    ]
