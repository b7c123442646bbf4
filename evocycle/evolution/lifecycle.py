"""Phase and cycle lifecycles — enforce forward-only status transitions."""

from __future__ import annotations

from evocycle.evolution.models import CycleRecord, PhaseDescriptor
from evocycle.exceptions import LifecycleError
from evocycle.types import CycleStatus, PhaseStatus, utcnow

VALID_PHASE_TRANSITIONS: dict[PhaseStatus, set[PhaseStatus]] = {
    PhaseStatus.PENDING: {PhaseStatus.ACTIVE},
    PhaseStatus.ACTIVE: {PhaseStatus.COMPLETED},
    PhaseStatus.COMPLETED: set(),  # terminal
}

VALID_CYCLE_TRANSITIONS: dict[CycleStatus, set[CycleStatus]] = {
    CycleStatus.ACTIVE: {CycleStatus.COMPLETED, CycleStatus.FAILED},
    CycleStatus.COMPLETED: set(),  # terminal
    CycleStatus.FAILED: set(),  # terminal
}


def advance_phase(phase: PhaseDescriptor, target: PhaseStatus) -> None:
    """Move a phase forward, stamping start/end times on the way."""
    if target not in VALID_PHASE_TRANSITIONS[phase.status]:
        raise LifecycleError(
            f"Cannot transition phase {phase.id} "
            f"from {phase.status.value} to {target.value}"
        )
    if target == PhaseStatus.ACTIVE:
        phase.start_time = utcnow()
    elif target == PhaseStatus.COMPLETED:
        phase.end_time = utcnow()
    phase.status = target


def advance_cycle(cycle: CycleRecord, target: CycleStatus) -> None:
    """Finalize a cycle as completed or failed."""
    if target not in VALID_CYCLE_TRANSITIONS[cycle.status]:
        raise LifecycleError(
            f"Cannot transition cycle {cycle.id} "
            f"from {cycle.status.value} to {target.value}"
        )
    cycle.status = target
    cycle.end_time = utcnow()
