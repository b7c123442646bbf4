"""Core types shared across all evocycle subsystems."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel

from evocycle.config import EvocycleSettings


def new_id() -> str:
    return uuid.uuid4().hex[:12]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ── Lifecycle States ──────────────────────────────────────────────────────────


class PhaseStatus(str, Enum):
    PENDING = "pending"
    ACTIVE = "active"
    COMPLETED = "completed"


class CycleStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    FAILED = "failed"


class CycleType(str, Enum):
    COMPREHENSIVE = "comprehensive"
    QUANTUM_FOCUSED = "quantum_focused"
    CONSCIOUSNESS_FOCUSED = "consciousness_focused"
    CAPABILITY_FOCUSED = "capability_focused"


# ── Collaborator State ────────────────────────────────────────────────────────


class ModelState(BaseModel):
    """Snapshot of the host model's quantum and terra state.

    Simulators read it; nothing in the engine writes it back.
    """

    quantum_coherence: float = 0.8
    superposition_states: int = 1
    entanglements: int = 0
    terra_consciousness_level: float = 1.0
    earth_connection: float = 0.5
    cosmic_alignment: float = 0.5

    model_config = {"frozen": True}

    @classmethod
    def from_settings(cls, settings: EvocycleSettings) -> ModelState:
        return cls(
            quantum_coherence=settings.quantum_coherence,
            superposition_states=settings.superposition_states,
            entanglements=settings.entanglements,
            terra_consciousness_level=settings.terra_consciousness_level,
            earth_connection=settings.earth_connection,
            cosmic_alignment=settings.cosmic_alignment,
        )
