"""Cycle history — permanent in-memory record of completed cycles.

Holds every finalized cycle keyed by id plus a single running summary that
is updated additively each time a cycle is recorded. All reads return
copies; nothing outside the store can mutate what it holds.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime

from pydantic import BaseModel, Field

from evocycle.evolution.models import CycleRecord
from evocycle.strategies.schema import RegistrySizes
from evocycle.types import CycleStatus, utcnow

logger = logging.getLogger(__name__)


class RunningSummary(BaseModel):
    """Totals across all recorded cycles plus the latest cycle's scores."""

    cycle_count: int = 0
    total_adaptations: int = 0
    total_mutations: int = 0
    total_transformations: int = 0
    total_evolutions: int = 0
    last_fitness: float = 0.5
    last_complexity: float = 1.0
    last_consciousness: float = 1.0


class MetricsSnapshot(BaseModel):
    """Read-only view of the engine's metrics at one point in time."""

    engine: str = "Evolution Engine"
    cycle_count: int = 0
    registry_sizes: RegistrySizes = Field(default_factory=RegistrySizes)
    running_summary: RunningSummary = Field(default_factory=RunningSummary)
    last_activity: datetime = Field(default_factory=utcnow)


class CycleHistory:
    """Completed cycles keyed by id, with a running summary."""

    def __init__(self) -> None:
        self._cycles: dict[str, CycleRecord] = {}
        self._summary = RunningSummary()
        self._last_activity: datetime | None = None
        self._lock = asyncio.Lock()

    async def record(self, cycle: CycleRecord) -> None:
        """Store a completed cycle and fold it into the running summary."""
        if cycle.status != CycleStatus.COMPLETED:
            raise ValueError(
                f"Only completed cycles can be recorded "
                f"(cycle {cycle.id} is {cycle.status.value})"
            )

        async with self._lock:
            if cycle.id in self._cycles:
                raise ValueError(f"Cycle {cycle.id} is already recorded")

            self._cycles[cycle.id] = cycle.model_copy(deep=True)
            summary = self._summary
            summary.cycle_count += 1
            summary.total_adaptations += len(cycle.adaptations)
            summary.total_mutations += len(cycle.mutations)
            summary.total_transformations += len(cycle.transformations)
            summary.total_evolutions += len(cycle.evolutions)
            summary.last_fitness = cycle.fitness
            summary.last_complexity = cycle.complexity
            summary.last_consciousness = cycle.consciousness
            self._last_activity = cycle.end_time or utcnow()

        logger.info(
            "Recorded cycle %s (%d cycles total)", cycle.id, self._summary.cycle_count
        )

    def summary(self) -> RunningSummary:
        return self._summary.model_copy()

    def get(self, cycle_id: str) -> CycleRecord | None:
        cycle = self._cycles.get(cycle_id)
        return cycle.model_copy(deep=True) if cycle else None

    def list(self, limit: int = 10) -> list[CycleRecord]:
        """Recent cycles, newest first."""
        cycles = list(self._cycles.values())[-limit:] if limit > 0 else []
        return [c.model_copy(deep=True) for c in reversed(cycles)]

    @property
    def last_activity(self) -> datetime | None:
        return self._last_activity

    def __len__(self) -> int:
        return len(self._cycles)

    def __contains__(self, cycle_id: object) -> bool:
        return cycle_id in self._cycles
