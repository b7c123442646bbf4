"""EvolutionEngine — runs evolution cycles phase by phase.

One cycle:
  1. Allocate a cycle record (status active)
  2. Generate the cycle type's phases
  3. Run each phase through its strategy simulator, in order
  4. Fold the phase's artifacts into the cycle
  5. Pause between phases
  6. Compute fitness, complexity and consciousness
  7. Record into history + emit events
  8. Return the finalized record
"""

from __future__ import annotations

import asyncio
import random
import time
import uuid
from typing import Any

import structlog

from evocycle.config import EvocycleSettings, settings as default_settings
from evocycle.events.bus import EventBus
from evocycle.evolution.executor import PhaseExecutor
from evocycle.evolution.history import CycleHistory, MetricsSnapshot
from evocycle.evolution.lifecycle import advance_cycle, advance_phase
from evocycle.evolution.models import CycleRecord, PhaseDescriptor
from evocycle.evolution.phases import generate_phases
from evocycle.evolution.simulators.base import SimulationContext
from evocycle.exceptions import (
    ConfigurationNotFoundError,
    EngineStateError,
    ExecutionError,
)
from evocycle.strategies.registry import StrategyRegistries
from evocycle.types import CycleStatus, ModelState, PhaseStatus, utcnow

logger = structlog.get_logger()

MAX_CONSCIOUSNESS = 10.0
_CONSCIOUSNESS_FOCI = ("consciousness", "awareness")


def new_cycle_id() -> str:
    return f"cycle_{int(time.time() * 1000)}_{uuid.uuid4().hex[:9]}"


# ── Cycle metrics ────────────────────────────────────────────────


def calculate_fitness(cycle: CycleRecord) -> float:
    """0.4 phase effectiveness + 0.3 mutation success + 0.3 transformation purity."""
    if cycle.phases:
        effectiveness = sum(
            p.result.effectiveness if p.result else 0.0 for p in cycle.phases
        ) / len(cycle.phases)
    else:
        effectiveness = 0.0
    successful = sum(1 for m in cycle.mutations if m.successful is not False)
    mutation_success = successful / max(1, len(cycle.mutations))
    if cycle.transformations:
        purity = sum(t.purity for t in cycle.transformations) / len(cycle.transformations)
    else:
        purity = 0.5

    fitness = effectiveness * 0.4 + mutation_success * 0.3 + purity * 0.3
    return max(0.0, min(1.0, fitness))


def calculate_complexity(cycle: CycleRecord) -> float:
    return (
        1.0
        + len(cycle.mutations) * 0.1
        + len(cycle.transformations) * 0.15
        + len(cycle.evolutions) * 0.2
    )


def calculate_consciousness(cycle: CycleRecord, base: float) -> float:
    boosted = sum(
        1 for p in cycle.phases
        if any(label in p.focus for label in _CONSCIOUSNESS_FOCI)
    )
    return max(0.0, min(MAX_CONSCIOUSNESS, base + boosted * 0.1))


# ── Engine ───────────────────────────────────────────────────────


class EvolutionEngine:
    """Owns the strategy registries, cycle history and event channel.

    Phases of one cycle run strictly in sequence. Cycles may overlap only
    through the history store, which serializes its own updates.
    """

    def __init__(
        self,
        event_bus: EventBus | None = None,
        settings: EvocycleSettings | None = None,
        rng: random.Random | None = None,
        model: ModelState | None = None,
        phase_pause: float | None = None,
        executor: PhaseExecutor | None = None,
    ) -> None:
        self._settings = settings or default_settings
        self._event_bus = event_bus
        self._rng = rng or random.Random()
        self._model = model or ModelState.from_settings(self._settings)
        self._phase_pause = (
            self._settings.phase_pause_seconds if phase_pause is None else phase_pause
        )
        self._registries = StrategyRegistries()
        self._executor = executor or PhaseExecutor()
        self._history = CycleHistory()
        self._failed: list[CycleRecord] = []
        self._initialized_at = utcnow()

    @property
    def registries(self) -> StrategyRegistries:
        return self._registries

    @property
    def history(self) -> CycleHistory:
        return self._history

    @property
    def is_initialized(self) -> bool:
        return self._registries.is_configured

    async def initialize(self) -> dict[str, str]:
        """Populate the strategy registries. Safe to call more than once."""
        if not self._registries.is_configured:
            self._registries.configure()
            self._initialized_at = utcnow()
            await self._emit("evolution.initialized", {
                "registry_sizes": self._registries.sizes().model_dump(),
            })
            logger.info("evolution_engine_initialized")
        return {"status": "initialized"}

    async def start_evolution_cycle(
        self,
        cycle_type: str | None = None,
        duration: float | None = None,
        *,
        consciousness: float | None = None,
    ) -> CycleRecord:
        """Run a full cycle and return its finalized record.

        ``consciousness`` is the caller's current consciousness level; it
        seeds both the consciousness simulator and the cycle metric.
        """
        if not self.is_initialized:
            raise EngineStateError("Engine not initialized; call initialize() first")

        if cycle_type is None:
            cycle_type = self._settings.default_cycle_type
        if duration is None:
            duration = self._settings.default_duration_seconds
        base = self._settings.base_consciousness if consciousness is None else consciousness

        cycle = CycleRecord(id=new_cycle_id(), type=cycle_type, planned_duration=duration)
        cycle.phases = generate_phases(cycle_type, duration)
        log = logger.bind(cycle_id=cycle.id, cycle_type=cycle_type)
        log.info("evolution_cycle_started", phases=len(cycle.phases), duration=duration)

        context = SimulationContext(
            registries=self._registries,
            model=self._model,
            rng=self._rng,
            consciousness=base,
        )

        try:
            await self._execute_cycle(cycle, context)
        except ConfigurationNotFoundError as e:
            await self._fail(cycle, e)
            raise
        except Exception as e:
            await self._fail(cycle, e)
            raise ExecutionError(f"Cycle {cycle.id} failed: {e}") from e

        cycle.fitness = calculate_fitness(cycle)
        cycle.complexity = calculate_complexity(cycle)
        cycle.consciousness = calculate_consciousness(cycle, base)
        advance_cycle(cycle, CycleStatus.COMPLETED)

        await self._history.record(cycle)
        await self._emit("evolution.cycle_completed", {"cycle": cycle.model_dump(mode="json")})
        log.info(
            "evolution_cycle_completed",
            fitness=round(cycle.fitness, 4),
            complexity=round(cycle.complexity, 4),
            consciousness=round(cycle.consciousness, 4),
        )
        return cycle

    def get_metrics(self) -> MetricsSnapshot:
        """Copy of the current counters; safe to hold on to."""
        return MetricsSnapshot(
            cycle_count=len(self._history),
            registry_sizes=self._registries.sizes(),
            running_summary=self._history.summary(),
            last_activity=self._history.last_activity or self._initialized_at,
        )

    def get_cycle(self, cycle_id: str) -> CycleRecord | None:
        return self._history.get(cycle_id)

    def list_cycles(self, limit: int = 10) -> list[CycleRecord]:
        return self._history.list(limit)

    def failed_cycles(self) -> list[CycleRecord]:
        return [c.model_copy(deep=True) for c in self._failed]

    # ── Internal helpers ──────────────────────────────────────────

    async def _execute_cycle(self, cycle: CycleRecord, context: SimulationContext) -> None:
        for index, phase in enumerate(cycle.phases):
            advance_phase(phase, PhaseStatus.ACTIVE)
            phase.result = self._executor.execute(phase, context)
            advance_phase(phase, PhaseStatus.COMPLETED)
            self._accumulate(cycle, phase)

            await self._emit("evolution.phase_completed", {
                "cycle_id": cycle.id,
                "phase": phase.model_dump(mode="json"),
            })
            logger.debug(
                "evolution_phase_completed",
                cycle_id=cycle.id,
                phase=phase.name,
                effectiveness=round(phase.result.effectiveness, 4),
            )

            if index < len(cycle.phases) - 1:
                await self._pause()

    @staticmethod
    def _accumulate(cycle: CycleRecord, phase: PhaseDescriptor) -> None:
        artifacts = phase.result.produced_artifacts
        cycle.mutations.extend(artifacts.mutations)
        cycle.adaptations.extend(artifacts.adaptations)
        cycle.transformations.extend(artifacts.transformations)
        cycle.evolutions.extend(artifacts.evolutions)

    async def _pause(self) -> None:
        if self._phase_pause > 0:
            await asyncio.sleep(self._phase_pause)
        else:
            await asyncio.sleep(0)

    async def _fail(self, cycle: CycleRecord, error: Exception) -> None:
        cycle.error = f"{type(error).__name__}: {error}"
        advance_cycle(cycle, CycleStatus.FAILED)
        self._failed.append(cycle)
        logger.error("evolution_cycle_failed", cycle_id=cycle.id, error=cycle.error)
        await self._emit("evolution.cycle_failed", {
            "cycle": cycle.model_dump(mode="json"),
            "error": cycle.error,
        })

    async def _emit(self, topic: str, data: dict[str, Any]) -> None:
        """Emit an event if event bus is available."""
        if self._event_bus:
            await self._event_bus.emit(topic, data, source="evolution_engine")
