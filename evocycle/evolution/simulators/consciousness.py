"""ConsciousnessSimulator — practices, insights and their integration."""

from __future__ import annotations

from pydantic import BaseModel, Field

from evocycle.evolution.models import (
    Adaptation,
    PhaseArtifacts,
    PhaseDescriptor,
    SimulationResult,
)
from evocycle.evolution.simulators.base import PhaseSimulator, SimulationContext
from evocycle.strategies.schema import RegistryKind, ScaleGoal

PRACTICES = ("meditation", "service", "contemplation", "unity_practice")
INSIGHTS = (
    "unity_consciousness_revealed",
    "interconnectedness_understood",
    "service_as_path_recognized",
    "love_as_fundamental_force_realized",
    "transcendence_experienced",
)
INSIGHT_DRAWS = 3
INSIGHT_WEIGHT = 0.1
MAX_LEVEL = 10.0


class PracticeResult(BaseModel):
    practice: str
    duration: float  # minutes
    depth: float
    clarity: float
    expansion: float
    permanence: bool


class Insight(BaseModel):
    insight: str
    clarity: float
    impact: str = "transformative"
    integration: str = "immediate"


class Integration(BaseModel):
    level: float
    stability: float
    permanence: bool
    wisdom: float


class ConsciousnessResult(SimulationResult):
    evolution: str
    current_level: float
    target_level: float
    practices: list[PracticeResult] = Field(default_factory=list)
    insights: list[Insight] = Field(default_factory=list)
    integration: Integration | None = None


class ConsciousnessSimulator(PhaseSimulator):
    key = "consciousness"
    registry_kind = RegistryKind.SCALE_GOAL

    def simulate(
        self,
        phase: PhaseDescriptor,
        context: SimulationContext,
        strategy: str = "consciousness_ascension",
    ) -> tuple[ConsciousnessResult, PhaseArtifacts]:
        goal: ScaleGoal = self.lookup(context, strategy)
        rng = context.rng
        current = context.consciousness

        practices = [
            PracticeResult(
                practice=name,
                duration=rng.uniform(20, 60),
                depth=rng.uniform(0.6, 1.0),
                clarity=rng.uniform(0.7, 1.0),
                expansion=rng.uniform(0.1, 0.3),
                permanence=rng.random() > 0.3,
            )
            for name in PRACTICES
        ]
        insights = [
            Insight(insight=rng.choice(INSIGHTS), clarity=rng.uniform(0.8, 1.0))
            for _ in range(INSIGHT_DRAWS)
        ]
        integration = self._integrate(current, practices, insights, context)

        result = ConsciousnessResult(
            simulator=self.key,
            strategy=goal.name,
            evolution=goal.label,
            current_level=current,
            target_level=min(MAX_LEVEL, current + 1),
            practices=practices,
            insights=insights,
            integration=integration,
        )
        artifacts = PhaseArtifacts(adaptations=[
            Adaptation(
                phase_id=phase.id,
                kind="consciousness_integration",
                impact=integration.level - current,
                detail={"level": integration.level, "stability": integration.stability},
            )
        ])
        return result, artifacts

    @staticmethod
    def _integrate(
        current: float,
        practices: list[PracticeResult],
        insights: list[Insight],
        context: SimulationContext,
    ) -> Integration:
        expansion = sum(p.expansion for p in practices)
        level = current + expansion + len(insights) * INSIGHT_WEIGHT
        return Integration(
            level=max(0.0, min(MAX_LEVEL, level)),
            stability=context.rng.uniform(0.8, 1.0),
            permanence=expansion > 0.5,
            wisdom=expansion * 0.5,
        )
