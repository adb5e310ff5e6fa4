from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from pydantic import BaseModel, ConfigDict

from sipcalc.core.projection import ProjectionMode, project
from sipcalc.log import get_logger
from sipcalc.models import ContributionConfig, ProjectionResult

MAX_SCENARIOS = 10

logger = get_logger(__name__)


class ComparisonValidationError(ValueError):
    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


@dataclass
class Scenario:
    label: str
    mode: ProjectionMode
    config: ContributionConfig


@dataclass
class PreparationResult:
    scenarios: List[Scenario]
    errors: List[str]
    warnings: List[str]


class ScenarioOutcome(BaseModel):
    model_config = ConfigDict(extra="forbid")

    label: str
    mode: ProjectionMode
    modeLabel: str
    result: ProjectionResult


class ComparisonPayload(BaseModel):
    model_config = ConfigDict(extra="forbid")

    entries: List[ScenarioOutcome]
    bestLabel: Optional[str] = None
    warnings: List[str] = []


def prepare_scenarios(scenarios: Sequence[Scenario]) -> PreparationResult:
    errors: List[str] = []
    warnings: List[str] = []

    if not scenarios:
        errors.append("comparison requires at least one scenario")
    if len(scenarios) > MAX_SCENARIOS:
        errors.append(f"comparison accepts at most {MAX_SCENARIOS} scenarios, got {len(scenarios)}")

    seen: set = set()
    prepared: List[Scenario] = []
    for index, scenario in enumerate(scenarios):
        label = scenario.label.strip()
        if not label:
            errors.append(f"scenario #{index + 1} has a blank label")
            continue
        if label in seen:
            errors.append(f"duplicate scenario label '{label}'")
            continue
        seen.add(label)
        prepared.append(Scenario(label=label, mode=ProjectionMode(scenario.mode), config=scenario.config))

    horizons = {scenario.config.horizonYears for scenario in prepared}
    if len(horizons) > 1:
        warnings.append(
            "scenarios use different horizons ("
            + ", ".join(f"{h:g}" for h in sorted(horizons))
            + " years); totals are not directly comparable"
        )

    return PreparationResult(scenarios=prepared, errors=errors, warnings=warnings)


def compare_scenarios(scenarios: Sequence[Scenario]) -> ComparisonPayload:
    """Project every scenario independently and pick the highest total value."""
    preparation = prepare_scenarios(scenarios)
    if preparation.errors:
        raise ComparisonValidationError(preparation.errors)

    entries: List[ScenarioOutcome] = []
    for scenario in preparation.scenarios:
        result = project(scenario.mode, scenario.config)
        logger.debug("scenario %s (%s) total=%s", scenario.label, scenario.mode.value, result.totalValue)
        entries.append(
            ScenarioOutcome(
                label=scenario.label,
                mode=scenario.mode,
                modeLabel=scenario.mode.label,
                result=result,
            )
        )

    best = max(entries, key=lambda entry: entry.result.totalValue)
    return ComparisonPayload(entries=entries, bestLabel=best.label, warnings=preparation.warnings)
