"""HTTP routes for the Flask API."""

from http import HTTPStatus
from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from sipcalc import __version__
from sipcalc.core.goal import estimate_required_contribution, estimate_years_to_target
from sipcalc.core.projection import ProjectionInputError, project
from sipcalc.domain.comparison import ComparisonValidationError, Scenario, compare_scenarios
from sipcalc.log import get_logger
from sipcalc.schemas.ping import PingResponse
from sipcalc.schemas.projection import (
    ComparisonRequest,
    GoalRequest,
    GoalResponse,
    ProjectionRequest,
    RequiredContributionRequest,
    RequiredContributionResponse,
)

api_bp = Blueprint("api", __name__)

logger = get_logger(__name__)


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    logger.warning("rejected payload on %s: %d error(s)", request.path, exc.error_count())
    return jsonify({"detail": exc.errors(include_url=False, include_context=False)}), HTTPStatus.UNPROCESSABLE_ENTITY


@api_bp.errorhandler(ComparisonValidationError)
def _handle_comparison_error(exc: ComparisonValidationError):
    logger.warning("rejected comparison: %s", exc)
    return jsonify({"error": exc.errors}), HTTPStatus.BAD_REQUEST


@api_bp.errorhandler(ProjectionInputError)
def _handle_projection_input_error(exc: ProjectionInputError):
    logger.warning("rejected projection input: %s", exc)
    return jsonify({"error": [str(exc)]}), HTTPStatus.BAD_REQUEST


def _payload() -> Dict[str, Any]:
    return request.get_json(force=True, silent=False)


@api_bp.get("/ping")
def ping() -> Any:
    """Health-check endpoint."""
    response = PingResponse(message="pong", version=__version__)
    return jsonify(response.model_dump())


@api_bp.post("/calc/projection")
def projection() -> Any:
    """Project one contribution plan in the requested mode."""
    payload = ProjectionRequest.model_validate(_payload())
    result = project(payload.mode, payload.to_config())
    logger.info(
        "projection mode=%s years=%g total=%s",
        payload.mode.value,
        payload.horizonYears,
        result.totalValue,
    )
    return jsonify(result.model_dump(mode="json"))


@api_bp.post("/calc/goal")
def goal() -> Any:
    """Years a monthly contribution needs to reach a target value."""
    payload = GoalRequest.model_validate(_payload())
    max_years = payload.maxYears or current_app.config["SIPCALC_SETTINGS"].goal_max_years
    years = estimate_years_to_target(
        payload.amount,
        payload.annualRatePercent,
        payload.escalationPercent,
        payload.targetValue,
        max_years,
    )
    response = GoalResponse(yearsToTarget=years, reachable=years is not None, maxYears=max_years)
    return jsonify(response.model_dump())


@api_bp.post("/calc/required-contribution")
def required_contribution() -> Any:
    """Monthly contribution needed to reach a target within a horizon."""
    payload = RequiredContributionRequest.model_validate(_payload())
    amount = estimate_required_contribution(
        payload.targetValue,
        payload.annualRatePercent,
        payload.horizonYears,
        payload.escalationPercent,
    )
    if amount is None:
        raise ProjectionInputError(f"horizon of {payload.horizonYears:g} years has no contribution months")
    response = RequiredContributionResponse(requiredMonthlyAmount=amount, horizonYears=payload.horizonYears)
    return jsonify(response.model_dump())


@api_bp.post("/calc/compare")
def compare() -> Any:
    """Project several labelled scenarios side by side."""
    payload = ComparisonRequest.model_validate(_payload())
    scenarios = [
        Scenario(label=item.label, mode=item.mode, config=item.to_config())
        for item in payload.scenarios
    ]
    result = compare_scenarios(scenarios)
    return jsonify(result.model_dump(mode="json"))
