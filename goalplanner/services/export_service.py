# goalplanner/services/export_service.py

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional
from goalplanner.core.config import get_settings
from goalplanner.core.errors import InvalidArgument
from goalplanner.models.plan import CalculationResult, LoanPortfolio
from goalplanner.utils.currency import format_currency, format_percentage, format_years

logger = logging.getLogger(__name__)

PLAN_FORMAT_VERSION = "1.0"


def build_plan_document(
    form_data: Mapping,
    result: Optional[CalculationResult],
    goals: Optional[Mapping] = None,
    loan_portfolio: Optional[LoanPortfolio] = None,
    timestamp: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Save-file payload: form state plus the last computed result."""
    settings = get_settings()
    timestamp = timestamp or datetime.now(timezone.utc)
    return {
        "formData": dict(form_data),
        "results": result.model_dump(mode="json") if result is not None else None,
        "goals": dict(goals if goals is not None else form_data.get("goals", {})),
        "loanData": loan_portfolio.model_dump(mode="json") if loan_portfolio is not None else None,
        "timestamp": timestamp.isoformat(),
        "appVersion": PLAN_FORMAT_VERSION,
        "generatorVersion": settings.APP_VERSION,
        "description": f"{settings.APP_NAME} data",
    }


def dumps_plan(document: Mapping) -> str:
    return json.dumps(document, indent=2, ensure_ascii=False)


def loads_plan(text: str) -> Dict[str, Any]:
    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise InvalidArgument(f"Plan file is not valid JSON: {e}") from e

    if not isinstance(document, dict) or "formData" not in document or "goals" not in document:
        raise InvalidArgument("Invalid financial plan file format")

    if document.get("appVersion") != PLAN_FORMAT_VERSION:
        logger.warning(f"Loading plan saved with version {document.get('appVersion')!r}")
    return document


def result_from_plan(document: Mapping) -> Optional[CalculationResult]:
    results = document.get("results")
    if results is None:
        return None
    return CalculationResult.model_validate(results)


def format_results_text(result: CalculationResult, currency: str = None) -> str:
    """Plain-text summary for clipboard and share targets"""
    projection = result.investment_projection
    lines = [
        "Financial Goals Summary:",
        "",
        f"Total Goal Cost: {format_currency(result.total_goal_cost, currency)}",
        f"Monthly Investment Needed: {format_currency(result.required_monthly_contribution, currency)}",
        f"Time Required: {format_years(result.time_required_years)}"
        + ("" if result.goal_achievable else " (not achievable)"),
        f"Savings Rate: {format_percentage(result.savings_rate_pct)}",
        f"Balance Score: {result.balance_score}/100",
        f"Financial Health Score: {result.financial_health_score}/100",
        "",
        "Investment Portfolio:",
        f"Existing Investments: {format_currency(projection.existing_investments, currency)}",
        f"Current SIP: {format_currency(projection.current_monthly_contribution, currency)}/month",
        f"Portfolio Strength: {projection.portfolio_strength}/100",
        f"Projected Value: {format_currency(projection.projected_value, currency)}",
        "",
        f"Generated with {get_settings().APP_NAME}",
    ]
    return "\n".join(lines)
