# goalplanner/services/profile_builder.py
#
# Boundary between raw form state (camelCase keys, strings, blanks) and the
# validated FinancialProfile the engine consumes.

import logging
import math
from typing import Any, Dict, Mapping
from pydantic import ValidationError
from goalplanner.core.config import SMART_DEFAULTS, VALIDATION_RANGES, PlannerSettings, get_settings
from goalplanner.models.plan import FinancialProfile, GoalEntry, LoanRecord
from goalplanner.services.loan_service import aggregate_loans
from goalplanner.utils.currency import CURRENCIES
from goalplanner.utils.utils import round_half_up

logger = logging.getLogger(__name__)

# form key -> profile field
FORM_FIELD_MAP = {
    "age": "age",
    "timeline": "horizon_years",
    "lifeExpectancy": "life_expectancy",
    "income": "monthly_income",
    "expenses": "monthly_expenses",
    "savings": "current_savings",
    "existingEmi": "existing_monthly_emi",
    "returns": "expected_annual_return_pct",
    "inflation": "expected_annual_inflation_pct",
    "existingInvestments": "existing_investments_value",
    "currentSip": "current_monthly_contribution",
    "sipDuration": "contribution_duration_years",
}

INTEGER_FIELDS = {"age", "timeline", "lifeExpectancy"}

LOAN_FIELD_MAP = {
    "principal": "principal",
    "rate": "rate_pct",
    "tenureYears": "tenure_years",
    "tenureMonths": "tenure_months",
    "emi": "emi",
}


def get_safe_number(
    value: Any, field: str = None, default: float = 0.0, smart_defaults: Mapping = SMART_DEFAULTS
) -> float:
    """Parse a form value; blanks, garbage and negatives fall back to a default."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        number = math.nan

    if not math.isfinite(number) or number < 0:
        return smart_defaults.get(field, default)
    return number


def clamp_to_range(value: float, field: str) -> float:
    bounds = VALIDATION_RANGES.get(field)
    if bounds is None:
        return value
    low, high = bounds
    if value > high:
        logger.warning(f"{field}={value} above maximum {high}, clamping")
        return high
    # Zero means "not entered" and is kept as is
    if 0 < value < low:
        logger.warning(f"{field}={value} below minimum {low}, clamping")
        return low
    return value


def sanitize_goals(raw_goals: Any) -> Dict[str, GoalEntry]:
    goals = {}
    if not isinstance(raw_goals, Mapping):
        return goals
    for goal_id, goal in raw_goals.items():
        if not isinstance(goal, Mapping):
            logger.warning(f"Ignoring malformed goal '{goal_id}': {goal!r}")
            continue
        try:
            # pydantic's bool parsing reads "false"/"0"/"off" as disabled
            goals[str(goal_id)] = GoalEntry(
                enabled=goal.get("enabled") or False,
                amount=get_safe_number(goal.get("amount")),
            )
        except ValidationError as e:
            logger.warning(f"Ignoring malformed goal '{goal_id}': {e.errors()[0]['msg']}")
    return goals


def sanitize_loans(raw_loans: Any):
    if not raw_loans:
        return []
    loans = []
    for raw in raw_loans:
        if not isinstance(raw, Mapping):
            logger.warning(f"Ignoring malformed loan record: {raw!r}")
            continue
        loans.append(LoanRecord(**{
            field: get_safe_number(raw.get(key)) for key, field in LOAN_FIELD_MAP.items()
        }))
    return loans


def create_financial_profile_from_form_data(form_data: Mapping, settings: PlannerSettings = None) -> FinancialProfile:
    """
    Build a FinancialProfile from form state. Missing or invalid numbers
    become 0 (or the smart default for returns and inflation) and are clamped
    to the allowed input ranges.
    """
    settings = settings or get_settings()
    smart_defaults = {
        "returns": settings.DEFAULT_RETURN_PCT,
        "inflation": settings.DEFAULT_INFLATION_PCT,
    }

    values = {}
    for key, field in FORM_FIELD_MAP.items():
        number = get_safe_number(form_data.get(key), key, smart_defaults=smart_defaults)
        number = clamp_to_range(number, key)
        if key in INTEGER_FIELDS:
            number = int(round_half_up(number))
        values[field] = number

    default_currency = settings.DEFAULT_CURRENCY
    currency = form_data.get("currency") or default_currency
    if currency not in CURRENCIES:
        logger.warning(f"Unknown currency {currency!r}, using {default_currency}")
        currency = default_currency

    return FinancialProfile(
        **values,
        goals=sanitize_goals(form_data.get("goals")),
        loan_portfolio=aggregate_loans(sanitize_loans(form_data.get("loans"))),
        currency=currency,
    )
