# goalplanner/services/flags.py

from typing import Dict, List
import logging
from goalplanner.models.plan import CalculationResult

logger = logging.getLogger(__name__)


def extract_flags(result: CalculationResult, unreachable_years: float = 999.0) -> List[str]:
    """
    Evaluates a calculation result and generates structured flags
    for downstream use (e.g., UI warnings, quality checks).
    """
    flags = []

    # 1. Goal reachability
    if result.total_goal_cost <= 0:
        flags.append("no_active_goals")
    elif result.time_required_years >= unreachable_years:
        flags.append("goal_unreachable")
    elif result.investment_gap > 0:
        flags.append("investment_gap")

    # 2. Cash flow
    if result.disposable_income <= 0:
        flags.append("negative_disposable_income")
    if result.expense_ratio_pct > 70:
        flags.append("high_expense_ratio")
    if result.savings_rate_pct > 100:
        flags.append("contribution_exceeds_disposable_income")
    elif 0 < result.savings_rate_pct < 10:
        flags.append("low_savings_rate")

    # 3. Debt
    if result.emi_ratio_pct > 40:
        flags.append("high_emi_burden")
    elif result.emi_ratio_pct > 30:
        flags.append("elevated_emi_burden")
    if result.health_breakdown.get("negative_amortization", 0) < 0:
        flags.append("debt_growing")

    # 4. Emergency fund
    if result.emergency_months < 3:
        flags.append("emergency_fund_gap")

    # 5. Investments
    projection = result.investment_projection
    if projection.existing_investments <= 0 and projection.current_monthly_contribution <= 0:
        flags.append("no_existing_investments")
    elif projection.portfolio_strength >= 80:
        flags.append("strong_portfolio")

    # 6. Life stage
    life_stage = result.life_stage_insights
    if life_stage is not None:
        if life_stage.timeline_conflict:
            flags.append("timeline_exceeds_life_expectancy")
        if not life_stage.sustainability.sustainable:
            flags.append("post_goal_income_gap")

    # 7. Scores
    if result.financial_health_score < 40:
        flags.append("poor_financial_health")

    unique_flags = sorted(set(flags))
    logger.debug(f"Generated {len(unique_flags)} flags: {unique_flags}")
    return unique_flags


def get_flag_descriptions() -> Dict[str, str]:
    """
    Returns human-readable descriptions for all possible flags.
    Useful for frontend display.
    """
    return {
        # Goal flags
        "no_active_goals": "No goals enabled yet - add a goal to see a plan",
        "goal_unreachable": "Goals cannot be reached at the current contribution rate",
        "investment_gap": "Existing savings and investments do not cover the goals yet",

        # Cash flow flags
        "negative_disposable_income": "Expenses and EMIs use up all income",
        "high_expense_ratio": "Expenses are above 70% of income",
        "contribution_exceeds_disposable_income": "Required investment is more than what is left after expenses",
        "low_savings_rate": "Less than 10% of disposable income is being invested",

        # Debt flags
        "high_emi_burden": "EMIs are above 40% of income",
        "elevated_emi_burden": "EMIs are above 30% of income",
        "debt_growing": "EMIs do not cover accruing interest - outstanding debt is growing",

        # Emergency fund flags
        "emergency_fund_gap": "Savings cover less than 3 months of expenses",

        # Investment flags
        "no_existing_investments": "No existing investments or running SIP",
        "strong_portfolio": "Existing investments and SIP history are strong",

        # Life stage flags
        "timeline_exceeds_life_expectancy": "Goal timeline extends past expected lifespan",
        "post_goal_income_gap": "Projected wealth may not support expenses after the goals",

        # Score flags
        "poor_financial_health": "Overall financial health score is below 40",
    }
