# goalplanner/services/contribution_solver.py

import logging
from goalplanner.core.errors import require_finite, require_non_negative
from goalplanner.models.plan import InvestmentProjection
from goalplanner.services.time_value import compound_growth, solve_annuity_payment
from goalplanner.utils.utils import round_half_up

logger = logging.getLogger(__name__)


class ContributionSolver:
    """
    Additional monthly SIP, on top of what is already committed, that closes
    the gap between the inflated goal cost and the assets projected for the
    same horizon.
    """

    @classmethod
    def future_goal_cost(cls, total_goal_cost: float, annual_inflation_pct: float, horizon_years: float) -> float:
        return compound_growth(total_goal_cost, annual_inflation_pct, horizon_years)

    @classmethod
    def future_assets(
        cls,
        current_savings: float,
        annual_rate_pct: float,
        horizon_years: float,
        projection: InvestmentProjection,
    ) -> float:
        # projection must have been built for the same horizon
        return compound_growth(current_savings, annual_rate_pct, horizon_years) + projection.projected_value

    @classmethod
    def required_monthly_contribution(
        cls,
        total_goal_cost: float,
        current_savings: float,
        horizon_years: float,
        annual_rate_pct: float,
        annual_inflation_pct: float,
        projection: InvestmentProjection,
    ) -> float:
        require_finite(
            total_goal_cost=total_goal_cost,
            horizon_years=horizon_years,
            annual_rate_pct=annual_rate_pct,
            annual_inflation_pct=annual_inflation_pct,
        )
        require_non_negative(current_savings=current_savings)

        if total_goal_cost <= 0 or horizon_years <= 0:
            return 0.0

        future_cost = cls.future_goal_cost(total_goal_cost, annual_inflation_pct, horizon_years)
        assets = cls.future_assets(current_savings, annual_rate_pct, horizon_years, projection)

        gap = max(0.0, future_cost - assets)
        if gap == 0:
            logger.debug(f"Goal already covered: future cost {future_cost:,.0f} <= assets {assets:,.0f}")
            return 0.0

        payment = solve_annuity_payment(gap, annual_rate_pct, horizon_years * 12)
        logger.debug(f"Gap {gap:,.0f} over {horizon_years}y needs {payment:,.2f}/month")
        return round_half_up(payment)
