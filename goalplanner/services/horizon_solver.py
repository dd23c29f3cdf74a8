# goalplanner/services/horizon_solver.py

import logging
from goalplanner.core.config import PlannerSettings, get_settings
from goalplanner.core.errors import require_finite, require_non_negative
from goalplanner.models.plan import InvestmentProjection
from goalplanner.services.contribution_solver import ContributionSolver
from goalplanner.services.time_value import monthly_rate
from goalplanner.utils.utils import round_half_up

logger = logging.getLogger(__name__)


class HorizonSolver:
    """
    Decides whether the user's own horizon works for a given monthly
    capacity and, when it does not, finds the real time needed by simulating
    month by month against a goal cost that keeps inflating.
    """

    def __init__(self, settings: PlannerSettings = None):
        self.settings = settings or get_settings()

    @property
    def unreachable(self) -> float:
        return self.settings.UNREACHABLE_YEARS

    def simulate_years(
        self,
        total_goal_cost: float,
        starting_value: float,
        monthly_capacity: float,
        annual_rate_pct: float,
        annual_inflation_pct: float,
    ) -> float:
        """
        Years until the balance first reaches the inflated goal, one decimal.
        Bounded by MAX_SIMULATION_MONTHS; returns UNREACHABLE_YEARS if the
        balance never gets there.
        """
        require_finite(
            total_goal_cost=total_goal_cost,
            starting_value=starting_value,
            monthly_capacity=monthly_capacity,
            annual_rate_pct=annual_rate_pct,
            annual_inflation_pct=annual_inflation_pct,
        )

        if total_goal_cost <= 0:
            return 0.0
        if monthly_capacity <= 0 and starting_value < total_goal_cost:
            return self.unreachable

        rate = monthly_rate(annual_rate_pct)
        inflation = 1 + annual_inflation_pct / 100
        value = starting_value

        for month in range(1, self.settings.MAX_SIMULATION_MONTHS + 1):
            value = value * (1 + rate) + monthly_capacity
            target = total_goal_cost * inflation ** (month / 12)
            if value >= target:
                return round_half_up(month / 12, 1)

        return self.unreachable

    def time_required(
        self,
        total_goal_cost: float,
        current_savings: float,
        total_monthly_capacity: float,
        annual_rate_pct: float,
        annual_inflation_pct: float,
        projection: InvestmentProjection,
        user_horizon_years: float,
    ) -> float:
        require_non_negative(current_savings=current_savings)
        require_finite(total_goal_cost=total_goal_cost, total_monthly_capacity=total_monthly_capacity)

        if total_goal_cost <= 0:
            return 0.0

        required = ContributionSolver.required_monthly_contribution(
            total_goal_cost,
            current_savings,
            user_horizon_years,
            annual_rate_pct,
            annual_inflation_pct,
            projection,
        )

        # Tolerance band absorbs the gap between the closed form and the simulation
        if user_horizon_years > 0 and total_monthly_capacity >= required * self.settings.HORIZON_TOLERANCE:
            return float(user_horizon_years)

        years = self.simulate_years(
            total_goal_cost,
            current_savings + projection.existing_investments,
            total_monthly_capacity,
            annual_rate_pct,
            annual_inflation_pct,
        )
        if years >= self.unreachable:
            logger.info(
                f"Goal of {total_goal_cost:,.0f} not reachable within "
                f"{self.settings.MAX_SIMULATION_MONTHS} months at {total_monthly_capacity:,.0f}/month"
            )
        return years
