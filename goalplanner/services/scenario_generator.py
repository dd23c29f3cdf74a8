# goalplanner/services/scenario_generator.py

import logging
from typing import List
from goalplanner.core.config import PlannerSettings, get_settings
from goalplanner.models.plan import FinancialProfile, InvestmentProjection, Scenario
from goalplanner.services.contribution_solver import ContributionSolver
from goalplanner.services.horizon_solver import HorizonSolver
from goalplanner.services.investment_projector import InvestmentProjector
from goalplanner.utils.currency import format_currency, format_years
from goalplanner.utils.utils import round_half_up

logger = logging.getLogger(__name__)


class ScenarioGenerator:
    """
    What-if plans built by re-running the solvers with perturbed inputs.
    A scenario is only kept when the recomputed numbers actually move in the
    direction its title claims.
    """

    SIP_BOOST = 1.5
    AGGRESSIVE_FACTOR = 1.5
    CONSERVATIVE_FACTOR = 0.75
    IMPROVED_FACTOR = 1.2
    EXTENSION_YEARS = 3

    def __init__(
        self,
        projector: InvestmentProjector,
        horizon_solver: HorizonSolver,
        settings: PlannerSettings = None,
    ):
        self.projector = projector
        self.horizon_solver = horizon_solver
        self.settings = settings or get_settings()

    def _reproject(self, profile: FinancialProfile, monthly_contribution=None, rate_pct=None, horizon=None):
        return self.projector.project(
            profile.existing_investments_value,
            profile.current_monthly_contribution if monthly_contribution is None else monthly_contribution,
            profile.contribution_duration_years,
            profile.expected_annual_return_pct if rate_pct is None else rate_pct,
            profile.horizon_years if horizon is None else horizon,
        )

    def _solve(self, profile: FinancialProfile, goal_cost: float, projection, rate_pct=None, horizon=None) -> float:
        return ContributionSolver.required_monthly_contribution(
            goal_cost,
            profile.current_savings,
            profile.horizon_years if horizon is None else horizon,
            profile.expected_annual_return_pct if rate_pct is None else rate_pct,
            profile.expected_annual_inflation_pct,
            projection,
        )

    def _simulate(self, profile: FinancialProfile, goal_cost: float, capacity: float) -> float:
        return self.horizon_solver.simulate_years(
            goal_cost,
            profile.current_savings + profile.existing_investments_value,
            capacity,
            profile.expected_annual_return_pct,
            profile.expected_annual_inflation_pct,
        )

    def generate(
        self,
        profile: FinancialProfile,
        total_goal_cost: float,
        required_monthly: float,
        time_required_years: float,
        projection: InvestmentProjection,
    ) -> List[Scenario]:
        if required_monthly <= 0 or total_goal_cost <= 0:
            return []

        currency = profile.currency
        sip = profile.current_monthly_contribution
        unreachable = self.settings.UNREACHABLE_YEARS
        scenarios = []

        # Simulated times leave out the past-SIP lump the closed-form baseline
        # counts, so with a running SIP they must also beat the simulated baseline
        faster_than = slower_than = time_required_years
        if sip > 0:
            simulated_baseline = self._simulate(profile, total_goal_cost, required_monthly + sip)
            faster_than = min(time_required_years, simulated_baseline)
            slower_than = max(time_required_years, simulated_baseline)

        # 1. Enhanced SIP
        if sip > 0:
            enhanced_sip = round_half_up(sip * self.SIP_BOOST)
            enhanced_projection = self._reproject(profile, monthly_contribution=enhanced_sip)
            enhanced_required = self._solve(profile, total_goal_cost, enhanced_projection)
            enhanced_time = self.horizon_solver.time_required(
                total_goal_cost,
                profile.current_savings,
                enhanced_required + enhanced_sip,
                profile.expected_annual_return_pct,
                profile.expected_annual_inflation_pct,
                enhanced_projection,
                profile.horizon_years,
            )
            if enhanced_required < required_monthly and enhanced_time <= time_required_years:
                scenarios.append(Scenario(
                    kind="enhanced_sip",
                    tone="success",
                    title="Enhanced SIP Strategy",
                    description=(
                        f"Increase your current SIP from {format_currency(sip, currency)} to "
                        f"{format_currency(enhanced_sip, currency)} to need only "
                        f"{format_currency(enhanced_required, currency)} extra per month."
                    ),
                    monthly_contribution=enhanced_required,
                    time_required_years=enhanced_time,
                ))

        # 2. Aggressive
        aggressive = round_half_up(required_monthly * self.AGGRESSIVE_FACTOR)
        aggressive_time = self._simulate(profile, total_goal_cost, aggressive + sip)
        if 0 < aggressive_time < faster_than:
            scenarios.append(Scenario(
                kind="aggressive",
                tone="success",
                title="Aggressive Investment Plan",
                description=(
                    f"Increase monthly investments to {format_currency(aggressive, currency)} to achieve goals in "
                    f"{format_years(aggressive_time)} instead of {format_years(time_required_years)}."
                ),
                monthly_contribution=aggressive,
                time_required_years=aggressive_time,
            ))

        # 3. Extended timeline
        extended_horizon = profile.horizon_years + self.EXTENSION_YEARS
        extended = self._solve(
            profile, total_goal_cost, self._reproject(profile, horizon=extended_horizon), horizon=extended_horizon
        )
        if 0 < extended < required_monthly:
            scenarios.append(Scenario(
                kind="extended_timeline",
                tone="info",
                title="Extended Timeline Plan",
                description=(
                    f"Extend your timeline to {extended_horizon} years to reduce monthly investment to "
                    f"{format_currency(extended, currency)}."
                ),
                monthly_contribution=extended,
                time_required_years=float(extended_horizon),
            ))

        # 4. Conservative
        conservative = round_half_up(required_monthly * self.CONSERVATIVE_FACTOR)
        conservative_time = self._simulate(profile, total_goal_cost, conservative + sip)
        if conservative > 0 and slower_than < conservative_time < unreachable:
            scenarios.append(Scenario(
                kind="conservative",
                tone="warning",
                title="Conservative Approach",
                description=(
                    f"Reduce monthly investment to {format_currency(conservative, currency)} accepting a longer "
                    f"timeline of {format_years(conservative_time)}."
                ),
                monthly_contribution=conservative,
                time_required_years=conservative_time,
            ))

        # 5. Portfolio optimisation
        if profile.existing_investments_value > self.settings.PORTFOLIO_OPTIMIZATION_MIN_INVESTMENTS:
            boost = self.settings.PORTFOLIO_OPTIMIZATION_RETURN_BOOST_PCT
            optimized_rate = profile.expected_annual_return_pct + boost
            optimized_projection = self._reproject(profile, rate_pct=optimized_rate)
            optimized = self._solve(profile, total_goal_cost, optimized_projection, rate_pct=optimized_rate)
            if optimized < required_monthly:
                optimized_time = self.horizon_solver.time_required(
                    total_goal_cost,
                    profile.current_savings,
                    optimized + sip,
                    optimized_rate,
                    profile.expected_annual_inflation_pct,
                    optimized_projection,
                    profile.horizon_years,
                )
                scenarios.append(Scenario(
                    kind="portfolio_optimization",
                    tone="info",
                    title="Portfolio Optimization",
                    description=(
                        f"Optimize your {format_currency(profile.existing_investments_value, currency)} portfolio "
                        f"for {boost:g}% better returns through rebalancing and tax efficiency."
                    ),
                    monthly_contribution=optimized,
                    time_required_years=optimized_time,
                ))

        if scenarios:
            return scenarios

        # Nothing qualified: echo the current plan plus a modest improvement
        logger.debug("No perturbed scenario qualified, using fallback pair")
        scenarios.append(Scenario(
            kind="current_plan",
            tone="info",
            title="Current Plan",
            description=(
                f"Continue with your current plan: invest {format_currency(required_monthly, currency)} monthly "
                f"for {format_years(time_required_years)}."
            ),
            monthly_contribution=required_monthly,
            time_required_years=time_required_years,
        ))
        improved = round_half_up(required_monthly * self.IMPROVED_FACTOR)
        improved_time = self._simulate(profile, total_goal_cost, improved + sip)
        if 0 < improved_time < faster_than:
            scenarios.append(Scenario(
                kind="improved_plan",
                tone="success",
                title="Improved Plan",
                description=(
                    f"Increase monthly investment by 20% to {format_currency(improved, currency)} and achieve "
                    f"goals faster in {format_years(improved_time)}."
                ),
                monthly_contribution=improved,
                time_required_years=improved_time,
            ))
        return scenarios
