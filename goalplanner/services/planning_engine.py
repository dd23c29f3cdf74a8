import logging
from typing import Optional
from goalplanner.core.config import DEFAULT_AGE, PlannerSettings, get_settings
from goalplanner.core.scoring_tables import DEFAULT_SCORING_TABLES, ScoringTables
from goalplanner.models.plan import CalculationResult, FinancialProfile
from goalplanner.services.action_plans import action_plans, balance_plans
from goalplanner.services.contribution_solver import ContributionSolver
from goalplanner.services.flags import extract_flags
from goalplanner.services.goal_costs import total_goal_cost
from goalplanner.services.horizon_solver import HorizonSolver
from goalplanner.services.insight_service import debt_insights, debt_strategies, generate_insights
from goalplanner.services.investment_health import assess_investment_health
from goalplanner.services.investment_projector import InvestmentProjector
from goalplanner.services.life_stage import LifeStageAnalyzer
from goalplanner.services.scenario_generator import ScenarioGenerator
from goalplanner.services.scoring_engine import ScoringEngine
from goalplanner.services.time_value import real_return_pct
from goalplanner.services.work_life_balance import WorkLifeBalanceAnalyzer
from goalplanner.utils.utils import safe_ratio_pct

logger = logging.getLogger(__name__)


class GoalPlanningEngine:
    """
    Coordinates the projector, solvers, scoring and scenario services into
    one calculation over a FinancialProfile snapshot.

    Settings and scoring tables are fixed at construction; the only state kept
    between calls is the last result, for export and sharing.
    """

    def __init__(self, settings: PlannerSettings = None, tables: ScoringTables = None):
        self.settings = settings or get_settings()
        self.tables = tables or DEFAULT_SCORING_TABLES

        self.projector = InvestmentProjector(self.tables)
        self.horizon_solver = HorizonSolver(self.settings)
        self.scoring = ScoringEngine(self.tables)
        self.life_stage = LifeStageAnalyzer(self.settings)
        self.scenarios = ScenarioGenerator(self.projector, self.horizon_solver, self.settings)
        self.work_life_balance = WorkLifeBalanceAnalyzer()

        self.last_result: Optional[CalculationResult] = None

    def calculate(self, profile: FinancialProfile) -> CalculationResult:
        logger.debug(f"Calculating plan for horizon={profile.horizon_years}y, goals={list(profile.goals)}")

        returns = profile.expected_annual_return_pct
        inflation = profile.expected_annual_inflation_pct
        horizon = profile.horizon_years

        goal_cost = total_goal_cost(profile.goals)
        projection = self.projector.project(
            profile.existing_investments_value,
            profile.current_monthly_contribution,
            profile.contribution_duration_years,
            returns,
            horizon,
        )

        required = ContributionSolver.required_monthly_contribution(
            goal_cost, profile.current_savings, horizon, returns, inflation, projection
        )
        capacity = required + profile.current_monthly_contribution
        time_required = self.horizon_solver.time_required(
            goal_cost, profile.current_savings, capacity, returns, inflation, projection, horizon
        )

        disposable = profile.disposable_income
        savings_rate = safe_ratio_pct(capacity, disposable)
        investment_gap = max(0.0, goal_cost - projection.projected_value - profile.current_savings)
        sip_efficiency = self.projector.sip_efficiency_pct(
            profile.current_monthly_contribution,
            projection.projected_contribution_value,
            profile.contribution_duration_years,
        )

        life_stage = self.life_stage.analyze(profile, projection, goal_cost)
        strength = projection.portfolio_strength

        balance, balance_breakdown = self.scoring.balance_score(
            profile.expense_ratio_pct, savings_rate, time_required, horizon, projection
        )
        health, health_breakdown = self.scoring.financial_health_score(
            profile, savings_rate, time_required, projection, life_stage
        )

        result = CalculationResult(
            total_goal_cost=goal_cost,
            required_monthly_contribution=required,
            total_monthly_contribution=capacity,
            time_required_years=time_required,
            goal_achievable=time_required < self.settings.UNREACHABLE_YEARS,
            savings_rate_pct=savings_rate,
            expense_ratio_pct=profile.expense_ratio_pct,
            disposable_income=disposable,
            emergency_months=profile.emergency_months,
            emi_ratio_pct=profile.emi_ratio_pct,
            real_return_pct=real_return_pct(returns, inflation),
            balance_score=balance,
            financial_health_score=health,
            balance_breakdown=balance_breakdown,
            health_breakdown=health_breakdown,
            investment_projection=projection,
            investment_gap=investment_gap,
            sip_efficiency_pct=sip_efficiency,
            life_stage_insights=life_stage,
            scenarios=self.scenarios.generate(profile, goal_cost, required, time_required, projection),
            insights=generate_insights(
                profile,
                projection,
                goal_cost,
                time_required,
                investment_gap,
                sip_efficiency,
                self.settings.UNREACHABLE_YEARS,
            ),
            balance_assessment=self.work_life_balance.assess(profile, strength),
            investment_health=assess_investment_health(
                profile.existing_investments_value,
                profile.current_monthly_contribution,
                profile.contribution_duration_years,
                profile.age or DEFAULT_AGE,
                profile.monthly_income,
            ),
            debt_insights=debt_insights(profile, strength),
            debt_strategies=debt_strategies(profile),
            balance_plans=balance_plans(profile, projection),
            action_plans=action_plans(projection),
        )
        result.flags = extract_flags(result, self.settings.UNREACHABLE_YEARS)

        logger.info(
            f"✅ Plan calculated: goal={goal_cost:,.0f} required={required:,.0f}/month "
            f"time={time_required}y balance={balance} health={health}"
        )
        self.last_result = result
        return result
