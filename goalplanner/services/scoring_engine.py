# goalplanner/services/scoring_engine.py

import logging
from typing import Dict, Optional, Tuple
from goalplanner.core.scoring_tables import (
    DEFAULT_SCORING_TABLES,
    Band,
    ScoringTables,
    evaluate_bands,
)
from goalplanner.models.plan import FinancialProfile, InvestmentProjection, LifeStageInsights
from goalplanner.utils.utils import round_half_up

logger = logging.getLogger(__name__)

ScoreWithBreakdown = Tuple[int, Dict[str, float]]


class ScoringEngine:
    """
    Balance score and financial-health score.

    Both start from a baseline and add one delta per bucket; every bucket is
    an ordered band table (first match wins). The final score is rounded and
    clamped to [score_floor, score_ceiling].
    """

    def __init__(self, tables: ScoringTables = DEFAULT_SCORING_TABLES):
        self.tables = tables

    def _finish(self, raw: float) -> int:
        score = int(round_half_up(raw))
        return max(self.tables.score_floor, min(self.tables.score_ceiling, score))

    @staticmethod
    def _scaled(bands, factor: float):
        return tuple(Band(b.op, b.limit * factor, b.delta) for b in bands)

    # ─── Balance score ───

    def balance_score(
        self,
        expense_ratio_pct: float,
        savings_rate_pct: float,
        time_required_years: float,
        horizon_years: float,
        projection: InvestmentProjection,
    ) -> ScoreWithBreakdown:
        t = self.tables
        breakdown = {
            "baseline": t.balance_baseline,
            "expense_ratio": evaluate_bands(expense_ratio_pct, t.balance_expense_ratio),
            "savings_rate": evaluate_bands(savings_rate_pct, t.balance_savings_rate),
            # Alignment limits are fractions of the user's horizon
            "horizon_alignment": evaluate_bands(
                time_required_years, self._scaled(t.balance_horizon_alignment, horizon_years)
            ),
            "portfolio_strength": evaluate_bands(projection.portfolio_strength, t.balance_portfolio_strength),
            "contribution_duration": evaluate_bands(
                projection.contribution_duration_years, t.balance_contribution_duration
            ),
        }
        return self._finish(sum(breakdown.values())), breakdown

    # ─── Financial health score ───

    def emergency_fund_delta(self, profile: FinancialProfile) -> float:
        if profile.monthly_expenses <= 0:
            return 0
        t = self.tables
        delta = evaluate_bands(profile.emergency_months, t.health_emergency_months)

        debt = profile.total_debt
        if delta > 0 and debt > 0:
            net_worth = profile.current_savings - debt
            if net_worth < 0:
                delta *= t.negative_net_worth_factor
            elif net_worth / debt < t.thin_net_worth_ratio:
                delta *= t.thin_net_worth_factor
        return delta

    def debt_deltas(self, profile: FinancialProfile) -> Dict[str, float]:
        """Debt-to-income, loan count, rate and interest coverage buckets"""
        t = self.tables
        loans = profile.loan_portfolio
        if loans is None or loans.total_outstanding <= 0:
            return {}

        annual_income = profile.monthly_income * 12
        if annual_income > 0:
            debt_to_income = loans.total_outstanding / annual_income * 100
        else:
            # Debt with no income at all lands in the most severe band
            debt_to_income = float("inf")

        deltas = {
            "debt_to_income": evaluate_bands(debt_to_income, t.health_debt_to_income),
            "loan_count": evaluate_bands(loans.loan_count, t.health_loan_count),
            "loan_rate": evaluate_bands(loans.weighted_average_rate_pct, t.health_loan_rate),
        }

        if loans.weighted_average_rate_pct > 0:
            annual_interest = loans.total_outstanding * loans.weighted_average_rate_pct / 100
            coverage_pct = profile.existing_monthly_emi * 12 / annual_interest * 100
            deltas["interest_coverage"] = evaluate_bands(coverage_pct, t.health_interest_coverage)
            if coverage_pct < 100:
                # EMI does not cover accruing interest; principal is growing
                deltas["negative_amortization"] = t.negative_amortization_penalty
                logger.debug(f"Interest coverage {coverage_pct:.1f}% - debt is growing")
        return deltas

    def life_stage_deltas(self, life_stage: Optional[LifeStageInsights]) -> Dict[str, float]:
        if life_stage is None:
            return {}
        t = self.tables
        return {
            "lifespan_conflict": t.lifespan_conflict_penalty if life_stage.timeline_conflict else 0,
            "sustainability": evaluate_bands(
                life_stage.sustainability.sustainability_ratio_pct, t.health_sustainability_ratio
            ),
        }

    def financial_health_score(
        self,
        profile: FinancialProfile,
        savings_rate_pct: float,
        time_required_years: float,
        projection: InvestmentProjection,
        life_stage: Optional[LifeStageInsights] = None,
    ) -> ScoreWithBreakdown:
        t = self.tables
        horizon_met = time_required_years <= profile.horizon_years

        breakdown = {
            "baseline": t.health_baseline,
            "expense_ratio": evaluate_bands(profile.expense_ratio_pct, t.health_expense_ratio),
            "savings_rate": evaluate_bands(savings_rate_pct, t.health_savings_rate),
            "horizon": t.health_horizon_met if horizon_met else t.health_horizon_missed,
            "emergency_fund": self.emergency_fund_delta(profile),
        }
        if profile.monthly_income > 0:
            breakdown["emi_ratio"] = evaluate_bands(profile.emi_ratio_pct, t.health_emi_ratio)

        breakdown.update(self.debt_deltas(profile))
        breakdown["portfolio_strength"] = evaluate_bands(projection.portfolio_strength, t.health_portfolio_strength)
        breakdown.update(self.life_stage_deltas(life_stage))

        return self._finish(sum(breakdown.values())), breakdown
