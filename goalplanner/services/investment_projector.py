# goalplanner/services/investment_projector.py

import logging
from goalplanner.core.errors import require_finite, require_non_negative
from goalplanner.core.scoring_tables import (
    DEFAULT_SCORING_TABLES,
    ScoringTables,
    evaluate_bands,
    evaluate_consistency,
)
from goalplanner.models.plan import InvestmentProjection
from goalplanner.services.time_value import compound_growth, future_value_of_annuity

logger = logging.getLogger(__name__)


class InvestmentProjector:
    """
    Projects what the user's existing portfolio and running SIP will be worth
    at the end of the horizon, and scores how strong that portfolio is.
    """

    def __init__(self, tables: ScoringTables = DEFAULT_SCORING_TABLES):
        self.tables = tables

    def project(
        self,
        existing_value: float,
        monthly_contribution: float,
        contribution_elapsed_years: float,
        annual_rate_pct: float,
        horizon_years: float,
    ) -> InvestmentProjection:
        require_non_negative(
            existing_value=existing_value,
            monthly_contribution=monthly_contribution,
            contribution_elapsed_years=contribution_elapsed_years,
        )
        require_finite(annual_rate_pct=annual_rate_pct, horizon_years=horizon_years)

        # A non-positive horizon collapses everything to present values
        horizon = max(0, horizon_years)

        projected_existing = compound_growth(existing_value, annual_rate_pct, horizon)
        remaining_months = max(0, horizon * 12 - contribution_elapsed_years * 12)

        to_date_value = 0.0
        continuing_value = 0.0
        if monthly_contribution > 0:
            # Past SIPs approximated as one lump grown over the whole horizon
            invested_so_far = monthly_contribution * 12 * contribution_elapsed_years
            to_date_value = compound_growth(invested_so_far, annual_rate_pct, horizon)
            continuing_value = future_value_of_annuity(monthly_contribution, annual_rate_pct, remaining_months)

        contribution_value = to_date_value + continuing_value
        strength = self.portfolio_strength(existing_value, monthly_contribution, contribution_elapsed_years)

        logger.debug(
            f"Projection: existing={projected_existing:,.0f} sip={contribution_value:,.0f} "
            f"strength={strength}"
        )

        return InvestmentProjection(
            existing_investments=float(existing_value),
            current_monthly_contribution=float(monthly_contribution),
            contribution_duration_years=float(contribution_elapsed_years),
            projected_existing_value=projected_existing,
            contributions_to_date_value=to_date_value,
            continuing_contribution_value=continuing_value,
            projected_contribution_value=contribution_value,
            projected_value=projected_existing + contribution_value,
            remaining_contribution_months=float(remaining_months),
            portfolio_strength=strength,
        )

    def portfolio_strength(self, existing_value: float, monthly_contribution: float, duration_years: float) -> int:
        """0-100 score: investment base + SIP consistency + SIP discipline"""
        base = evaluate_bands(existing_value, self.tables.strength_base)
        consistency = evaluate_consistency(monthly_contribution, duration_years, self.tables.strength_consistency)
        discipline = evaluate_bands(duration_years, self.tables.strength_discipline)
        return int(min(self.tables.strength_cap, base + consistency + discipline))

    @staticmethod
    def sip_efficiency_pct(monthly_contribution: float, projected_contribution_value: float, duration_years: float) -> float:
        """Projected gain on SIP money invested so far, in %"""
        if not monthly_contribution or duration_years <= 0:
            return 0.0
        total_invested = monthly_contribution * 12 * duration_years
        if total_invested <= 0:
            return 0.0
        return ((projected_contribution_value - total_invested) / total_invested) * 100
