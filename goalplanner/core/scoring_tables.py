# goalplanner/core/scoring_tables.py
#
# Threshold ladders used by the portfolio-strength, balance and
# financial-health scores. Every ladder is an ordered tuple of bands and is
# evaluated top to bottom; the first band whose predicate holds contributes
# its delta and evaluation stops. A value matching no band contributes 0.

import operator
from typing import NamedTuple, Tuple
from pydantic import BaseModel, ConfigDict

_OPERATORS = {
    "lt": operator.lt,
    "le": operator.le,
    "gt": operator.gt,
    "ge": operator.ge,
}


class Band(NamedTuple):
    op: str          # lt | le | gt | ge
    limit: float
    delta: float

    def matches(self, value: float) -> bool:
        return _OPERATORS[self.op](value, self.limit)


class ConsistencyBand(NamedTuple):
    """Joint contribution-amount and duration threshold."""
    min_contribution: float
    min_years: float
    delta: float
    strict: bool = False  # strict: contribution must exceed min_contribution

    def matches(self, contribution: float, years: float) -> bool:
        if self.strict:
            amount_ok = contribution > self.min_contribution
        else:
            amount_ok = contribution >= self.min_contribution
        return amount_ok and years >= self.min_years


def evaluate_bands(value: float, bands) -> float:
    for band in bands:
        if band.matches(value):
            return band.delta
    return 0


def evaluate_consistency(contribution: float, years: float, bands) -> float:
    for band in bands:
        if band.matches(contribution, years):
            return band.delta
    return 0


class ScoringTables(BaseModel):
    model_config = ConfigDict(frozen=True)

    # ─── Portfolio strength (each sub-score capped by construction) ───
    strength_base: Tuple[Band, ...] = (
        Band("ge", 1000000, 30),
        Band("ge", 500000, 20),
        Band("ge", 100000, 10),
        Band("gt", 0, 5),
    )
    strength_consistency: Tuple[ConsistencyBand, ...] = (
        ConsistencyBand(20000, 3, 40),
        ConsistencyBand(10000, 2, 30),
        ConsistencyBand(5000, 1, 20),
        ConsistencyBand(0, 0, 10, strict=True),
    )
    strength_discipline: Tuple[Band, ...] = (
        Band("ge", 5, 30),
        Band("ge", 3, 20),
        Band("ge", 1, 10),
    )
    strength_cap: int = 100

    # ─── Balance score ───
    balance_baseline: int = 50
    balance_expense_ratio: Tuple[Band, ...] = (
        Band("lt", 50, 15),
        Band("le", 60, 5),
        Band("gt", 70, -20),
    )
    balance_savings_rate: Tuple[Band, ...] = (
        Band("ge", 30, 15),
        Band("ge", 20, 10),
        Band("lt", 10, -15),
    )
    # Limits are multiples of the user's horizon
    balance_horizon_alignment: Tuple[Band, ...] = (
        Band("le", 0.8, 15),
        Band("le", 1.0, 5),
        Band("le", 1.2, -10),
        Band("gt", 1.2, -20),
    )
    balance_portfolio_strength: Tuple[Band, ...] = (
        Band("ge", 80, 20),
        Band("ge", 60, 15),
        Band("ge", 40, 10),
        Band("ge", 20, 5),
    )
    balance_contribution_duration: Tuple[Band, ...] = (
        Band("ge", 3, 10),
        Band("ge", 1, 5),
    )

    # ─── Financial health score ───
    health_baseline: int = 60
    health_expense_ratio: Tuple[Band, ...] = (
        Band("gt", 70, -15),
        Band("lt", 50, 10),
    )
    health_savings_rate: Tuple[Band, ...] = (
        Band("gt", 25, 15),
        Band("gt", 15, 10),
        Band("lt", 10, -15),
    )
    health_horizon_met: int = 10
    health_horizon_missed: int = -10
    health_emergency_months: Tuple[Band, ...] = (
        Band("ge", 6, 15),
        Band("ge", 3, 8),
        Band("lt", 1, -10),
    )
    # Emergency bonus discount when debt outweighs savings
    negative_net_worth_factor: float = 0.3
    thin_net_worth_factor: float = 0.6
    thin_net_worth_ratio: float = 0.2
    health_emi_ratio: Tuple[Band, ...] = (
        Band("gt", 40, -20),
        Band("gt", 30, -15),
        Band("gt", 20, -5),
        Band("lt", 10, 5),
    )
    # Outstanding debt as % of annual income, most severe first
    health_debt_to_income: Tuple[Band, ...] = (
        Band("gt", 3000, -60),
        Band("gt", 2000, -45),
        Band("gt", 1000, -30),
        Band("gt", 500, -20),
        Band("gt", 300, -10),
        Band("gt", 100, -5),
        Band("gt", 0, 2),
    )
    health_loan_count: Tuple[Band, ...] = (
        Band("gt", 4, -5),
        Band("gt", 2, -2),
    )
    health_loan_rate: Tuple[Band, ...] = (
        Band("gt", 15, -8),
        Band("gt", 12, -5),
        Band("lt", 8, 5),
    )
    health_interest_coverage: Tuple[Band, ...] = (
        Band("lt", 25, -25),
        Band("lt", 50, -15),
        Band("lt", 75, -10),
        Band("lt", 100, -5),
    )
    negative_amortization_penalty: int = -15
    health_portfolio_strength: Tuple[Band, ...] = (
        Band("ge", 80, 25),
        Band("ge", 60, 20),
        Band("ge", 40, 15),
        Band("ge", 20, 10),
        Band("gt", 0, 5),
    )
    lifespan_conflict_penalty: int = -10
    # required / sustainable post-goal income, in percent
    health_sustainability_ratio: Tuple[Band, ...] = (
        Band("le", 100, 7),
        Band("le", 125, 3),
        Band("le", 200, -2),
        Band("gt", 200, -5),
    )

    score_floor: int = 0
    score_ceiling: int = 100


DEFAULT_SCORING_TABLES = ScoringTables()
