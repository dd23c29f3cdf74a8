from goalplanner.models.plan import FinancialProfile, InvestmentProjection, LoanPortfolio
from goalplanner.services.insight_service import (
    debt_insights,
    debt_strategies,
    emergency_fund_insight,
    generate_insights,
    investment_insights,
)
from goalplanner.services.investment_projector import InvestmentProjector

empty_projection = InvestmentProjector().project(0, 0, 0, 12, 10)


def _profile(**overrides):
    values = dict(horizon_years=10, monthly_income=100000, monthly_expenses=50000)
    values.update(overrides)
    return FinancialProfile(**values)


def _projection(strength):
    return InvestmentProjection(
        existing_investments=500000,
        current_monthly_contribution=10000,
        contribution_duration_years=3,
        projected_existing_value=1500000,
        contributions_to_date_value=430000,
        continuing_contribution_value=1500000,
        projected_contribution_value=1930000,
        projected_value=3430000,
        remaining_contribution_months=84,
        portfolio_strength=strength,
    )


def _titles(insights):
    return [i.title for i in insights]


def test_no_insights_without_inputs():
    assert generate_insights(_profile(monthly_income=0), empty_projection, 1000000, 10, 0, 0) == []
    assert generate_insights(_profile(monthly_expenses=0), empty_projection, 1000000, 10, 0, 0) == []
    assert generate_insights(_profile(), empty_projection, 0, 0, 0, 0) == []


def test_achievable_goal():
    insights = generate_insights(_profile(), empty_projection, 1000000, 8, 0, 0)
    assert _titles(insights) == ["Goals are achievable"]
    assert insights[0].type == "success"


def test_goal_beyond_horizon():
    insights = generate_insights(_profile(), empty_projection, 1000000, 14.5, 0, 0)
    assert _titles(insights) == ["Investment strategy needs enhancement"]
    assert insights[0].type == "warning"


def test_unreachable_goal():
    insights = generate_insights(_profile(), empty_projection, 1000000, 999, 0, 0)
    assert _titles(insights) == ["Goals not reachable"]
    assert insights[0].type == "danger"


def test_high_emi_burden():
    insights = generate_insights(_profile(existing_monthly_emi=40000), empty_projection, 1000000, 8, 0, 0)
    assert insights[-1].title == "EMI burden limiting investment growth"
    assert "40.0%" in insights[-1].message


def test_investment_insights_strong_portfolio():
    insights = investment_insights(_profile(), _projection(85), 1200000, 20)
    assert _titles(insights) == [
        "Excellent Investment Foundation",
        "SIP Strategy Performing Well",
        "Investment Gap Identified",
    ]
    assert "₹10,000" in insights[2].message


def test_investment_insights_weak_portfolio():
    insights = investment_insights(_profile(), _projection(25), 0, 5)
    assert _titles(insights) == ["Investment Portfolio Needs Attention"]
    assert insights[0].type == "warning"


def test_investment_insights_included_in_plan_insights():
    insights = generate_insights(_profile(), _projection(65), 1000000, 8, 0, 0)
    assert _titles(insights) == ["Strong Investment Progress", "Goals are achievable"]


def _indebted(**overrides):
    values = dict(
        existing_investments_value=200000,
        loan_portfolio=LoanPortfolio(
            total_outstanding=3000000,
            weighted_average_rate_pct=14,
            loan_count=1,
            total_interest_burden=500000,
        ),
    )
    values.update(overrides)
    return _profile(**values)


def test_debt_insights_for_heavy_borrower():
    insights = debt_insights(_indebted(), 30)
    assert _titles(insights) == [
        "Negative Net Worth Situation",
        "High Debt Limiting Investment Potential",
        "Critical Emergency Gap Despite Investments",
    ]
    assert "250% of income" in insights[1].message
    assert insights[2].message.endswith("This gap is critical given your debt obligations.")


def test_debt_insights_extreme_burden_without_income():
    insights = debt_insights(_indebted(monthly_income=0, monthly_expenses=0), 30)
    assert _titles(insights) == ["Negative Net Worth Situation", "Extreme Debt Blocking Investment Growth"]
    assert insights[1].type == "danger"


def test_emergency_cover_through_investments():
    profile = _profile(current_savings=50000, existing_investments_value=300000)
    assert _titles(debt_insights(profile, 30)) == ["Emergency Coverage via Investments"]
    assert emergency_fund_insight(_profile(current_savings=500000), 30) is None
    assert emergency_fund_insight(_profile(current_savings=200000), 70).title == (
        "Emergency Fund Adequate with Investment Backup"
    )


def test_debt_strategies_prefer_prepayment_for_costly_loans():
    strategies = debt_strategies(_indebted())
    assert _titles(strategies) == ["Investment vs. Debt Strategy"]
    assert strategies[0].type == "warning"
    assert "debt reduction" in strategies[0].message


def test_debt_strategies_for_cheap_loans_and_large_portfolio():
    profile = _indebted(
        existing_investments_value=1000000,
        loan_portfolio=LoanPortfolio(total_outstanding=3000000, weighted_average_rate_pct=9, loan_count=1),
    )
    strategies = debt_strategies(profile)
    assert [s.type for s in strategies] == ["success", "info"]
    assert "₹2.0L" in strategies[1].message
    assert debt_strategies(_profile()) == []
