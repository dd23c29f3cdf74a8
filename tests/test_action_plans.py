import pytest
from goalplanner.models.plan import FinancialProfile, InvestmentProjection
from goalplanner.services.action_plans import action_plans, balance_plans, plan_stage


def _projection(strength=0, existing=0, sip=0, duration=0, projected=0):
    return InvestmentProjection(
        existing_investments=existing,
        current_monthly_contribution=sip,
        contribution_duration_years=duration,
        projected_existing_value=0,
        contributions_to_date_value=0,
        continuing_contribution_value=0,
        projected_contribution_value=0,
        projected_value=projected,
        remaining_contribution_months=0,
        portfolio_strength=strength,
    )


@pytest.mark.parametrize("age, stage", [
    (28, "early_career"),
    (29, "building"),
    (35, "building"),
    (45, "peak_earning"),
    (55, "pre_retirement"),
    (56, "senior"),
])
def test_plan_stage_bands(age, stage):
    assert plan_stage(age) == stage


def _ids(plans):
    return [p.id for p in plans]


def test_early_career_without_investments():
    plans = balance_plans(FinancialProfile(age=24), _projection())
    assert _ids(plans) == ["start-sip-early", "build-investment-base"]
    assert plans[0].impact["sip_increase"] == "+₹5,000/month"


def test_building_years_with_running_sip():
    plans = balance_plans(FinancialProfile(age=32), _projection(strength=45, sip=10000, duration=3, projected=1000000))
    assert _ids(plans) == ["strengthen-portfolio", "step-up-sip"]
    assert plans[0].impact["portfolio_strength"] == "45% → 75%+"
    assert plans[1].impact["projected_sip"] == "₹15,000"
    assert plans[1].impact["additional_wealth"] == "₹3.0L"


def test_missing_age_uses_building_plans():
    assert _ids(balance_plans(FinancialProfile(), _projection(strength=70))) == []


def test_pre_retirement_always_checks_corpus():
    assert _ids(balance_plans(FinancialProfile(age=50), _projection())) == ["retirement-corpus-check"]
    plans = balance_plans(FinancialProfile(age=50), _projection(sip=20000))
    assert _ids(plans) == ["retirement-corpus-check", "maximize-retirement-savings"]


def test_senior_legacy_planning():
    plans = balance_plans(FinancialProfile(age=70), _projection(existing=2000000, projected=2500000))
    assert _ids(plans) == ["preserve-wealth", "legacy-planning"]
    assert plans[0].impact["monthly_income"] == "₹20,000"
    assert plans[1].priority == 2


def test_action_plans_follow_portfolio_strength():
    weak = action_plans(_projection(strength=20))
    assert [p.term for p in weak] == ["short_term", "medium_term", "long_term"]
    assert weak[0].actions[1] == "Start or increase SIP amount to build investment discipline"
    assert weak[0].actions[4] == "Research and select appropriate mutual funds for SIP"

    strong = action_plans(_projection(strength=85, existing=600000, sip=20000))
    assert strong[0].actions[1] == "Continue current SIP strategy and consider step-up SIP"
    assert strong[1].actions[0] == "Diversify investments across asset classes and geographies"
    assert strong[1].actions[3] == "Consider tax-saving investment options (ELSS, PPF)"
    assert strong[2].actions[1] == "Consider alternative investments (REITs, international funds)"
    assert all(len(p.actions) == 5 for p in strong)
