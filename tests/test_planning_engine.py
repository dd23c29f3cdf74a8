import pytest
from goalplanner.core.config import PlannerSettings
from goalplanner.models.plan import FinancialProfile, GoalEntry, LoanPortfolio
from goalplanner.services.flags import extract_flags, get_flag_descriptions
from goalplanner.services.planning_engine import GoalPlanningEngine


def test_house_goal_plan(engine, house_profile):
    result = engine.calculate(house_profile)
    assert result.total_goal_cost == 5000000
    assert 15000 <= result.required_monthly_contribution <= 30000
    assert result.time_required_years == 15
    assert result.goal_achievable is True
    assert result.expense_ratio_pct == 50
    assert result.disposable_income == 50000
    assert result.emergency_months == 10
    assert result.real_return_pct == 5.7
    assert result.investment_gap == 4500000
    assert result.life_stage_insights is None
    # 50 + 5 (expenses) + 15 (savings rate) + 5 (on horizon)
    assert result.balance_score == 75
    assert result.financial_health_score == 100


def test_engine_keeps_last_result(engine, house_profile):
    assert engine.last_result is None
    result = engine.calculate(house_profile)
    assert engine.last_result is result


def test_no_goals_gives_zero_plan(engine, house_profile):
    profile = house_profile.model_copy(update={"goals": {}})
    result = engine.calculate(profile)
    assert result.total_goal_cost == 0
    assert result.required_monthly_contribution == 0
    assert result.time_required_years == 0
    assert result.scenarios == []
    assert result.insights == []
    assert result.balance_breakdown["horizon_alignment"] == 15
    assert "no_active_goals" in result.flags


def test_unreachable_goal_is_a_value_not_an_error(engine):
    profile = FinancialProfile(
        horizon_years=0,
        monthly_income=50000,
        monthly_expenses=49000,
        current_savings=10000,
        goals={"other": GoalEntry(enabled=True, amount=1e9)},
    )
    result = engine.calculate(profile)
    assert result.time_required_years == 999
    assert result.goal_achievable is False
    assert "goal_unreachable" in result.flags
    assert any(i.type == "danger" for i in result.insights)


def test_lifespan_conflict_costs_ten_points(engine, house_profile):
    profile = house_profile.model_copy(update={"age": 28, "horizon_years": 30, "life_expectancy": 55})
    result = engine.calculate(profile)
    assert result.life_stage_insights is not None
    assert result.life_stage_insights.timeline_conflict is True
    assert result.health_breakdown["lifespan_conflict"] == -10
    assert "timeline_exceeds_life_expectancy" in result.flags


def test_zero_degenerate_profile_still_completes(engine):
    result = engine.calculate(FinancialProfile())
    assert result.total_goal_cost == 0
    assert result.savings_rate_pct == 0
    assert result.expense_ratio_pct == 0
    assert result.emergency_months == 0
    assert 0 <= result.balance_score <= 100


def test_savings_rate_counts_running_sip(engine, house_profile):
    profile = house_profile.model_copy(update={"current_monthly_contribution": 10000, "contribution_duration_years": 2})
    result = engine.calculate(profile)
    assert result.total_monthly_contribution == result.required_monthly_contribution + 10000
    assert result.savings_rate_pct == pytest.approx(result.total_monthly_contribution / 50000 * 100)


def test_engines_do_not_share_settings(house_profile):
    strict = GoalPlanningEngine(settings=PlannerSettings(MAX_SIMULATION_MONTHS=12))
    default = GoalPlanningEngine(settings=PlannerSettings())
    profile = house_profile.model_copy(update={"horizon_years": 0})
    assert strict.calculate(profile).time_required_years == 999
    assert default.calculate(profile).time_required_years == 999
    assert strict.settings.MAX_SIMULATION_MONTHS == 12
    assert default.settings.MAX_SIMULATION_MONTHS == 600


def test_result_is_json_primitive(engine, house_profile):
    profile = house_profile.model_copy(update={"age": 30, "life_expectancy": 80})
    dumped = engine.calculate(profile).model_dump(mode="json")

    def walk(value):
        if isinstance(value, dict):
            for v in value.values():
                walk(v)
        elif isinstance(value, list):
            for v in value:
                walk(v)
        else:
            assert value is None or type(value) in (int, float, str, bool)

    walk(dumped)


def test_every_flag_has_a_description(engine, house_profile):
    descriptions = get_flag_descriptions()
    profile = house_profile.model_copy(update={
        "age": 28, "horizon_years": 30, "life_expectancy": 55, "existing_monthly_emi": 45000,
    })
    result = engine.calculate(profile)
    for flag in extract_flags(result):
        assert flag in descriptions


def test_investment_aware_advice_is_attached(engine, house_profile):
    result = engine.calculate(house_profile)
    assert result.balance_assessment.life_stage == "building"
    assert result.balance_assessment.status == "Good Emergency Coverage - Start Investing"
    assert result.investment_health.score == 0
    assert result.debt_insights == []
    assert result.debt_strategies == []
    assert result.balance_plans[0].id == "strengthen-portfolio"
    assert [p.term for p in result.action_plans] == ["short_term", "medium_term", "long_term"]


def test_loans_produce_debt_advice(engine, house_profile):
    profile = house_profile.model_copy(update={
        "existing_investments_value": 500000,
        "loan_portfolio": LoanPortfolio(total_outstanding=2000000, weighted_average_rate_pct=10, loan_count=1),
    })
    result = engine.calculate(profile)
    assert result.debt_insights[0].title == "Negative Net Worth Situation"
    assert result.debt_strategies[0].title == "Investment vs. Debt Strategy"
    assert result.debt_strategies[0].type == "success"
