from goalplanner.core.config import PlannerSettings
from goalplanner.services.goal_costs import total_goal_cost
from goalplanner.services.profile_builder import create_financial_profile_from_form_data, get_safe_number


def test_safe_number_defaults():
    assert get_safe_number("42.5") == 42.5
    assert get_safe_number("") == 0
    assert get_safe_number(None) == 0
    assert get_safe_number("abc") == 0
    assert get_safe_number(-5) == 0
    assert get_safe_number("nan") == 0
    assert get_safe_number(None, "returns") == 12
    assert get_safe_number(-1, "inflation") == 6


def test_form_data_mapping():
    profile = create_financial_profile_from_form_data({
        "age": "30",
        "timeline": "15",
        "lifeExpectancy": "80",
        "income": "100000",
        "expenses": "",
        "savings": 500000,
        "returns": "",
        "inflation": "-3",
        "currentSip": "5000",
        "sipDuration": "2",
        "goals": {
            "house": {"enabled": True, "amount": "5000000"},
            "vehicle": {"enabled": False, "amount": 800000},
            "broken": "yes",
        },
    })
    assert profile.age == 30
    assert profile.horizon_years == 15
    assert profile.life_expectancy == 80
    assert profile.monthly_income == 100000
    assert profile.monthly_expenses == 0
    assert profile.current_savings == 500000
    assert profile.expected_annual_return_pct == 12
    assert profile.expected_annual_inflation_pct == 6
    assert profile.current_monthly_contribution == 5000
    assert profile.contribution_duration_years == 2
    assert set(profile.goals) == {"house", "vehicle"}
    assert profile.goals["house"].amount == 5000000
    assert profile.loan_portfolio is None
    assert profile.currency == "INR"


def test_values_clamped_to_ranges():
    profile = create_financial_profile_from_form_data({
        "age": 200,
        "returns": 80,
        "inflation": 40,
        "sipDuration": 70,
        "lifeExpectancy": 10,
    })
    assert profile.age == 150
    assert profile.expected_annual_return_pct == 50
    assert profile.expected_annual_inflation_pct == 25
    assert profile.contribution_duration_years == 50
    assert profile.life_expectancy == 30


def test_loans_are_aggregated():
    profile = create_financial_profile_from_form_data({
        "income": 100000,
        "loans": [
            {"principal": "500000", "rate": "10", "tenureYears": "5", "emi": "10624"},
            {"principal": "", "rate": "9", "tenureYears": "3"},
            "not a loan",
        ],
    })
    assert profile.loan_portfolio.loan_count == 1
    assert profile.loan_portfolio.total_outstanding == 500000
    assert profile.total_debt == 500000


def test_unknown_currency_falls_back():
    assert create_financial_profile_from_form_data({"currency": "XYZ"}).currency == "INR"
    assert create_financial_profile_from_form_data({"currency": "USD"}).currency == "USD"


def test_smart_defaults_follow_settings():
    settings = PlannerSettings(DEFAULT_RETURN_PCT=10, DEFAULT_INFLATION_PCT=5, DEFAULT_CURRENCY="USD")
    profile = create_financial_profile_from_form_data({}, settings)
    assert profile.expected_annual_return_pct == 10
    assert profile.expected_annual_inflation_pct == 5
    assert profile.currency == "USD"


def test_goal_enabled_strings_parsed_as_booleans():
    profile = create_financial_profile_from_form_data({
        "goals": {
            "house": {"enabled": "false", "amount": 100},
            "car": {"enabled": "0", "amount": 200},
            "travel": {"enabled": "true", "amount": 300},
            "wedding": {"enabled": None, "amount": 400},
            "gadget": {"enabled": "maybe", "amount": 500},
        },
    })
    assert profile.goals["house"].enabled is False
    assert profile.goals["car"].enabled is False
    assert profile.goals["travel"].enabled is True
    assert profile.goals["wedding"].enabled is False
    assert "gadget" not in profile.goals
    assert total_goal_cost(profile.goals) == 300
