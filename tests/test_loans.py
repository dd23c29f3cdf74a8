import pytest
from goalplanner.models.plan import LoanRecord
from goalplanner.services.loan_service import aggregate_loans, loan_summary, months_to_repay, standard_emi


def _loan(**overrides):
    values = dict(principal=1000000, rate_pct=12, tenure_years=10)
    values.update(overrides)
    return LoanRecord(**values)


def test_standard_emi():
    assert standard_emi(1000000, 12, 120) == pytest.approx(14347.09, abs=0.01)
    assert standard_emi(120000, 0, 12) == 10000
    assert standard_emi(120000, 12, 0) == 0


def test_summary_without_user_emi():
    summary = loan_summary(_loan())
    assert summary.calculated_emi == pytest.approx(14347.09, abs=0.01)
    assert summary.total_months == 120
    assert summary.total_interest == pytest.approx(summary.total_amount - 1000000, abs=0.02)
    assert summary.completion_type == "standard"
    assert summary.show_emi_scenario is False


def test_emi_close_to_standard_is_standard():
    summary = loan_summary(_loan(emi=14350))
    assert summary.completion_type == "standard"
    assert summary.emi_based_months == 120
    assert summary.completion_savings == 0
    assert summary.show_emi_scenario is True


def test_higher_emi_finishes_early_and_saves_interest():
    summary = loan_summary(_loan(emi=20000))
    assert summary.completion_type == "early"
    assert summary.emi_based_months < 120
    assert summary.completion_savings > 0


def test_lower_emi_finishes_late():
    summary = loan_summary(_loan(emi=12000))
    assert summary.completion_type == "delayed"
    assert summary.emi_based_months > 120
    assert summary.completion_savings < 0


def test_emi_below_interest_is_delayed():
    summary = loan_summary(_loan(emi=9000))
    assert summary.completion_type == "delayed"
    assert summary.emi_based_months == 112


def test_months_to_repay():
    assert months_to_repay(1000000, 12, 0) is None
    assert months_to_repay(1000000, 12, 14347.1) == 120


def test_aggregate_loans():
    portfolio = aggregate_loans([
        _loan(principal=500000, rate_pct=10, tenure_years=5),
        _loan(principal=500000, rate_pct=14, tenure_years=3, tenure_months=6),
        _loan(principal=0),
        _loan(rate_pct=0),
        _loan(tenure_years=0),
    ])
    assert portfolio.loan_count == 2
    assert portfolio.total_outstanding == 1000000
    assert portfolio.weighted_average_rate_pct == pytest.approx(12)
    assert portfolio.implied_annual_interest == pytest.approx(120000)
    assert portfolio.max_tenure_years == 5
    assert portfolio.total_calculated_emi == pytest.approx(
        standard_emi(500000, 10, 60) + standard_emi(500000, 14, 42)
    )


def test_no_valid_loans():
    assert aggregate_loans([]) is None
    assert aggregate_loans([_loan(principal=0)]) is None
