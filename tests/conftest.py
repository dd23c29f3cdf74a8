import pytest
from goalplanner.core.config import PlannerSettings
from goalplanner.models.plan import FinancialProfile, GoalEntry
from goalplanner.services.planning_engine import GoalPlanningEngine


@pytest.fixture
def settings():
    return PlannerSettings()


@pytest.fixture
def engine(settings):
    return GoalPlanningEngine(settings=settings)


@pytest.fixture
def house_profile():
    return FinancialProfile(
        horizon_years=15,
        monthly_income=100000,
        monthly_expenses=50000,
        current_savings=500000,
        existing_monthly_emi=0,
        expected_annual_return_pct=12,
        expected_annual_inflation_pct=6,
        goals={"house": GoalEntry(enabled=True, amount=5000000)},
    )
