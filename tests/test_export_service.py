import json
from datetime import datetime, timezone
import pytest
from goalplanner.core.errors import InvalidArgument
from goalplanner.services.export_service import (
    build_plan_document,
    dumps_plan,
    format_results_text,
    loads_plan,
    result_from_plan,
)

FORM = {
    "age": 30,
    "timeline": 15,
    "lifeExpectancy": 80,
    "income": 100000,
    "expenses": 50000,
    "savings": 500000,
    "goals": {"house": {"enabled": True, "amount": 5000000}},
}


def test_plan_round_trip_keeps_numbers(engine, house_profile):
    profile = house_profile.model_copy(update={"age": 30, "life_expectancy": 80})
    result = engine.calculate(profile)

    document = build_plan_document(FORM, result, timestamp=datetime(2024, 1, 1, tzinfo=timezone.utc))
    restored_document = loads_plan(dumps_plan(document))
    restored = result_from_plan(restored_document)

    assert restored == result
    assert restored.required_monthly_contribution == result.required_monthly_contribution
    assert restored.investment_projection.projected_value == result.investment_projection.projected_value
    assert restored_document["formData"] == FORM
    assert restored_document["goals"] == FORM["goals"]
    assert restored_document["timestamp"] == "2024-01-01T00:00:00+00:00"
    assert restored_document["appVersion"] == "1.0"


def test_document_without_results():
    document = loads_plan(dumps_plan(build_plan_document(FORM, None)))
    assert document["results"] is None
    assert result_from_plan(document) is None


def test_invalid_plan_files_rejected():
    with pytest.raises(InvalidArgument):
        loads_plan("{not json")
    with pytest.raises(InvalidArgument):
        loads_plan(json.dumps({"results": {}}))
    with pytest.raises(InvalidArgument):
        loads_plan(json.dumps([1, 2, 3]))


def test_results_text(engine, house_profile):
    text = format_results_text(engine.calculate(house_profile))
    assert text.startswith("Financial Goals Summary:")
    assert "Total Goal Cost: ₹50.0L" in text
    assert "Time Required: 15.0y" in text
    assert "Portfolio Strength: 0/100" in text
    assert "not achievable" not in text
