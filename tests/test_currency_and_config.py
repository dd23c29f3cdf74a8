import logging
import pytest
from pydantic import ValidationError
from goalplanner.core.config import PlannerSettings, VALIDATION_RANGES, configure_logging
from goalplanner.utils.currency import convert_currency, format_currency, format_percentage, format_years
from goalplanner.utils.utils import round_half_up, safe_ratio_pct


def test_format_currency_inr():
    assert format_currency(0) == "₹0"
    assert format_currency(8500) == "₹8,500"
    assert format_currency(1250000) == "₹12.5L"
    assert format_currency(15000000) == "₹1.5Cr"
    assert format_currency(-250000) == "-₹2.5L"


def test_format_currency_usd():
    assert format_currency(999, "USD") == "$999"
    assert format_currency(4500, "USD") == "$4.5K"
    assert format_currency(2500000, "USD") == "$2.5M"


def test_unknown_currency_uses_default():
    assert format_currency(500, "XYZ") == "₹500"


def test_convert_currency():
    assert convert_currency(1000, "INR", "USD") == pytest.approx(12)
    assert convert_currency(12, "USD", "INR") == pytest.approx(1000)
    assert convert_currency(1000, "INR", "INR") == 1000


def test_format_helpers():
    assert format_percentage(37.014) == "37.0%"
    assert format_years(15) == "15.0y"


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(0.25, 1) == 0.3
    assert round_half_up(-2.5) == -2


def test_safe_ratio():
    assert safe_ratio_pct(50, 200) == 25
    assert safe_ratio_pct(50, 0) == 0


def test_settings_validation():
    assert PlannerSettings(LOG_LEVEL="debug").LOG_LEVEL == "DEBUG"
    with pytest.raises(ValidationError):
        PlannerSettings(LOG_LEVEL="loud")
    with pytest.raises(ValidationError):
        PlannerSettings(HORIZON_TOLERANCE=1.5)
    with pytest.raises(ValidationError):
        PlannerSettings(MAX_SIMULATION_MONTHS=0)


def test_settings_are_immutable():
    settings = PlannerSettings()
    with pytest.raises(ValidationError):
        settings.MAX_SIMULATION_MONTHS = 10


def test_validation_ranges_read_only():
    with pytest.raises(TypeError):
        VALIDATION_RANGES["age"] = (0, 1)


def test_configure_logging_runs():
    root = logging.getLogger()
    previous = root.level
    try:
        configure_logging(PlannerSettings(LOG_LEVEL="WARNING"))
        configure_logging()
    finally:
        root.setLevel(previous)
