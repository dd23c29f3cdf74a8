# goalplanner/services/time_value.py
#
# Time-value-of-money primitives. Rates are annual percentages; annuities
# are monthly and paid at period end (ordinary annuity).

import numpy_financial as npf
from goalplanner.core.errors import require_finite, require_non_negative, InvalidArgument
from goalplanner.utils.utils import round_half_up


def monthly_rate(annual_rate_pct: float) -> float:
    return annual_rate_pct / 100 / 12


def compound_growth(principal: float, annual_rate_pct: float, years: float) -> float:
    """principal * (1 + rate)^years"""
    require_finite(principal=principal, annual_rate_pct=annual_rate_pct)
    require_non_negative(years=years)
    return principal * (1 + annual_rate_pct / 100) ** years


def future_value_of_annuity(monthly_payment: float, annual_rate_pct: float, months: float) -> float:
    """Future value of a stream of equal monthly payments"""
    require_finite(monthly_payment=monthly_payment, annual_rate_pct=annual_rate_pct)
    require_non_negative(months=months)
    if annual_rate_pct == 0:
        return monthly_payment * months
    return float(-npf.fv(monthly_rate(annual_rate_pct), months, monthly_payment, 0))


def present_value_of_annuity(monthly_payment: float, annual_rate_pct: float, months: float) -> float:
    require_finite(monthly_payment=monthly_payment, annual_rate_pct=annual_rate_pct)
    require_non_negative(months=months)
    if annual_rate_pct == 0:
        return monthly_payment * months
    return float(-npf.pv(monthly_rate(annual_rate_pct), months, monthly_payment, 0))


def solve_annuity_payment(target_future_value: float, annual_rate_pct: float, months: float) -> float:
    """Monthly payment whose annuity future value equals the target"""
    require_non_negative(target_future_value=target_future_value)
    require_finite(annual_rate_pct=annual_rate_pct, months=months)
    if months <= 0:
        raise InvalidArgument(f"months must be positive, got {months!r}")
    if annual_rate_pct == 0:
        return target_future_value / months
    # Use numpy financial for accurate SIP calculation
    return float(-npf.pmt(monthly_rate(annual_rate_pct), months, 0, target_future_value))


def real_return_pct(nominal_pct: float, inflation_pct: float) -> float:
    """Inflation-adjusted return, one decimal"""
    require_finite(nominal_pct=nominal_pct, inflation_pct=inflation_pct)
    if inflation_pct <= -100:
        raise InvalidArgument(f"inflation_pct must be above -100, got {inflation_pct!r}")
    real = ((1 + nominal_pct / 100) / (1 + inflation_pct / 100) - 1) * 100
    return round_half_up(real, 1)


def cagr_pct(beginning_value: float, ending_value: float, years: float) -> float:
    """Compound annual growth rate in %, 0 for degenerate inputs"""
    require_finite(beginning_value=beginning_value, ending_value=ending_value, years=years)
    if beginning_value <= 0 or ending_value <= 0 or years <= 0:
        return 0.0
    return ((ending_value / beginning_value) ** (1 / years) - 1) * 100


def validate_assumptions(returns_pct: float, inflation_pct: float) -> dict:
    """Sanity check a returns/inflation pair"""
    real_return = real_return_pct(returns_pct, inflation_pct)

    warning = None
    if real_return < 2:
        warning = "Real return too low for effective goal planning"
    elif real_return > 12:
        warning = "Real return very high - ensure risk tolerance matches"

    if real_return < 4:
        category = "conservative"
    elif real_return < 8:
        category = "moderate"
    else:
        category = "aggressive"

    return {
        "real_return": real_return,
        "is_reasonable": 2 <= real_return <= 12,
        "warning": warning,
        "category": category,
    }
