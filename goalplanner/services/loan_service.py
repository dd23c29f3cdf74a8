# goalplanner/services/loan_service.py

import logging
import math
from typing import Iterable, Optional
import numpy_financial as npf
from goalplanner.models.plan import LoanPortfolio, LoanRecord, LoanSummary
from goalplanner.services.time_value import monthly_rate
from goalplanner.utils.utils import round_half_up

logger = logging.getLogger(__name__)

# EMIs within this many currency units of the standard EMI count as standard
EMI_MATCH_TOLERANCE = 10


def _cents(value: float) -> float:
    return round_half_up(value, 2)


def standard_emi(principal: float, rate_pct: float, months: float) -> float:
    """Level monthly payment that amortises the principal over the tenure"""
    if months <= 0:
        return 0.0
    if rate_pct == 0:
        return principal / months
    return float(-npf.pmt(monthly_rate(rate_pct), months, principal))


def months_to_repay(principal: float, rate_pct: float, emi: float) -> Optional[int]:
    """Months needed at a given EMI, or None when the EMI is zero"""
    if emi <= 0:
        return None
    r = monthly_rate(rate_pct)
    if r > 0 and emi > principal * r:
        return int(math.ceil(float(npf.nper(r, -emi, principal))))
    # EMI never outruns interest: rough principal-only estimate
    return int(math.ceil(principal / emi))


def loan_summary(loan: LoanRecord) -> LoanSummary:
    months = loan.total_months
    calculated = standard_emi(loan.principal, loan.rate_pct, months)
    total_amount = calculated * months
    total_interest = total_amount - loan.principal

    emi_months = None
    savings = 0.0
    completion = "standard"

    if loan.emi > 0 and abs(loan.emi - calculated) > EMI_MATCH_TOLERANCE and loan.rate_pct > 0:
        emi_months = months_to_repay(loan.principal, loan.rate_pct, loan.emi)
        savings = total_interest - (loan.emi * emi_months - loan.principal)
        if loan.emi <= loan.principal * monthly_rate(loan.rate_pct) or loan.emi < calculated:
            completion = "delayed"
        elif loan.emi > calculated:
            completion = "early"
    elif loan.emi > 0:
        emi_months = int(months)

    return LoanSummary(
        user_emi=loan.emi,
        calculated_emi=_cents(calculated),
        total_amount=_cents(total_amount),
        total_interest=_cents(total_interest),
        total_months=months,
        emi_based_months=emi_months,
        completion_savings=_cents(savings),
        completion_type=completion,
        show_emi_scenario=emi_months is not None and loan.emi > 0,
    )


def aggregate_loans(loans: Iterable[LoanRecord]) -> Optional[LoanPortfolio]:
    """
    Roll individual loans into a LoanPortfolio. Loans without principal, rate
    or tenure are skipped. Returns None when no loan is valid.
    """
    outstanding = 0.0
    rate_weight = 0.0
    implied_interest = 0.0
    total_emi = 0.0
    interest_burden = 0.0
    max_tenure = 0.0
    count = 0

    for loan in loans:
        if not loan.is_valid:
            logger.debug(f"Skipping incomplete loan record: {loan}")
            continue
        calculated = standard_emi(loan.principal, loan.rate_pct, loan.total_months)
        outstanding += loan.principal
        rate_weight += loan.rate_pct * loan.principal
        implied_interest += loan.principal * loan.rate_pct / 100
        total_emi += calculated
        interest_burden += calculated * loan.total_months - loan.principal
        max_tenure = max(max_tenure, loan.total_months / 12)
        count += 1

    if count == 0:
        return None

    portfolio = LoanPortfolio(
        total_outstanding=outstanding,
        weighted_average_rate_pct=rate_weight / outstanding,
        loan_count=count,
        implied_annual_interest=implied_interest,
        total_calculated_emi=total_emi,
        total_interest_burden=interest_burden,
        max_tenure_years=max_tenure,
    )
    logger.info(f"✅ Aggregated {count} loans, outstanding {outstanding:,.0f}")
    return portfolio
