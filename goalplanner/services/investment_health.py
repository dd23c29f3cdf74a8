# goalplanner/services/investment_health.py

import logging
import math
from typing import List
from goalplanner.models.plan import AssetMix, DebtDecision, InvestmentHealth

logger = logging.getLogger(__name__)

RISK_RETURN_ADJUSTMENT = {
    "conservative": 0.8,
    "moderate": 1.0,
    "aggressive": 1.1,
}


def _income_ratio(value: float, annual_income: float) -> float:
    if annual_income > 0:
        return value / annual_income
    return math.inf if value > 0 else 0.0


def optimal_allocation(age: int, risk_tolerance: str = "moderate") -> AssetMix:
    """Age-based equity/debt/gold split; unknown tolerances are treated as moderate."""
    base_equity = max(20, min(80, 100 - age))

    if risk_tolerance == "conservative":
        return AssetMix(
            equity_pct=max(20, base_equity - 20),
            debt_pct=min(70, 80 - base_equity + 20),
            gold_pct=10,
        )
    if risk_tolerance == "aggressive":
        return AssetMix(
            equity_pct=min(90, base_equity + 20),
            debt_pct=max(5, 90 - base_equity - 20),
            gold_pct=5,
        )
    return AssetMix(equity_pct=base_equity, debt_pct=max(15, 90 - base_equity), gold_pct=10)


def investment_vs_debt_decision(
    loan_rate_pct: float, expected_return_pct: float, risk_tolerance: str = "moderate"
) -> DebtDecision:
    risk_adjusted = expected_return_pct * RISK_RETURN_ADJUSTMENT.get(risk_tolerance, 1.0)
    difference = abs(loan_rate_pct - risk_adjusted)
    return DebtDecision(
        recommendation="prepay_debt" if loan_rate_pct > risk_adjusted else "invest",
        rate_difference_pct=difference,
        confidence="high" if difference > 2 else "moderate",
    )


def investment_recommendations(score: int, age: int) -> List[str]:
    if score < 40:
        recommendations = [
            "Start with small, consistent SIP of ₹1,000-3,000",
            "Build emergency fund before large investments",
            "Focus on low-cost index funds for simplicity",
        ]
    elif score < 60:
        recommendations = [
            "Increase SIP amount to ₹5,000-10,000 monthly",
            "Consider step-up SIP with annual increases",
            "Diversify across large-cap and mid-cap funds",
        ]
    elif score < 80:
        recommendations = [
            "Scale SIP to ₹15,000+ with diversification",
            "Add international equity exposure",
            "Consider tax-saving investments (ELSS)",
        ]
    else:
        recommendations = [
            "Optimize portfolio with alternative investments",
            "Focus on tax efficiency and estate planning",
            "Consider direct equity for better returns",
        ]

    if age < 30:
        recommendations.append("Maximize equity allocation (80%+) due to young age")
    elif age < 45:
        recommendations.append("Maintain balanced equity-debt allocation")
    else:
        recommendations.append("Gradually shift to conservative allocation")
    return recommendations


def diversification_score(portfolio_size: float, monthly_sip: float, age: int) -> int:
    score = 0

    # Portfolio size
    if portfolio_size >= 1000000:
        score += 40
    elif portfolio_size >= 500000:
        score += 30
    elif portfolio_size >= 100000:
        score += 20
    elif portfolio_size > 0:
        score += 10

    # SIP consistency
    if monthly_sip >= 20000:
        score += 30
    elif monthly_sip >= 10000:
        score += 20
    elif monthly_sip >= 5000:
        score += 15
    elif monthly_sip > 0:
        score += 10

    # Younger investors can carry more risk
    if age < 35:
        score += 20
    elif age < 50:
        score += 15
    elif age < 65:
        score += 10
    else:
        score += 5

    # Balanced growth: a year of SIPs is 10-50% of the portfolio
    annual_sip = monthly_sip * 12
    if portfolio_size > 0 and annual_sip > 0 and 0.1 <= annual_sip / portfolio_size <= 0.5:
        score += 10

    return min(100, score)


def assess_investment_health(
    existing_investments: float,
    monthly_sip: float,
    sip_duration_years: float,
    age: int,
    monthly_income: float,
) -> InvestmentHealth:
    """
    Score (0-100) how well the investment base, SIP size and SIP track record
    fit the user's income, with one line of feedback per part and
    score-banded next steps.
    """
    annual_income = monthly_income * 12
    investment_ratio = _income_ratio(existing_investments, annual_income)
    sip_ratio = _income_ratio(monthly_sip * 12, annual_income)

    score = 0
    feedback = []

    # Investment base (0-40)
    if investment_ratio >= 2:
        score += 40
        feedback.append("Excellent investment base relative to income")
    elif investment_ratio >= 1:
        score += 30
        feedback.append("Good investment base")
    elif investment_ratio >= 0.5:
        score += 20
        feedback.append("Moderate investment base - room for growth")
    elif existing_investments > 0:
        score += 10
        feedback.append("Investment journey started - focus on growth")
    else:
        feedback.append("No existing investment base - start building immediately")

    # SIP size (0-35)
    if sip_ratio >= 0.3:
        score += 35
        feedback.append("Outstanding SIP commitment")
    elif sip_ratio >= 0.2:
        score += 25
        feedback.append("Good SIP discipline")
    elif sip_ratio >= 0.1:
        score += 15
        feedback.append("Moderate SIP - consider increasing")
    elif monthly_sip > 0:
        score += 10
        feedback.append("SIP started - build consistency")
    else:
        feedback.append("No SIP - start systematic investing")

    # SIP track record (0-25)
    if sip_duration_years >= 5:
        score += 25
        feedback.append("Excellent investment discipline")
    elif sip_duration_years >= 3:
        score += 20
        feedback.append("Good investment consistency")
    elif sip_duration_years >= 1:
        score += 15
        feedback.append("Building investment habit")
    elif sip_duration_years > 0:
        score += 10
        feedback.append("Recently started investing")

    logger.debug(f"Investment health score={score} (investment/income={investment_ratio:.2f}, sip/income={sip_ratio:.2f})")
    return InvestmentHealth(
        score=min(100, score),
        feedback=feedback,
        recommendations=investment_recommendations(score, age),
        diversification_score=diversification_score(existing_investments, monthly_sip, age),
    )
