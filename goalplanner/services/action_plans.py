# goalplanner/services/action_plans.py

from typing import List
from goalplanner.core.config import DEFAULT_AGE
from goalplanner.models.plan import ActionPlan, BalancePlan, FinancialProfile, InvestmentProjection
from goalplanner.utils.currency import format_currency

# (inclusive age upper bound, stage); last entry catches the rest
PLAN_STAGE_BANDS = (
    (28, "early_career"),
    (35, "building"),
    (45, "peak_earning"),
    (55, "pre_retirement"),
    (None, "senior"),
)


def plan_stage(age: int) -> str:
    for limit, stage in PLAN_STAGE_BANDS:
        if limit is None or age <= limit:
            return stage


def _early_career_plans(projection: InvestmentProjection, currency: str) -> List[BalancePlan]:
    plans = []
    if projection.current_monthly_contribution < 5000:
        plans.append(BalancePlan(
            id="start-sip-early",
            title="Start Aggressive SIP Early",
            description=(
                "Leverage your young age with consistent SIP investments. "
                "Time is your biggest advantage for compounding."
            ),
            impact={
                "sip_increase": f"+{format_currency(5000, currency)}/month",
                "timeline_improvement": "-3 years",
                "compounding_benefit": "+40%",
            },
        ))
    if projection.existing_investments < 100000:
        plans.append(BalancePlan(
            id="build-investment-base",
            title="Build Investment Foundation",
            description=(
                "Create a strong investment base now while expenses are lower. "
                "Focus on equity-heavy portfolios."
            ),
            impact={
                "portfolio_growth": f"{format_currency(200000, currency)}-{format_currency(300000, currency)} in 5 years",
                "risk_capacity": "High",
                "goal_acceleration": "+25%",
            },
        ))
    return plans


def _building_plans(projection: InvestmentProjection, currency: str) -> List[BalancePlan]:
    plans = []
    strength = projection.portfolio_strength
    sip = projection.current_monthly_contribution
    if strength < 60:
        plans.append(BalancePlan(
            id="strengthen-portfolio",
            title="Strengthen Investment Portfolio",
            description=(
                "Your current portfolio strength is below optimal. "
                "Increase SIP amounts and diversify investments."
            ),
            impact={
                "portfolio_strength": f"{strength}% → 75%+",
                "monthly_commitment": f"+{format_currency(8000, currency)}",
                "goal_timeline": "-2 years",
            },
        ))
    if sip > 0 and projection.contribution_duration_years >= 2:
        plans.append(BalancePlan(
            id="step-up-sip",
            title="SIP Step-Up Strategy",
            description="Increase your existing SIP by 10-15% annually to match salary growth and beat inflation.",
            impact={
                "current_sip": format_currency(sip, currency),
                "projected_sip": format_currency(sip * 1.5, currency),
                "additional_wealth": format_currency(projection.projected_value * 0.3, currency),
            },
        ))
    return plans


def _peak_earning_plans(projection: InvestmentProjection, currency: str) -> List[BalancePlan]:
    plans = []
    if projection.existing_investments >= 500000:
        plans.append(BalancePlan(
            id="optimize-portfolio",
            title="Peak Years Portfolio Optimization",
            description="Review and optimize your substantial portfolio for tax efficiency and better returns.",
            impact={
                "current_portfolio": format_currency(projection.existing_investments, currency),
                "tax_optimization": f"{format_currency(50000, currency)}-{format_currency(100000, currency)} annually",
                "return_improvement": "+1-2%",
            },
        ))
    if projection.current_monthly_contribution >= 10000:
        plans.append(BalancePlan(
            id="diversify-investments",
            title="Advanced Investment Diversification",
            description="Diversify beyond SIPs into direct equity, real estate, and alternative investments.",
            impact={
                "diversification": "Multi-asset",
                "risk_optimization": "Balanced",
                "wealth_acceleration": "+20%",
            },
            priority=2,
        ))
    return plans


def _pre_retirement_plans(projection: InvestmentProjection, currency: str) -> List[BalancePlan]:
    plans = [BalancePlan(
        id="retirement-corpus-check",
        title="Retirement Corpus Assessment",
        description=(
            "Ensure your investment portfolio can sustain post-retirement lifestyle. "
            "Shift to conservative allocations."
        ),
        impact={
            "current_projection": format_currency(projection.projected_value, currency),
            "sustainability_check": "Complete",
            "allocation_shift": "Conservative",
        },
    )]
    if projection.current_monthly_contribution > 15000:
        plans.append(BalancePlan(
            id="maximize-retirement-savings",
            title="Maximize Pre-Retirement Savings",
            description="Leverage your peak earning years to maximize retirement corpus through increased investments.",
            impact={
                "final_corpus": format_currency(projection.projected_value * 1.3, currency),
                "retirement_ready": "5 years earlier",
                "lifestyle_maintenance": "100%",
            },
        ))
    return plans


def _senior_plans(projection: InvestmentProjection, currency: str) -> List[BalancePlan]:
    plans = [BalancePlan(
        id="preserve-wealth",
        title="Wealth Preservation Focus",
        description="Shift investment strategy to capital preservation and regular income generation.",
        impact={
            "capital_preservation": "95%+",
            "monthly_income": format_currency(projection.projected_value * 0.008, currency),
            "risk_minimization": "Maximum",
        },
    )]
    if projection.existing_investments >= 1000000:
        plans.append(BalancePlan(
            id="legacy-planning",
            title="Legacy and Estate Planning",
            description="Structure your investments for optimal legacy transfer and tax efficiency.",
            impact={
                "estate_planning": "Optimized",
                "tax_efficiency": "Maximum",
                "legacy_value": format_currency(projection.projected_value * 0.9, currency),
            },
            priority=2,
        ))
    return plans


STAGE_PLANS = {
    "early_career": _early_career_plans,
    "building": _building_plans,
    "peak_earning": _peak_earning_plans,
    "pre_retirement": _pre_retirement_plans,
    "senior": _senior_plans,
}


def balance_plans(profile: FinancialProfile, projection: InvestmentProjection) -> List[BalancePlan]:
    """Life-stage specific plans driven by the investment projection."""
    stage = plan_stage(profile.age or DEFAULT_AGE)
    return STAGE_PLANS[stage](projection, profile.currency)


def action_plans(projection: InvestmentProjection) -> List[ActionPlan]:
    """Short, medium and long term checklists, adjusted for portfolio strength."""
    strength = projection.portfolio_strength
    has_sip = projection.current_monthly_contribution > 0

    return [
        ActionPlan(
            term="short_term",
            title="Short Term (0-6 months)",
            actions=[
                "Review and optimize existing investment portfolio allocation",
                "Start or increase SIP amount to build investment discipline" if strength < 40
                else "Continue current SIP strategy and consider step-up SIP",
                "Ensure emergency fund is separate from investment portfolio",
                "Review loan interest rates vs. investment returns for strategy optimization",
                "Monitor SIP performance and consider diversification" if has_sip
                else "Research and select appropriate mutual funds for SIP",
            ],
        ),
        ActionPlan(
            term="medium_term",
            title="Medium Term (6-18 months)",
            actions=[
                "Diversify investments across asset classes and geographies" if strength >= 60
                else "Build investment portfolio to meaningful size (₹5L+ target)",
                "Implement annual SIP increase strategy (10-15% yearly)",
                "Review and rebalance portfolio quarterly for optimal returns",
                "Consider tax-saving investment options (ELSS, PPF)" if projection.existing_investments >= 500000
                else "Focus on growth-oriented equity mutual funds",
                "Track investment performance against benchmarks and adjust strategy",
            ],
        ),
        ActionPlan(
            term="long_term",
            title="Long Term (18+ months)",
            actions=[
                "Achieve target investment portfolio strength of 80+ through consistent investing",
                "Consider alternative investments (REITs, international funds)" if strength >= 80
                else "Build core portfolio to ₹10L+ before exploring alternatives",
                "Plan for retirement corpus adequacy based on current investment trajectory",
                "Review estate planning and tax optimization strategies for large portfolios",
                "Establish legacy and wealth transfer planning if portfolio exceeds ₹50L",
            ],
        ),
    ]
