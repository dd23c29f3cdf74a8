# goalplanner/services/insight_service.py

import math
from typing import List, Optional
from goalplanner.models.plan import FinancialProfile, InvestmentProjection, PlanInsight
from goalplanner.services.investment_health import investment_vs_debt_decision
from goalplanner.services.work_life_balance import WorkLifeBalanceAnalyzer
from goalplanner.utils.currency import format_currency, format_percentage, format_years
from goalplanner.utils.utils import round_half_up

HIGH_EMI_RATIO_PCT = 30
STRONG_SIP_EFFICIENCY_PCT = 15
HIGH_DEBT_BURDEN_PCT = 200
EXTREME_DEBT_BURDEN_PCT = 300
EMERGENCY_TARGET_MONTHS = 6
PREPAYMENT_MIN_INVESTMENTS = 100000
PREPAYMENT_MIN_AMOUNT = 50000


def investment_insights(
    profile: FinancialProfile,
    projection: InvestmentProjection,
    investment_gap: float,
    sip_efficiency_pct: float,
) -> List[PlanInsight]:
    insights = []
    currency = profile.currency
    strength = projection.portfolio_strength

    if strength >= 80:
        insights.append(PlanInsight(
            type="success",
            title="Excellent Investment Foundation",
            message=(
                f"Your investment portfolio shows exceptional strength ({strength}/100). With "
                f"{format_currency(projection.existing_investments, currency)} existing investments and "
                f"{format_currency(projection.current_monthly_contribution, currency)}/month SIP for "
                f"{projection.contribution_duration_years:g} years, you're projected to have "
                f"{format_currency(projection.projected_value, currency)} by timeline end."
            ),
        ))
    elif strength >= 60:
        insights.append(PlanInsight(
            type="success",
            title="Strong Investment Progress",
            message=(
                f"Your investment discipline is paying off ({strength}/100 strength). Current trajectory "
                f"projects {format_currency(projection.projected_value, currency)} by timeline end."
            ),
        ))
    elif strength >= 40:
        insights.append(PlanInsight(
            type="info",
            title="Investment Portfolio Developing",
            message=(
                f"Your investment foundation is developing ({strength}/100). Your "
                f"{format_currency(projection.current_monthly_contribution, currency)}/month SIP can grow "
                f"significantly with consistent effort."
            ),
        ))
    elif strength > 0:
        insights.append(PlanInsight(
            type="warning",
            title="Investment Portfolio Needs Attention",
            message=(
                f"With only {format_currency(projection.existing_investments, currency)} invested and minimal SIP "
                f"history, focus on building consistency and increasing investment amounts."
            ),
        ))

    if (
        projection.current_monthly_contribution > 0
        and projection.contribution_duration_years >= 1
        and sip_efficiency_pct >= STRONG_SIP_EFFICIENCY_PCT
    ):
        insights.append(PlanInsight(
            type="success",
            title="SIP Strategy Performing Well",
            message=(
                f"Your SIP is generating {format_percentage(sip_efficiency_pct)} projected returns over "
                f"{projection.contribution_duration_years:g} years."
            ),
        ))

    if investment_gap > 0 and profile.horizon_years > 0:
        monthly_gap = round_half_up(investment_gap / profile.horizon_years / 12)
        insights.append(PlanInsight(
            type="info",
            title="Investment Gap Identified",
            message=(
                f"After considering your existing investments ({format_currency(projection.projected_value, currency)}"
                f" projected), you still need {format_currency(investment_gap, currency)} more. Consider increasing "
                f"monthly investments by {format_currency(monthly_gap, currency)} to bridge this gap."
            ),
        ))
    return insights


def generate_insights(
    profile: FinancialProfile,
    projection: InvestmentProjection,
    total_goal_cost: float,
    time_required_years: float,
    investment_gap: float,
    sip_efficiency_pct: float,
    unreachable_years: float = 999.0,
) -> List[PlanInsight]:
    """
    Narrative insights for a completed calculation. Empty until income,
    expenses and at least one active goal are present.
    """
    if profile.monthly_income <= 0 or profile.monthly_expenses <= 0 or total_goal_cost <= 0:
        return []

    currency = profile.currency
    insights = []

    if projection.existing_investments > 0 or projection.current_monthly_contribution > 0:
        insights.extend(investment_insights(profile, projection, investment_gap, sip_efficiency_pct))

    horizon = profile.horizon_years
    if 0 < time_required_years < unreachable_years and horizon > 0:
        if time_required_years <= horizon:
            insights.append(PlanInsight(
                type="success",
                title="Goals are achievable",
                message=(
                    f"Your current plan reaches your goals in {format_years(time_required_years)}, "
                    f"within your {horizon}-year timeline."
                ),
            ))
        else:
            insights.append(PlanInsight(
                type="warning",
                title="Investment strategy needs enhancement",
                message=(
                    f"Even with your existing investments, you'll need {format_years(time_required_years)} to reach "
                    f"goals. Consider increasing your SIP from "
                    f"{format_currency(projection.current_monthly_contribution, currency)}."
                ),
            ))
    elif time_required_years >= unreachable_years:
        insights.append(PlanInsight(
            type="danger",
            title="Goals not reachable",
            message="At the current contribution rate the goals are not reachable within any reasonable timeframe.",
        ))

    if profile.existing_monthly_emi > 0 and profile.emi_ratio_pct > HIGH_EMI_RATIO_PCT:
        insights.append(PlanInsight(
            type="danger",
            title="EMI burden limiting investment growth",
            message=(
                f"Your EMIs ({format_percentage(profile.emi_ratio_pct)} of income) severely limit investment "
                f"capacity. Focus on debt reduction to unlock more investment potential."
            ),
        ))
    return insights


def debt_insights(profile: FinancialProfile, investment_strength: int) -> List[PlanInsight]:
    """Net worth, debt burden and emergency cover read against the investment portfolio."""
    currency = profile.currency
    outstanding = profile.total_debt
    existing = profile.existing_investments_value
    insights = []

    if outstanding > 0:
        net_worth = existing - outstanding
        if net_worth > 0 and investment_strength >= 60:
            insights.append(PlanInsight(
                type="success",
                title="Positive Net Worth Despite Debt",
                message=(
                    f"Your investments ({format_currency(existing, currency)}) exceed debt burden "
                    f"({format_currency(outstanding, currency)}), creating positive net worth of "
                    f"{format_currency(net_worth, currency)}. With {investment_strength}/100 investment strength, "
                    f"you're managing debt while building wealth effectively."
                ),
            ))
        elif net_worth < 0:
            insights.append(PlanInsight(
                type="warning",
                title="Negative Net Worth Situation",
                message=(
                    f"Your debt ({format_currency(outstanding, currency)}) exceeds investments "
                    f"({format_currency(existing, currency)}) by {format_currency(-net_worth, currency)}. "
                    f"Focus on aggressive debt reduction while maintaining minimal investment discipline."
                ),
            ))

        burden = WorkLifeBalanceAnalyzer.debt_burden_pct(profile)
        if burden > EXTREME_DEBT_BURDEN_PCT:
            burden_text = f"{burden:.0f}% of annual income" if math.isfinite(burden) else "with no income"
            insights.append(PlanInsight(
                type="danger",
                title="Extreme Debt Blocking Investment Growth",
                message=(
                    f"Your debt burden ({burden_text}) severely limits investment capacity. Even with "
                    f"{format_currency(existing, currency)} existing investments, focus on debt elimination before "
                    f"pursuing new investments. Interest burden: "
                    f"{format_currency(profile.loan_portfolio.total_interest_burden, currency)}."
                ),
            ))
        elif burden > HIGH_DEBT_BURDEN_PCT:
            sip = profile.current_monthly_contribution
            sip_text = f"{format_currency(sip, currency)}/month SIP" if sip > 0 else "no active SIP"
            insights.append(PlanInsight(
                type="warning",
                title="High Debt Limiting Investment Potential",
                message=(
                    f"Debt burden ({burden:.0f}% of income) significantly impacts investment growth. Current "
                    f"investments: {format_currency(existing, currency)} with {sip_text}. Balance modest investment "
                    f"continuation with aggressive reduction of high-rate loans."
                ),
            ))

    emergency = emergency_fund_insight(profile, investment_strength)
    if emergency is not None:
        insights.append(emergency)
    return insights


def emergency_fund_insight(profile: FinancialProfile, investment_strength: int) -> Optional[PlanInsight]:
    expenses = profile.monthly_expenses
    if expenses <= 0:
        return None

    currency = profile.currency
    savings = profile.current_savings
    existing = profile.existing_investments_value
    months = profile.emergency_months
    liquid_wealth = savings + existing
    liquid_months = liquid_wealth / expenses
    target_gap = max(0.0, expenses * EMERGENCY_TARGET_MONTHS - savings)

    if months < 3 and liquid_months >= EMERGENCY_TARGET_MONTHS:
        return PlanInsight(
            type="info",
            title="Emergency Coverage via Investments",
            message=(
                f"While your emergency fund covers only {months:.1f} months, your total liquid wealth "
                f"({format_currency(liquid_wealth, currency)}) provides {liquid_months:.1f} months coverage. "
                f"Keep 3-6 months in cash for immediate access."
            ),
        )
    if months < 3:
        debt_note = " This gap is critical given your debt obligations." if profile.total_debt > 0 else ""
        return PlanInsight(
            type="danger",
            title="Critical Emergency Gap Despite Investments",
            message=(
                f"Your emergency fund covers only {months:.1f} months vs. recommended {EMERGENCY_TARGET_MONTHS}. "
                f"Maintain liquid emergency funds separate from investments. "
                f"Gap: {format_currency(target_gap, currency)}.{debt_note}"
            ),
        )
    if months < EMERGENCY_TARGET_MONTHS and investment_strength >= 60:
        return PlanInsight(
            type="info",
            title="Emergency Fund Adequate with Investment Backup",
            message=(
                f"Your {months:.1f} months emergency fund, combined with a strong portfolio "
                f"({investment_strength}/100 strength), provides good financial security. Total accessible wealth: "
                f"{format_currency(liquid_wealth, currency)}. Complete the {EMERGENCY_TARGET_MONTHS}-month target with "
                f"another {format_currency(target_gap, currency)}."
            ),
        )
    return None


def debt_strategies(profile: FinancialProfile) -> List[PlanInsight]:
    """Invest-or-prepay guidance for users carrying loans."""
    portfolio = profile.loan_portfolio
    if portfolio is None or portfolio.total_outstanding <= 0:
        return []

    currency = profile.currency
    existing = profile.existing_investments_value
    returns = profile.expected_annual_return_pct
    loan_rate = portfolio.weighted_average_rate_pct
    strategies = []

    if existing > 0 and loan_rate > 0:
        decision = investment_vs_debt_decision(loan_rate, returns)
        prepay = decision.recommendation == "prepay_debt"
        strategies.append(PlanInsight(
            type="warning" if prepay else "success",
            title="Investment vs. Debt Strategy",
            message=(
                f"Your loan rate ({loan_rate:.1f}%) vs. expected investment returns ({returns:g}%) suggests "
                f"focusing on {'debt reduction' if prepay else 'investment growth'}. With "
                f"{format_currency(existing, currency)} existing investments, "
                + ("prioritize debt prepayment over new investments."
                   if prepay else "continue investments while making regular EMI payments.")
            ),
        ))

    if existing > PREPAYMENT_MIN_INVESTMENTS:
        prepayment = min(existing * 0.2, portfolio.total_outstanding * 0.25)
        if prepayment > PREPAYMENT_MIN_AMOUNT:
            strategies.append(PlanInsight(
                type="info",
                title="Strategic Debt Prepayment from Investments",
                message=(
                    f"Consider using {format_currency(prepayment, currency)} of your investments for loan prepayment. "
                    f"This reduces debt burden while keeping a {format_currency(existing - prepayment, currency)} "
                    f"investment base. Weigh potential returns of {returns:g}% against the guaranteed "
                    f"{loan_rate:.1f}% saved on loan interest."
                ),
            ))
    return strategies
