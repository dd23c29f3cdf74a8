# goalplanner/services/work_life_balance.py

import logging
import math
from typing import Tuple
from goalplanner.core.config import DEFAULT_AGE
from goalplanner.models.plan import BalanceAssessment, FinancialProfile

logger = logging.getLogger(__name__)

# (needs_improvement, severity 1-4, status, suggested action)
Reading = Tuple[bool, int, str, str]


class WorkLifeBalanceAnalyzer:
    """
    Reads the user's day-to-day financial pressure for their life stage from
    debt burden, savings rate, emergency cover and investment strength.
    Goals are not considered.
    """

    # (age upper bound, stage); last entry catches the rest
    STAGE_BANDS = (
        (25, "early_career"),
        (35, "building"),
        (50, "peak_earning"),
        (65, "pre_retirement"),
        (None, "senior"),
    )

    @classmethod
    def life_stage(cls, age: int) -> str:
        for limit, stage in cls.STAGE_BANDS:
            if limit is None or age < limit:
                return stage

    @staticmethod
    def debt_burden_pct(profile: FinancialProfile) -> float:
        """Outstanding loans as % of annual income"""
        outstanding = profile.total_debt
        if outstanding <= 0:
            return 0.0
        if profile.monthly_income <= 0:
            return math.inf
        return outstanding / (profile.monthly_income * 12) * 100

    @staticmethod
    def _early_career(debt: float, strength: int, savings_rate: float, emergency: float) -> Reading:
        if debt > 300 or savings_rate < 0 or (emergency < 1 and savings_rate < 10):
            return True, 4, "Financial Crisis - Focus on Basics", "Emergency Plan"
        # A 6+ month buffer offsets a low savings rate
        if debt > 200 or (savings_rate < 5 and emergency < 6) or (emergency < 3 and strength < 40):
            return True, 3, "High Pressure - Build Investment Discipline", "Start SIP Journey"
        if emergency >= 12 and debt <= 100:
            return False, 2, "Strong Emergency Buffer - Focus on Growth", "Start Investing"
        if emergency >= 6 and debt <= 100:
            return False, 1, "Good Emergency Coverage - Build Income", "Increase Earnings"
        if strength >= 60 and savings_rate >= 20 and debt <= 100:
            return False, 3, "Outstanding Early Investment Success", "Accelerate Wealth"
        if strength >= 40 and savings_rate >= 15:
            return False, 2, "Good Investment Foundation Building", "Continue Growing"
        if strength >= 20 or savings_rate >= 10:
            return False, 1, "Investment Journey Started", "Build Consistency"
        return True, 2, "Start Investment Discipline", "Begin SIP Journey"

    @staticmethod
    def _building(debt: float, strength: int, savings_rate: float, emergency: float) -> Reading:
        # A 24+ month buffer overrides a debt crisis
        if (
            (debt > 400 and emergency < 24)
            or (savings_rate < -10 and emergency < 12)
            or (savings_rate < 5 and emergency < 3)
        ):
            return True, 4, "Crisis - Reset Investment Strategy", "Restructure Everything"
        if emergency >= 200 and debt > 200:
            return False, 2, "Massive Emergency Fund - Optimize Debt Strategy", "Refinance & Invest"
        if emergency >= 50 and debt > 200:
            return False, 1, "Very Strong Emergency Fund - Consider Debt Payoff", "Debt Strategy"
        if emergency >= 12 and debt <= 100:
            return False, 2, "Strong Emergency Buffer - Scale Investments", "Boost SIP"
        if emergency >= 6 and debt <= 100:
            return False, 1, "Good Emergency Coverage - Start Investing", "Begin SIP"
        if debt > 250 or (savings_rate < 10 and emergency < 6):
            return True, 3, "High Pressure - Strengthen Investments", "Boost Portfolio"
        if strength >= 80 and savings_rate >= 25 and debt <= 100:
            return False, 3, "Exceptional Building Success", "Maximize Growth"
        if strength >= 60 and savings_rate >= 20:
            return False, 2, "Strong Building Phase", "Maintain Momentum"
        if strength >= 40 or savings_rate >= 15:
            return False, 1, "Steady Building Progress", "Enhance Strategy"
        return True, 2, "Investment Strategy Needs Work", "Strengthen Portfolio"

    @staticmethod
    def _peak_earning(debt: float, strength: int, savings_rate: float, emergency: float) -> Reading:
        if strength >= 80 and savings_rate >= 25 and debt <= 100:
            return False, 3, "Peak Performance Achieved", "Maintain Excellence"
        if strength >= 60 and savings_rate >= 20:
            return False, 2, "Strong Peak Years Progress", "Optimize Further"
        if strength < 60 or savings_rate < 15 or debt > 200:
            return True, 3, "Peak Years Under-Optimized", "Maximize Peak Years"
        return False, 1, "Decent Peak Years Progress", "Fine-tune Balance"

    @staticmethod
    def _pre_retirement(debt: float, strength: int, savings_rate: float, emergency: float) -> Reading:
        if strength >= 80 and debt <= 50:
            return False, 3, "Retirement Ready with Strong Portfolio", "Enjoy Transition"
        if strength >= 60 and debt <= 100:
            return False, 2, "Good Retirement Preparation", "Fine-tune Portfolio"
        if strength < 60 or debt > 100:
            return True, 3, "Retirement Preparation Concerns", "Strengthen Retirement Plan"
        return False, 1, "Preparing for Retirement", "Enhance Readiness"

    @staticmethod
    def _senior(debt: float, strength: int, has_emi: bool) -> Reading:
        if strength >= 70 and debt <= 25 and not has_emi:
            return False, 3, "Peaceful Golden Years with Strong Portfolio", "Enjoy Life"
        if strength < 50 or debt > 25 or has_emi:
            return True, 4, "Golden Years Need Simplification", "Simplify for Peace"
        return False, 2, "Golden Years in Progress", "Optimize for Enjoyment"

    def assess(self, profile: FinancialProfile, investment_strength: int) -> BalanceAssessment:
        stage = self.life_stage(profile.age or DEFAULT_AGE)
        debt = self.debt_burden_pct(profile)
        if profile.monthly_income > 0:
            savings_rate = profile.disposable_income / profile.monthly_income * 100
        else:
            savings_rate = -100.0
        emergency = profile.emergency_months

        if stage == "senior":
            reading = self._senior(debt, investment_strength, profile.existing_monthly_emi > 0)
        else:
            reading = getattr(self, f"_{stage}")(debt, investment_strength, savings_rate, emergency)
        needs_improvement, level, status, action = reading

        logger.debug(f"Work-life balance for {stage}: {status} (debt={debt:.0f}%, savings={savings_rate:.0f}%)")
        return BalanceAssessment(
            life_stage=stage,
            needs_improvement=needs_improvement,
            severity=level if needs_improvement else 0,
            positivity=0 if needs_improvement else level,
            status=status,
            action=action,
            savings_rate_pct=savings_rate,
            emergency_months=emergency,
            investment_strength=investment_strength,
        )
