# goalplanner/services/life_stage.py

import logging
from typing import List, Optional
from goalplanner.core.config import PlannerSettings, get_settings
from goalplanner.models.plan import (
    AllocationSuggestion,
    FinancialProfile,
    InvestmentProjection,
    LifeStageInsight,
    LifeStageInsights,
    LifeStagePhase,
    SustainabilityAssessment,
)
from goalplanner.services.time_value import compound_growth, future_value_of_annuity
from goalplanner.utils.currency import format_currency

logger = logging.getLogger(__name__)


class LifeStageAnalyzer:
    """
    Splits the user's life into a pre-goal and a post-goal phase and checks
    whether the wealth left after paying for the goals can fund the years
    after them.
    """

    PRIORITY_ORDER = {"high": 0, "medium": 1, "low": 2}

    # (upper bound on average phase age, strategy); last entry catches the rest
    STRATEGY_BANDS = (
        (30, "Aggressive Growth"),
        (45, "Balanced Growth"),
        (60, "Conservative Growth"),
        (None, "Capital Preservation"),
    )

    # equity / debt / gold
    PRE_GOAL_ALLOCATION = (
        (35, (70, 20, 10), "Long runway: favour equity for growth"),
        (50, (60, 30, 10), "Mid-career: balance growth with stability"),
        (None, (40, 50, 10), "Closer to goals: protect accumulated capital"),
    )
    POST_GOAL_ALLOCATION = (
        (60, (50, 40, 10), "Goals met early: keep growth alongside income"),
        (None, (30, 60, 10), "Later life: prioritise stable income"),
    )

    def __init__(self, settings: PlannerSettings = None):
        self.settings = settings or get_settings()

    @classmethod
    def strategy_for_age(cls, average_age: float) -> str:
        for limit, label in cls.STRATEGY_BANDS:
            if limit is None or average_age < limit:
                return label

    @staticmethod
    def _pick(table, age: float):
        for limit, split, rationale in table:
            if limit is None or age < limit:
                return split, rationale

    @classmethod
    def _phase(cls, name: str, start_age: int, end_age: int) -> LifeStagePhase:
        average = (start_age + end_age) / 2
        return LifeStagePhase(
            phase=name,
            start_age=start_age,
            end_age=end_age,
            average_age=average,
            strategy=cls.strategy_for_age(average),
        )

    def sustainability(
        self,
        profile: FinancialProfile,
        projection: InvestmentProjection,
        total_goal_cost: float,
    ) -> SustainabilityAssessment:
        s = self.settings
        horizon = profile.horizon_years

        post_goal_monthly = profile.monthly_expenses * s.POST_GOAL_EXPENSE_FACTOR
        required_annual = post_goal_monthly * 12

        # Fixed return for this sub-calculation, independent of the user's assumption
        savings_value = compound_growth(profile.current_savings, s.SUSTAINABILITY_RETURN_PCT, horizon)
        surplus = max(
            0.0,
            profile.monthly_income
            - profile.monthly_expenses
            - profile.existing_monthly_emi
            - profile.current_monthly_contribution,
        )
        surplus_value = future_value_of_annuity(surplus, s.SUSTAINABILITY_RETURN_PCT, horizon * 12)

        corpus = max(0.0, savings_value + surplus_value + projection.projected_value - total_goal_cost)
        sustainable_annual = corpus * s.SAFE_WITHDRAWAL_RATE_PCT / 100

        if required_annual <= 0:
            ratio = 0.0
        elif sustainable_annual <= 0:
            ratio = s.UNREACHABLE_YEARS
        else:
            ratio = required_annual / sustainable_annual * 100

        return SustainabilityAssessment(
            post_goal_monthly_expenses=post_goal_monthly,
            required_annual_income=required_annual,
            projected_savings_value=savings_value,
            projected_surplus_value=surplus_value,
            projected_investment_value=projection.projected_value,
            projected_corpus=corpus,
            sustainable_annual_income=sustainable_annual,
            sustainable=sustainable_annual >= required_annual,
            sustainability_ratio_pct=ratio,
        )

    def _insights(
        self,
        profile: FinancialProfile,
        goal_age: int,
        post_goal_years: int,
        conflict: bool,
        sustainability: SustainabilityAssessment,
    ) -> List[LifeStageInsight]:
        insights = []
        currency = profile.currency

        if conflict:
            insights.append(LifeStageInsight(
                priority="high",
                category="timeline",
                title="Timeline extends beyond life expectancy",
                message=(
                    f"Your goals complete at age {goal_age}, after your expected lifespan of "
                    f"{profile.life_expectancy}. Consider a shorter timeline or smaller goals."
                ),
            ))
        if post_goal_years <= 5:
            insights.append(LifeStageInsight(
                priority="medium",
                category="timeline",
                title="Short post-goal period",
                message=(
                    f"Only {post_goal_years} years remain after reaching your goals at age {goal_age}. "
                    f"Make sure retirement needs are covered alongside these goals."
                ),
            ))
        if post_goal_years >= 30:
            insights.append(LifeStageInsight(
                priority="low",
                category="timeline",
                title="Long life after goals",
                message=(
                    f"You will have about {post_goal_years} years after age {goal_age}. "
                    f"Keep investing for growth after your goals are met."
                ),
            ))

        if not sustainability.sustainable:
            shortfall = sustainability.required_annual_income - sustainability.sustainable_annual_income
            insights.append(LifeStageInsight(
                priority="high",
                category="sustainability",
                title="Post-goal income gap",
                message=(
                    f"Projected wealth after goals supports {format_currency(sustainability.sustainable_annual_income, currency)}"
                    f" a year against {format_currency(sustainability.required_annual_income, currency)} needed, "
                    f"a shortfall of {format_currency(shortfall, currency)} a year."
                ),
            ))
        else:
            insights.append(LifeStageInsight(
                priority="low",
                category="sustainability",
                title="Post-goal lifestyle sustainable",
                message=(
                    f"A {format_currency(sustainability.projected_corpus, currency)} corpus at a "
                    f"{self.settings.SAFE_WITHDRAWAL_RATE_PCT:g}% withdrawal rate covers your post-goal expenses."
                ),
            ))

        if profile.age >= 50:
            insights.append(LifeStageInsight(
                priority="medium",
                category="age",
                title="Protect what you have built",
                message="At this stage capital protection and steady income matter more than chasing returns.",
            ))
        elif profile.age <= 30:
            insights.append(LifeStageInsight(
                priority="low",
                category="age",
                title="Time is on your side",
                message="Starting early lets compounding do most of the work. Stay consistent with your SIPs.",
            ))

        # sorted() is stable, so insertion order holds within a priority
        return sorted(insights, key=lambda i: self.PRIORITY_ORDER[i.priority])

    def allocation(self, age: int, goal_age: int) -> List[AllocationSuggestion]:
        suggestions = []
        for phase, table, key_age in (
            ("pre_goal", self.PRE_GOAL_ALLOCATION, age),
            ("post_goal", self.POST_GOAL_ALLOCATION, goal_age),
        ):
            (equity, debt, gold), rationale = self._pick(table, key_age)
            suggestions.append(AllocationSuggestion(
                phase=phase, equity_pct=equity, debt_pct=debt, gold_pct=gold, rationale=rationale,
            ))
        return suggestions

    def analyze(
        self,
        profile: FinancialProfile,
        projection: InvestmentProjection,
        total_goal_cost: float,
    ) -> Optional[LifeStageInsights]:
        if not profile.has_life_stage_inputs:
            return None

        age = profile.age
        goal_age = age + profile.horizon_years
        post_goal_years = max(0, profile.life_expectancy - goal_age)
        conflict = profile.life_expectancy < goal_age

        sustainability = self.sustainability(profile, projection, total_goal_cost)
        if conflict:
            logger.info(f"Goal age {goal_age} exceeds life expectancy {profile.life_expectancy}")

        return LifeStageInsights(
            age=age,
            goal_achievement_age=goal_age,
            life_expectancy=profile.life_expectancy,
            post_goal_years=post_goal_years,
            timeline_conflict=conflict,
            pre_goal_phase=self._phase("pre_goal", age, goal_age),
            post_goal_phase=self._phase("post_goal", goal_age, max(goal_age, profile.life_expectancy)),
            sustainability=sustainability,
            insights=self._insights(profile, goal_age, post_goal_years, conflict, sustainability),
            allocation=self.allocation(age, goal_age),
        )
