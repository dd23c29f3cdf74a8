from pydantic import BaseModel, ConfigDict, Field
from typing import List, Dict, Optional, Literal
from goalplanner.utils.utils import safe_ratio_pct


class GoalEntry(BaseModel):
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    enabled: bool = False
    amount: float = Field(0, description="Target amount in today's currency units")


class LoanRecord(BaseModel):
    """A single loan as entered by the user"""
    model_config = ConfigDict(allow_inf_nan=False)

    principal: float = Field(0, ge=0, description="Outstanding principal")
    rate_pct: float = Field(0, ge=0, description="Annual interest rate in %")
    tenure_years: float = Field(0, ge=0)
    tenure_months: float = Field(0, ge=0)
    emi: float = Field(0, ge=0, description="EMI actually being paid (0 if unknown)")

    @property
    def total_months(self) -> float:
        return self.tenure_years * 12 + self.tenure_months

    @property
    def is_valid(self) -> bool:
        return self.principal > 0 and self.rate_pct > 0 and self.total_months > 0


class LoanSummary(BaseModel):
    """Amortisation summary for one loan"""
    user_emi: float
    calculated_emi: float
    total_amount: float
    total_interest: float
    total_months: float
    emi_based_months: Optional[int] = None
    completion_savings: float = 0
    completion_type: Literal["early", "delayed", "standard"] = "standard"
    show_emi_scenario: bool = False


class LoanPortfolio(BaseModel):
    """Aggregate view over all valid loans"""
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    total_outstanding: float = Field(0, ge=0)
    weighted_average_rate_pct: float = Field(0, ge=0)
    loan_count: int = Field(0, ge=0)
    implied_annual_interest: float = Field(0, ge=0)
    total_calculated_emi: float = Field(0, ge=0)
    total_interest_burden: float = 0
    max_tenure_years: float = Field(0, ge=0)


class FinancialProfile(BaseModel):
    """Input snapshot for one calculation run"""
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    # Timeline
    age: int = Field(0, ge=0, le=150, description="Current age")
    horizon_years: int = Field(0, ge=0, le=100, description="Years within which goals are targeted")
    life_expectancy: int = Field(0, ge=0, le=150)

    # Monthly cash flow
    monthly_income: float = Field(0, ge=0)
    monthly_expenses: float = Field(0, ge=0)
    current_savings: float = Field(0, ge=0, description="Liquid savings lump sum")
    existing_monthly_emi: float = Field(0, ge=0, description="Monthly debt service")

    # Assumptions
    expected_annual_return_pct: float = Field(12.0, ge=0, le=100)
    expected_annual_inflation_pct: float = Field(6.0, ge=0, le=100)

    # Existing investments
    existing_investments_value: float = Field(0, ge=0)
    current_monthly_contribution: float = Field(0, ge=0, description="Running monthly SIP")
    contribution_duration_years: float = Field(0, ge=0, description="How long the SIP has been running")

    goals: Dict[str, GoalEntry] = Field(default_factory=dict)
    loan_portfolio: Optional[LoanPortfolio] = None
    currency: str = "INR"

    @property
    def disposable_income(self) -> float:
        return self.monthly_income - self.monthly_expenses - self.existing_monthly_emi

    @property
    def expense_ratio_pct(self) -> float:
        return safe_ratio_pct(self.monthly_expenses, self.monthly_income)

    @property
    def emi_ratio_pct(self) -> float:
        return safe_ratio_pct(self.existing_monthly_emi, self.monthly_income)

    @property
    def emergency_months(self) -> float:
        """Months of expenses covered by savings"""
        if self.monthly_expenses <= 0:
            return 0.0
        return self.current_savings / self.monthly_expenses

    @property
    def total_debt(self) -> float:
        if self.loan_portfolio is None:
            return 0.0
        return self.loan_portfolio.total_outstanding

    @property
    def has_life_stage_inputs(self) -> bool:
        return self.age > 0 and self.horizon_years > 0 and self.life_expectancy > self.age


class InvestmentProjection(BaseModel):
    existing_investments: float
    current_monthly_contribution: float
    contribution_duration_years: float
    projected_existing_value: float
    contributions_to_date_value: float
    continuing_contribution_value: float
    projected_contribution_value: float
    projected_value: float
    remaining_contribution_months: float
    portfolio_strength: int = Field(..., ge=0, le=100)


class LifeStagePhase(BaseModel):
    phase: Literal["pre_goal", "post_goal"]
    start_age: int
    end_age: int
    average_age: float
    strategy: str


class SustainabilityAssessment(BaseModel):
    post_goal_monthly_expenses: float
    required_annual_income: float
    projected_savings_value: float
    projected_surplus_value: float
    projected_investment_value: float
    projected_corpus: float
    sustainable_annual_income: float
    sustainable: bool
    sustainability_ratio_pct: float


class LifeStageInsight(BaseModel):
    priority: Literal["high", "medium", "low"]
    category: str
    title: str
    message: str


class AllocationSuggestion(BaseModel):
    phase: Literal["pre_goal", "post_goal"]
    equity_pct: int
    debt_pct: int
    gold_pct: int
    rationale: str


class LifeStageInsights(BaseModel):
    age: int
    goal_achievement_age: int
    life_expectancy: int
    post_goal_years: int
    timeline_conflict: bool
    pre_goal_phase: LifeStagePhase
    post_goal_phase: LifeStagePhase
    sustainability: SustainabilityAssessment
    insights: List[LifeStageInsight] = Field(default_factory=list)
    allocation: List[AllocationSuggestion] = Field(default_factory=list)


class Scenario(BaseModel):
    kind: Literal[
        "enhanced_sip", "aggressive", "extended_timeline", "conservative",
        "portfolio_optimization", "current_plan", "improved_plan",
    ]
    tone: Literal["success", "info", "warning"]
    title: str
    description: str
    monthly_contribution: float
    time_required_years: float


class PlanInsight(BaseModel):
    type: Literal["success", "info", "warning", "danger"]
    title: str
    message: str


class BalanceAssessment(BaseModel):
    """Work-life balance reading for the user's life stage (goals are not considered)"""
    life_stage: Literal["early_career", "building", "peak_earning", "pre_retirement", "senior"]
    needs_improvement: bool
    severity: int = Field(..., ge=0, le=4, description="How bad, when improvement is needed")
    positivity: int = Field(..., ge=0, le=4, description="How good, when it is not")
    status: str
    action: str
    savings_rate_pct: float
    emergency_months: float
    investment_strength: int = Field(..., ge=0, le=100)

    @property
    def meter_position(self) -> float:
        """0-100 gauge position, 50 is neutral"""
        if self.needs_improvement:
            return max(0.0, 50 - self.severity * 12.5)
        return min(100.0, 50 + self.positivity * 12.5)


class BalancePlan(BaseModel):
    id: str
    title: str
    description: str
    impact: Dict[str, str] = Field(default_factory=dict)
    priority: int = Field(1, ge=1)


class ActionPlan(BaseModel):
    term: Literal["short_term", "medium_term", "long_term"]
    title: str
    actions: List[str]


class AssetMix(BaseModel):
    equity_pct: float
    debt_pct: float
    gold_pct: float


class DebtDecision(BaseModel):
    recommendation: Literal["prepay_debt", "invest"]
    rate_difference_pct: float
    confidence: Literal["high", "moderate"]


class InvestmentHealth(BaseModel):
    score: int = Field(..., ge=0, le=100)
    feedback: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    diversification_score: int = Field(0, ge=0, le=100)


class CalculationResult(BaseModel):
    total_goal_cost: float
    required_monthly_contribution: float
    total_monthly_contribution: float
    time_required_years: float
    goal_achievable: bool
    savings_rate_pct: float
    expense_ratio_pct: float
    disposable_income: float
    emergency_months: float
    emi_ratio_pct: float
    real_return_pct: float
    balance_score: int = Field(..., ge=0, le=100)
    financial_health_score: int = Field(..., ge=0, le=100)
    balance_breakdown: Dict[str, float] = Field(default_factory=dict)
    health_breakdown: Dict[str, float] = Field(default_factory=dict)
    investment_projection: InvestmentProjection
    investment_gap: float
    sip_efficiency_pct: float = 0

    # Present only when age, horizon and life expectancy are all usable
    life_stage_insights: Optional[LifeStageInsights] = None

    scenarios: List[Scenario] = Field(default_factory=list)
    insights: List[PlanInsight] = Field(default_factory=list)
    flags: List[str] = Field(default_factory=list)

    # Investment-aware advice that does not depend on the goals
    balance_assessment: Optional[BalanceAssessment] = None
    investment_health: Optional[InvestmentHealth] = None
    debt_insights: List[PlanInsight] = Field(default_factory=list)
    debt_strategies: List[PlanInsight] = Field(default_factory=list)
    balance_plans: List[BalancePlan] = Field(default_factory=list)
    action_plans: List[ActionPlan] = Field(default_factory=list)
