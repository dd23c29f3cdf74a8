import logging
from types import MappingProxyType
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

# Replacement values for missing or invalid form fields
SMART_DEFAULTS = MappingProxyType({
    "returns": 12.0,
    "inflation": 6.0,
})

# Age assumed by age-keyed advice when none was entered
DEFAULT_AGE = 30


class PlannerSettings(BaseSettings):
    """
    Planner configuration settings (Pydantic v2 style).

    Instances are frozen so two engines built from different settings can
    never see each other's values.
    """

    # Application settings
    APP_NAME: str = "Goal Alignment Planner"
    APP_VERSION: str = "1.0.0"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # Currency settings
    DEFAULT_CURRENCY: str = "INR"

    # Smart defaults applied at the input boundary
    DEFAULT_RETURN_PCT: float = SMART_DEFAULTS["returns"]
    DEFAULT_INFLATION_PCT: float = SMART_DEFAULTS["inflation"]

    # Horizon simulation
    MAX_SIMULATION_MONTHS: int = 600
    UNREACHABLE_YEARS: float = 999.0
    HORIZON_TOLERANCE: float = 0.95

    # Post-goal sustainability
    SUSTAINABILITY_RETURN_PCT: float = 8.0
    SAFE_WITHDRAWAL_RATE_PCT: float = 4.0
    POST_GOAL_EXPENSE_FACTOR: float = 0.7

    # Scenario generation
    PORTFOLIO_OPTIMIZATION_MIN_INVESTMENTS: float = 100000.0
    PORTFOLIO_OPTIMIZATION_RETURN_BOOST_PCT: float = 2.0

    # ✅ Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
        frozen=True,
    )

    @field_validator('LOG_LEVEL')
    @classmethod
    def validate_log_level(cls, v):
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f'LOG_LEVEL must be one of: {valid_levels}')
        return v.upper()

    @field_validator(
        'MAX_SIMULATION_MONTHS',
        'UNREACHABLE_YEARS',
        'SUSTAINABILITY_RETURN_PCT',
        'SAFE_WITHDRAWAL_RATE_PCT',
        'POST_GOAL_EXPENSE_FACTOR',
    )
    @classmethod
    def validate_positive(cls, v):
        if v <= 0:
            raise ValueError('value must be positive')
        return v

    @field_validator('HORIZON_TOLERANCE')
    @classmethod
    def validate_tolerance(cls, v):
        if not 0 < v <= 1:
            raise ValueError('HORIZON_TOLERANCE must be in (0, 1]')
        return v


# Allowed ranges for raw form input, clamped at the boundary
VALIDATION_RANGES = MappingProxyType({
    "age": (1, 150),
    "timeline": (1, 100),
    "lifeExpectancy": (30, 150),
    "income": (0, 100000000),
    "expenses": (0, 100000000),
    "savings": (0, 1000000000),
    "existingEmi": (0, 10000000),
    "returns": (1, 50),
    "inflation": (0, 25),
    "existingInvestments": (0, 10000000000),  # Up to 1000 Cr
    "currentSip": (0, 1000000),               # Up to 10L monthly SIP
    "sipDuration": (0, 50),
})


@lru_cache()
def get_settings() -> PlannerSettings:
    return PlannerSettings()


def configure_logging(settings: PlannerSettings = None) -> None:
    settings = settings or get_settings()
    logging.basicConfig(level=settings.LOG_LEVEL, format=settings.LOG_FORMAT)
