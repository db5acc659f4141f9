# This project was developed with assistance from AI tools.
"""
Application configuration.

All settings read from environment variables with sensible local dev defaults.
The eligibility thresholds are mock business rules, so they live here rather
than as constants in the policy module.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve project root .env regardless of CWD
_PROJECT_ROOT = Path(__file__).resolve().parents[4]
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Application settings -- single source of truth for env-driven config."""

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # -- App --
    APP_NAME: str = "loan-wizard"
    DEBUG: bool = False

    # -- CORS --
    ALLOWED_HOSTS: list[str] = ["http://localhost:5173"]

    # -- Eligibility policy --
    CREDIT_SCORE_MIN: int = Field(
        default=650,
        description="Lower bound (inclusive) of the mock credit score draw.",
    )
    CREDIT_SCORE_MAX: int = Field(
        default=850,
        description="Upper bound (exclusive) of the mock credit score draw.",
    )
    CREDIT_SCORE_THRESHOLD: int = Field(
        default=650,
        description="Scores below this are rejected.",
    )
    ELIGIBLE_INCOME_MONTHS: int = Field(
        default=48,
        description="Eligible amount ceiling expressed in months of income.",
    )
    DEFAULT_MAX_EMI_RATIO: float = Field(
        default=50.0,
        description="EMI / income ceiling (percent) when product ratios are not used.",
    )
    USE_PRODUCT_EMI_RATIO: bool = Field(
        default=True,
        description="Use the loan type's own EMI / income ceiling instead of the default.",
    )
    BASE_RATE_MIN: float = 10.0
    BASE_RATE_MAX: float = 14.0
    SUGGESTED_AMOUNT_FACTOR: float = Field(
        default=0.8,
        description="Share of the eligible amount offered as remediation on rejection.",
    )
    MIN_MONTHLY_INCOME: int = Field(
        default=10_000,
        description="Income floor enforced before underwriting runs.",
    )

    # -- Randomness --
    RANDOM_SEED: int | None = Field(
        default=None,
        description="Seed for the mock random source. Unset means system randomness.",
    )


settings = Settings()
