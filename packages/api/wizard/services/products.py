# This project was developed with assistance from AI tools.
"""Loan product catalog.

Centralizes the per-product parameters so that the public routes, the
application orchestrator and the eligibility policy all read the same
table.
"""

from lending import LoanType, LoanTypeConfig


class LoanTypeNotFoundError(LookupError):
    """Raised when a loan type identifier is not in the catalog."""


LOAN_TYPES: dict[LoanType, LoanTypeConfig] = {
    LoanType.PERSONAL: LoanTypeConfig(
        id=LoanType.PERSONAL,
        name="Personal Loan",
        interest_rate=12.0,
        min_amount=50_000,
        max_amount=5_000_000,
        max_tenure=60,
        min_monthly_income=15_000,
        max_emi_ratio=50.0,
        processing_fee=2.0,
    ),
    LoanType.HOME: LoanTypeConfig(
        id=LoanType.HOME,
        name="Home Loan",
        interest_rate=8.5,
        min_amount=500_000,
        max_amount=50_000_000,
        max_tenure=240,
        min_monthly_income=25_000,
        max_emi_ratio=60.0,
        processing_fee=0.5,
    ),
    LoanType.CAR: LoanTypeConfig(
        id=LoanType.CAR,
        name="Car Loan",
        interest_rate=9.5,
        min_amount=100_000,
        max_amount=5_000_000,
        max_tenure=84,
        min_monthly_income=20_000,
        max_emi_ratio=50.0,
        processing_fee=1.0,
    ),
    LoanType.EDUCATION: LoanTypeConfig(
        id=LoanType.EDUCATION,
        name="Education Loan",
        interest_rate=10.0,
        min_amount=50_000,
        max_amount=7_500_000,
        max_tenure=120,
        min_monthly_income=10_000,
        max_emi_ratio=40.0,
        processing_fee=0.0,
    ),
    LoanType.BUSINESS: LoanTypeConfig(
        id=LoanType.BUSINESS,
        name="Business Loan",
        interest_rate=14.0,
        min_amount=100_000,
        max_amount=10_000_000,
        max_tenure=84,
        min_monthly_income=30_000,
        max_emi_ratio=55.0,
        processing_fee=2.5,
    ),
}

MIN_TENURE = 12


def get_loan_type(type_id: LoanType | str) -> LoanTypeConfig:
    """Look up a product by identifier.

    Raises:
        LoanTypeNotFoundError: if the identifier is not a known loan type.
    """
    try:
        key = LoanType(type_id)
    except ValueError:
        valid = ", ".join(lt.value for lt in LoanType)
        raise LoanTypeNotFoundError(f"Unknown loan type '{type_id}'. Valid: {valid}") from None
    config = LOAN_TYPES.get(key)
    if config is None:
        raise LoanTypeNotFoundError(f"Loan type '{key.value}' is not configured")
    return config


def list_loan_types() -> list[LoanTypeConfig]:
    return list(LOAN_TYPES.values())


def clamp_amount(amount: int, config: LoanTypeConfig) -> int:
    return min(max(amount, config.min_amount), config.max_amount)


def clamp_tenure(tenure: int, config: LoanTypeConfig) -> int:
    return min(max(tenure, MIN_TENURE), config.max_tenure)
