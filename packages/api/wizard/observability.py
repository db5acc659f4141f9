# This project was developed with assistance from AI tools.
"""Startup logging of the active eligibility policy."""

import logging

logger = logging.getLogger(__name__)


def log_policy_status() -> None:
    """Log the eligibility thresholds and randomness mode. Call at startup."""
    from .core.config import settings

    ratio = "per-product" if settings.USE_PRODUCT_EMI_RATIO else f"{settings.DEFAULT_MAX_EMI_RATIO:g}%"
    logger.warning(
        "Eligibility policy: score>=%d, ceiling=%dx income, EMI ratio=%s, income floor=%d",
        settings.CREDIT_SCORE_THRESHOLD,
        settings.ELIGIBLE_INCOME_MONTHS,
        ratio,
        settings.MIN_MONTHLY_INCOME,
    )
    if settings.RANDOM_SEED is not None:
        logger.warning("Mock random source: SEEDED (seed=%d)", settings.RANDOM_SEED)
    else:
        logger.warning("Mock random source: UNSEEDED (system randomness)")
