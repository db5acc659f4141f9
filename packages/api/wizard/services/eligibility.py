# This project was developed with assistance from AI tools.
"""Eligibility policy for the underwriting stage.

Evaluates a loan request against the mock credit score, an income-based
ceiling and the EMI / income ratio, and synthesizes alternative offers for
approved requests. Pure apart from the injected random source: the caller
decides when to run it and where to keep the outcome.
"""

import logging
import math

from lending import LoanPlan, LoanRequest, UnderwritingDecision, UnderwritingOutcome
from pydantic import BaseModel, ConfigDict

from ..core.config import Settings, settings
from .emi import InvalidInputError, compute_emi, format_currency, round_half_up
from .products import MIN_TENURE
from .random_source import RandomSource

logger = logging.getLogger(__name__)


class EligibilityPolicy(BaseModel):
    """Tunable thresholds of the mock underwriting rules."""

    model_config = ConfigDict(frozen=True)

    credit_score_min: int = 650
    credit_score_max: int = 850
    credit_score_threshold: int = 650
    eligible_income_months: int = 48
    default_max_emi_ratio: float = 50.0
    use_product_emi_ratio: bool = True
    base_rate_min: float = 10.0
    base_rate_max: float = 14.0
    suggested_amount_factor: float = 0.8


def policy_from_settings(cfg: Settings) -> EligibilityPolicy:
    return EligibilityPolicy(
        credit_score_min=cfg.CREDIT_SCORE_MIN,
        credit_score_max=cfg.CREDIT_SCORE_MAX,
        credit_score_threshold=cfg.CREDIT_SCORE_THRESHOLD,
        eligible_income_months=cfg.ELIGIBLE_INCOME_MONTHS,
        default_max_emi_ratio=cfg.DEFAULT_MAX_EMI_RATIO,
        use_product_emi_ratio=cfg.USE_PRODUCT_EMI_RATIO,
        base_rate_min=cfg.BASE_RATE_MIN,
        base_rate_max=cfg.BASE_RATE_MAX,
        suggested_amount_factor=cfg.SUGGESTED_AMOUNT_FACTOR,
    )


def credit_band(score: int) -> str:
    if score >= 750:
        return "Excellent"
    if score >= 700:
        return "Good"
    return "Fair"


def build_plans(amount: int, tenure: int, base_rate: float) -> list[LoanPlan]:
    """Economy, Standard and Premium offers around ``base_rate``.

    Rates are rounded to two decimals before the EMI is computed so each
    plan's figures match its displayed rate.
    """
    offers = (
        ("economy", "Economy Plan", base_rate + 2, tenure + 12),
        ("standard", "Standard Plan", base_rate, tenure),
        ("premium", "Premium Plan", base_rate - 1.5, max(tenure - 6, MIN_TENURE)),
    )
    plans: list[LoanPlan] = []
    for plan_id, name, rate, months in offers:
        rate = round(max(rate, 0.0), 2)
        result = compute_emi(amount, rate, months)
        plans.append(
            LoanPlan(
                id=plan_id,
                name=name,
                interest_rate=rate,
                tenure=months,
                emi=result.emi,
                total_payable=result.total_payable,
            )
        )
    return plans


def evaluate(
    request: LoanRequest,
    income: int,
    rng: RandomSource,
    policy: EligibilityPolicy | None = None,
) -> UnderwritingOutcome:
    """Run the eligibility rules for one underwriting entry.

    Rejection reasons are collected in a fixed order (credit score,
    eligible limit, EMI ratio); the request is approved iff none apply.
    A rejection is a normal outcome, not an error.

    Args:
        request: Loan request with its EMI already computed.
        income: Monthly income to assess (parsed if available, else declared).
        rng: Source for the mock credit score and offer base rate.
        policy: Thresholds; defaults to the configured policy.

    Raises:
        InvalidInputError: if ``income`` is not positive.
    """
    if income <= 0:
        raise InvalidInputError(f"income must be positive, got {income}")
    policy = policy or policy_from_settings(settings)

    credit_score = int(math.floor(rng.next_in_range(policy.credit_score_min, policy.credit_score_max)))
    eligible_amount = round_half_up(income * policy.eligible_income_months)
    emi_ratio = request.emi / income * 100
    max_ratio = (
        request.max_emi_ratio if policy.use_product_emi_ratio else policy.default_max_emi_ratio
    )

    reasons: list[str] = []
    if credit_score < policy.credit_score_threshold:
        reasons.append(
            f"Credit score below minimum threshold ({policy.credit_score_threshold})"
        )
    if request.amount > eligible_amount:
        reasons.append(
            f"Requested amount exceeds eligible limit of {format_currency(eligible_amount)}"
        )
    if emi_ratio > max_ratio:
        reasons.append(f"EMI exceeds max ratio of {max_ratio:g}% of monthly income")

    outcome = UnderwritingOutcome(
        credit_score=credit_score,
        credit_band=credit_band(credit_score),
        eligible_amount=eligible_amount,
        emi_ratio=round(emi_ratio, 2),
        income_used=income,
        rejection_reasons=reasons,
    )

    if reasons:
        suggested = round_half_up(
            min(request.amount, eligible_amount * policy.suggested_amount_factor)
        )
        remediation = f"Consider reducing the loan amount to {format_currency(suggested)}"
        if emi_ratio > max_ratio:
            remediation += " or choosing a longer tenure to lower the EMI"
        outcome = outcome.model_copy(
            update={
                "decision": UnderwritingDecision.REJECTED,
                "suggested_amount": suggested,
                "remediation": remediation + ".",
            }
        )
        logger.info(
            "Eligibility rejected (score=%d, amount=%d, eligible=%d, emi_ratio=%.1f): %s",
            credit_score,
            request.amount,
            eligible_amount,
            emi_ratio,
            "; ".join(reasons),
        )
        return outcome

    base_rate = rng.next_in_range(policy.base_rate_min, policy.base_rate_max)
    plans = build_plans(request.amount, request.tenure, base_rate)
    logger.info(
        "Eligibility approved (score=%d, amount=%d, eligible=%d, base_rate=%.2f)",
        credit_score,
        request.amount,
        eligible_amount,
        base_rate,
    )
    return outcome.model_copy(
        update={"decision": UnderwritingDecision.APPROVED, "plans": plans}
    )
