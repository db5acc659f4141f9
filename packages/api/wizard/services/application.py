# This project was developed with assistance from AI tools.
"""Application orchestrator.

Every wizard command is a function ``command(state, ...) -> new_state``.
Commands validate first and build a new ``ApplicationState``; the caller
commits the result to the store, so a failed command leaves the stored
application untouched. Derived EMI figures are refreshed explicitly via
``recompute()`` whenever amount, rate or tenure change.
"""

import logging
import math
from datetime import UTC, datetime
from numbers import Real

from lending import (
    ApplicationState,
    LoanRequest,
    LoanType,
    Stage,
    UnderwritingDecision,
    UnderwritingOutcome,
)

from ..core.config import settings
from .eligibility import EligibilityPolicy, evaluate
from .emi import InvalidInputError, compute_emi, format_currency
from .products import MIN_TENURE, clamp_amount, clamp_tenure, get_loan_type
from .random_source import RandomSource
from .verification import normalize_field, parse_salary_slip, verification_errors
from .workflow import (
    advance,
    annotate,
    coerce_stage,
    complete_final,
    go_back,
    initial_history,
)

logger = logging.getLogger(__name__)

INITIAL_LOAN_TYPE = LoanType.PERSONAL
INITIAL_AMOUNT = 500_000
INITIAL_TENURE = 36
INITIAL_INCOME = 50_000

_VERIFICATION_FIELDS = frozenset({"full_name", "date_of_birth", "employer_name", "pan", "aadhaar"})


class OutOfBoundsError(ValueError):
    """Raised when an amount or tenure is outside the selected product's range."""


class StagePreconditionError(ValueError):
    """Raised when a command is well formed but not allowed in the current state."""


class PlanNotFoundError(LookupError):
    """Raised when a plan id is not among the offered plans."""


def _now() -> datetime:
    return datetime.now(UTC)


def _whole_number(name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidInputError(f"{name} must be a number, got {value!r}")
    if not math.isfinite(value) or value != int(value):
        raise InvalidInputError(f"{name} must be a whole number, got {value!r}")
    return int(value)


def _require_stage(state: ApplicationState, stage: Stage, action: str) -> None:
    if state.is_complete or state.current_stage != stage:
        where = "complete" if state.is_complete else f"at '{state.current_stage.value}'"
        raise StagePreconditionError(
            f"Cannot {action} while the application is {where}; "
            f"this is only allowed during the '{stage.value}' stage."
        )


def assessed_income(state: ApplicationState) -> int:
    """Parsed salary-slip income when available, else the declared income."""
    return state.verification.parsed_income or state.loan.monthly_income


def recompute(state: ApplicationState) -> ApplicationState:
    """Refresh the EMI figures from the loan request."""
    loan = state.loan
    result = compute_emi(loan.amount, loan.interest_rate, loan.tenure)
    return state.model_copy(
        update={"emi": result, "loan": loan.model_copy(update={"emi": result.emi})}
    )


def new_application(now: datetime | None = None) -> ApplicationState:
    """A fresh application on the first stage with the default loan request."""
    config = get_loan_type(INITIAL_LOAN_TYPE)
    result = compute_emi(INITIAL_AMOUNT, config.interest_rate, INITIAL_TENURE)
    loan = LoanRequest(
        loan_type=config.id,
        amount=INITIAL_AMOUNT,
        tenure=INITIAL_TENURE,
        monthly_income=INITIAL_INCOME,
        emi=result.emi,
        interest_rate=config.interest_rate,
        processing_fee=config.processing_fee,
        max_emi_ratio=config.max_emi_ratio,
    )
    return ApplicationState(loan=loan, emi=result, history=initial_history(now or _now()))


def reset_application(now: datetime | None = None) -> ApplicationState:
    """Discard the whole application and start over."""
    logger.info("Application reset")
    return new_application(now)


# ---------------------------------------------------------------------------
# Sales stage: loan request edits
# ---------------------------------------------------------------------------


def set_loan_type(state: ApplicationState, loan_type: LoanType | str) -> ApplicationState:
    """Switch product, clamping amount and tenure into its bounds.

    Rate, fee and ratio are replaced together with the clamped figures.
    """
    _require_stage(state, Stage.SALES, "change the loan type")
    config = get_loan_type(loan_type)
    loan = state.loan.model_copy(
        update={
            "loan_type": config.id,
            "amount": clamp_amount(state.loan.amount, config),
            "tenure": clamp_tenure(state.loan.tenure, config),
            "interest_rate": config.interest_rate,
            "processing_fee": config.processing_fee,
            "max_emi_ratio": config.max_emi_ratio,
        }
    )
    return recompute(state.model_copy(update={"loan": loan}))


def set_amount(state: ApplicationState, amount) -> ApplicationState:
    _require_stage(state, Stage.SALES, "change the loan amount")
    value = _whole_number("amount", amount)
    if value <= 0:
        raise InvalidInputError(f"amount must be positive, got {value}")
    config = get_loan_type(state.loan.loan_type)
    if not config.min_amount <= value <= config.max_amount:
        raise OutOfBoundsError(
            f"Amount {format_currency(value)} is outside the {config.name} range "
            f"{format_currency(config.min_amount)} - {format_currency(config.max_amount)}"
        )
    return recompute(state.model_copy(update={"loan": state.loan.model_copy(update={"amount": value})}))


def set_tenure(state: ApplicationState, tenure) -> ApplicationState:
    _require_stage(state, Stage.SALES, "change the tenure")
    value = _whole_number("tenure", tenure)
    if value <= 0:
        raise InvalidInputError(f"tenure must be positive, got {value}")
    config = get_loan_type(state.loan.loan_type)
    if not MIN_TENURE <= value <= config.max_tenure:
        raise OutOfBoundsError(
            f"Tenure {value} months is outside the {config.name} range "
            f"{MIN_TENURE} - {config.max_tenure} months"
        )
    return recompute(state.model_copy(update={"loan": state.loan.model_copy(update={"tenure": value})}))


def set_income(state: ApplicationState, income) -> ApplicationState:
    _require_stage(state, Stage.SALES, "change the monthly income")
    value = _whole_number("monthly_income", income)
    if value <= 0:
        raise InvalidInputError(f"monthly_income must be positive, got {value}")
    return state.model_copy(
        update={"loan": state.loan.model_copy(update={"monthly_income": value})}
    )


def update_loan(
    state: ApplicationState,
    *,
    loan_type: LoanType | str | None = None,
    amount=None,
    tenure=None,
    monthly_income=None,
) -> ApplicationState:
    """Apply several loan edits as one command, in a fixed order."""
    if loan_type is not None:
        state = set_loan_type(state, loan_type)
    if amount is not None:
        state = set_amount(state, amount)
    if tenure is not None:
        state = set_tenure(state, tenure)
    if monthly_income is not None:
        state = set_income(state, monthly_income)
    return state


# ---------------------------------------------------------------------------
# Verification stage
# ---------------------------------------------------------------------------


def update_verification(state: ApplicationState, **fields: str) -> ApplicationState:
    _require_stage(state, Stage.VERIFICATION, "update verification details")
    unknown = set(fields) - _VERIFICATION_FIELDS
    if unknown:
        raise InvalidInputError(f"Unknown verification fields: {', '.join(sorted(unknown))}")
    updates = {name: normalize_field(name, value) for name, value in fields.items()}
    return state.model_copy(
        update={"verification": state.verification.model_copy(update=updates)}
    )


def attach_salary_slip(state: ApplicationState, rng: RandomSource) -> ApplicationState:
    """Record a salary slip and its (mocked) parse result."""
    _require_stage(state, Stage.VERIFICATION, "upload a salary slip")
    parsed_income, parsed_employer = parse_salary_slip(state.loan.monthly_income, rng)
    updates = {
        "salary_slip_provided": True,
        "parsed_income": parsed_income,
        "parsed_employer": parsed_employer,
    }
    if not state.verification.employer_name:
        updates["employer_name"] = parsed_employer
    logger.info("Salary slip parsed (income=%d, employer=%s)", parsed_income, parsed_employer)
    return state.model_copy(
        update={"verification": state.verification.model_copy(update=updates)}
    )


# ---------------------------------------------------------------------------
# Stage transitions
# ---------------------------------------------------------------------------


def _check_exit(state: ApplicationState, stage: Stage) -> None:
    """Raise StagePreconditionError if ``stage`` cannot be completed yet."""
    if stage == Stage.SALES:
        config = get_loan_type(state.loan.loan_type)
        if not config.min_amount <= state.loan.amount <= config.max_amount:
            raise StagePreconditionError(f"Loan amount is outside the {config.name} range")
        if not MIN_TENURE <= state.loan.tenure <= config.max_tenure:
            raise StagePreconditionError(f"Tenure is outside the {config.name} range")
        floor = max(settings.MIN_MONTHLY_INCOME, config.min_monthly_income)
        if state.loan.monthly_income < floor:
            raise StagePreconditionError(
                f"Monthly income of at least {format_currency(floor)} is required "
                f"for a {config.name}"
            )
    elif stage == Stage.VERIFICATION:
        errors = verification_errors(state.verification)
        if errors:
            raise StagePreconditionError(f"Verification incomplete: {'; '.join(errors)}")
        income = assessed_income(state)
        if income < settings.MIN_MONTHLY_INCOME:
            raise StagePreconditionError(
                f"Verified monthly income of {format_currency(income)} is below the "
                f"minimum of {format_currency(settings.MIN_MONTHLY_INCOME)}"
            )
    elif stage == Stage.UNDERWRITING:
        outcome = state.underwriting
        if outcome.decision != UnderwritingDecision.APPROVED:
            raise StagePreconditionError("Underwriting has not approved this application")
        if outcome.selected_plan is None:
            raise StagePreconditionError("Select a loan plan before proceeding to sanction")


def _completion_note(state: ApplicationState, stage: Stage) -> tuple[str, str | None]:
    loan = state.loan
    if stage == Stage.SALES:
        return (
            "Loan requirements collected",
            f"{format_currency(loan.amount)} @ {loan.interest_rate:g}% for {loan.tenure} months",
        )
    if stage == Stage.VERIFICATION:
        return "KYC verification completed", f"Verified: {state.verification.full_name}"
    if stage == Stage.UNDERWRITING:
        plan = state.underwriting.selected_plan
        return "Credit assessment completed", f"Approved: {plan.name} @ {plan.interest_rate:g}%"
    return "Sanction letter generated", "Loan documentation complete"


def _enter_underwriting(
    state: ApplicationState,
    rng: RandomSource,
    policy: EligibilityPolicy | None,
) -> ApplicationState:
    """Run the eligibility policy once for this underwriting entry."""
    outcome = evaluate(state.loan, assessed_income(state), rng, policy)
    if outcome.decision == UnderwritingDecision.APPROVED:
        note = f"Eligible: {len(outcome.plans)} plans offered"
    else:
        note = f"Rejected: {'; '.join(outcome.rejection_reasons)}"
    history = annotate(state.history, Stage.UNDERWRITING, "Credit assessment in progress", note)
    return state.model_copy(update={"underwriting": outcome, "history": history})


def advance_stage(
    state: ApplicationState,
    to_stage: Stage | str,
    rng: RandomSource,
    policy: EligibilityPolicy | None = None,
    now: datetime | None = None,
) -> ApplicationState:
    """Move forward to ``to_stage``.

    Each stage being completed must pass its exit check. Entering
    underwriting runs the eligibility policy.
    """
    target = coerce_stage(to_stage)
    history = advance(state.history, target, now or _now())

    leaving = Stage.ordered()[state.current_stage.position : target.position]
    for stage in leaving:
        _check_exit(state, stage)
    for stage in leaving:
        history = annotate(history, stage, *_completion_note(state, stage))

    state = state.model_copy(update={"history": history})
    if target == Stage.UNDERWRITING:
        state = _enter_underwriting(
            state.model_copy(update={"underwriting": UnderwritingOutcome()}), rng, policy
        )
    return state


def go_back_to_stage(
    state: ApplicationState,
    to_stage: Stage | str,
    rng: RandomSource,
    policy: EligibilityPolicy | None = None,
    now: datetime | None = None,
) -> ApplicationState:
    """Return to an earlier stage.

    Results derived for the target stage and anything after it are
    discarded. Returning to underwriting re-runs the eligibility policy.
    Naming the stage the application is already on leaves it unchanged;
    a completed flow re-opens its final stage.
    """
    target = coerce_stage(to_stage)
    if not state.is_complete and target == state.current_stage:
        logger.info("Go-back to current stage %s ignored", target.value)
        return state
    history = go_back(state.history, target, now or _now())
    updates: dict = {"history": history, "sanctioned_at": None}

    if target.position <= Stage.UNDERWRITING.position:
        updates["underwriting"] = UnderwritingOutcome()
    if target == Stage.SALES:
        # The mocked parse was derived from the declared income, which may change.
        updates["verification"] = state.verification.model_copy(
            update={
                "salary_slip_provided": False,
                "parsed_income": None,
                "parsed_employer": None,
            }
        )

    state = state.model_copy(update=updates)
    if target == Stage.UNDERWRITING:
        state = _enter_underwriting(state, rng, policy)
    return state


# ---------------------------------------------------------------------------
# Underwriting and sanction actions
# ---------------------------------------------------------------------------


def select_plan(state: ApplicationState, plan_id: str) -> ApplicationState:
    """Record the applicant's choice among the offered plans."""
    _require_stage(state, Stage.UNDERWRITING, "select a plan")
    outcome = state.underwriting
    if outcome.decision != UnderwritingDecision.APPROVED:
        raise StagePreconditionError("Plans can only be selected for an approved application")
    if outcome.selected_plan is not None:
        raise StagePreconditionError(
            f"Plan '{outcome.selected_plan.id}' is already selected"
        )
    plan = next((p for p in outcome.plans if p.id == plan_id), None)
    if plan is None:
        offered = ", ".join(p.id for p in outcome.plans)
        raise PlanNotFoundError(f"Unknown plan '{plan_id}'. Offered: {offered}")

    logger.info("Plan selected: %s @ %.2f%% for %d months", plan.id, plan.interest_rate, plan.tenure)
    return state.model_copy(
        update={"underwriting": outcome.model_copy(update={"selected_plan": plan})}
    )


def confirm_sanction(state: ApplicationState, now: datetime | None = None) -> ApplicationState:
    """Confirm the sanction letter; this completes the final stage."""
    _require_stage(state, Stage.SANCTION, "confirm the sanction")
    now = now or _now()
    history = complete_final(state.history, now)
    history = annotate(history, Stage.SANCTION, *_completion_note(state, Stage.SANCTION))
    logger.info("Sanction confirmed (amount=%d)", state.loan.amount)
    return state.model_copy(update={"history": history, "sanctioned_at": now})
