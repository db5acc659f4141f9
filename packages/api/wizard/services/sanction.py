# This project was developed with assistance from AI tools.
"""Sanction letter snapshot.

Flattens the loan request and the selected plan into the data the
document generator renders. Layout of the letter itself lives elsewhere.
"""

from lending import ApplicationState

from ..schemas.sanction import SanctionLetter
from .application import StagePreconditionError
from .emi import round_half_up
from .products import get_loan_type


def build_sanction_letter(state: ApplicationState) -> SanctionLetter:
    """Snapshot for a sanctioned application.

    Raises:
        StagePreconditionError: if the sanction has not been confirmed.
    """
    plan = state.underwriting.selected_plan
    if state.sanctioned_at is None or plan is None:
        raise StagePreconditionError("Sanction letter is available only after sanction is confirmed")

    config = get_loan_type(state.loan.loan_type)
    return SanctionLetter(
        reference=f"SL-{state.sanctioned_at:%Y%m%d%H%M%S}",
        applicant_name=state.verification.full_name,
        loan_type=config.name,
        approved_amount=state.loan.amount,
        interest_rate=plan.interest_rate,
        tenure=plan.tenure,
        emi=plan.emi,
        total_payable=plan.total_payable,
        processing_fee=round_half_up(state.loan.amount * state.loan.processing_fee / 100),
        approved_at=state.sanctioned_at,
    )
