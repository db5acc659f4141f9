# This project was developed with assistance from AI tools.
"""Schemas for the application wizard endpoints."""

from lending import (
    EMIResult,
    LoanRequest,
    Stage,
    StageHistoryEntry,
    UnderwritingOutcome,
    VerificationDetails,
)
from pydantic import BaseModel


class LoanUpdateRequest(BaseModel):
    """Partial update of the loan request; omitted fields are unchanged.

    Applied in the order loan_type, amount, tenure, monthly_income.
    """

    loan_type: str | None = None
    amount: int | None = None
    tenure: int | None = None
    monthly_income: int | None = None


class VerificationUpdateRequest(BaseModel):
    """Partial update of the KYC fields."""

    full_name: str | None = None
    date_of_birth: str | None = None
    employer_name: str | None = None
    pan: str | None = None
    aadhaar: str | None = None


class PlanSelectionRequest(BaseModel):
    plan_id: str


class ApplicationResponse(BaseModel):
    """Read-only projection of the application for rendering."""

    current_stage: Stage
    is_complete: bool
    loan: LoanRequest
    emi: EMIResult
    verification: VerificationDetails
    underwriting: UnderwritingOutcome
    history: list[StageHistoryEntry]


class HistoryResponse(BaseModel):
    current_stage: Stage
    history: list[StageHistoryEntry]
