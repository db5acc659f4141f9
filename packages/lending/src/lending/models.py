# This project was developed with assistance from AI tools.
"""
Loan origination wizard -- domain records

In-memory records for a single loan application: the loan request,
verification inputs, underwriting outcome and the ordered stage history.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .enums import LoanType, Stage, StageStatus, UnderwritingDecision


class LoanTypeConfig(BaseModel):
    """Per-product lending parameters."""

    model_config = ConfigDict(frozen=True)

    id: LoanType
    name: str
    interest_rate: float = Field(ge=0, description="Annual interest rate, percent.")
    min_amount: int = Field(gt=0)
    max_amount: int = Field(gt=0)
    max_tenure: int = Field(ge=12, description="Maximum tenure in months.")
    min_monthly_income: int = Field(ge=0)
    max_emi_ratio: float = Field(gt=0, le=100, description="Max EMI / income, percent.")
    processing_fee: float = Field(ge=0, description="Percent of principal.")

    @model_validator(mode="after")
    def _check_amount_range(self) -> "LoanTypeConfig":
        if self.min_amount > self.max_amount:
            raise ValueError("min_amount must not exceed max_amount")
        return self


class EMIResult(BaseModel):
    """Amortization figures for one principal/rate/tenure combination."""

    emi: int
    total_payable: int
    total_interest: int
    principal_percentage: int
    interest_percentage: int


class ScheduleRow(BaseModel):
    """One month of an amortization schedule."""

    month: int
    opening_balance: float
    installment: float
    principal_component: float
    interest_component: float
    closing_balance: float


class LoanRequest(BaseModel):
    """Loan details collected during the sales stage.

    ``interest_rate``, ``processing_fee`` and ``max_emi_ratio`` mirror the
    selected loan type and are only ever written together with it.
    """

    loan_type: LoanType
    amount: int
    tenure: int
    monthly_income: int
    emi: int = 0
    interest_rate: float
    processing_fee: float
    max_emi_ratio: float


class VerificationDetails(BaseModel):
    """KYC inputs plus the mocked salary-slip parse result."""

    full_name: str = ""
    date_of_birth: str = ""
    employer_name: str = ""
    pan: str = ""
    aadhaar: str = ""
    salary_slip_provided: bool = False
    parsed_income: int | None = None
    parsed_employer: str | None = None


class LoanPlan(BaseModel):
    """One alternative offer synthesized for an approved application."""

    id: str
    name: str
    interest_rate: float
    tenure: int
    emi: int
    total_payable: int


class UnderwritingOutcome(BaseModel):
    """Result of the eligibility evaluation for the current underwriting entry."""

    credit_score: int = 0
    credit_band: str | None = None
    eligible_amount: int = 0
    emi_ratio: float = 0.0
    income_used: int = 0
    decision: UnderwritingDecision = UnderwritingDecision.PENDING
    rejection_reasons: list[str] = Field(default_factory=list)
    plans: list[LoanPlan] = Field(default_factory=list)
    suggested_amount: int | None = None
    remediation: str | None = None
    selected_plan: LoanPlan | None = None

    @property
    def is_evaluated(self) -> bool:
        return self.decision != UnderwritingDecision.PENDING


class StageHistoryEntry(BaseModel):
    """One row of the ordered stage history."""

    stage: Stage
    status: StageStatus
    summary: str
    decision: str | None = None
    timestamp: datetime


class ApplicationState(BaseModel):
    """The whole application aggregate.

    ``history`` is the single source of truth for workflow position; the
    current stage is derived from it, never stored separately.
    """

    loan: LoanRequest
    emi: EMIResult
    verification: VerificationDetails = Field(default_factory=VerificationDetails)
    underwriting: UnderwritingOutcome = Field(default_factory=UnderwritingOutcome)
    history: list[StageHistoryEntry]
    sanctioned_at: datetime | None = None

    @property
    def current_stage(self) -> Stage:
        """Stage marked current, or the final stage once the flow is complete."""
        for entry in self.history:
            if entry.status == StageStatus.CURRENT:
                return entry.stage
        return self.history[-1].stage

    @property
    def is_complete(self) -> bool:
        return all(entry.status == StageStatus.COMPLETED for entry in self.history)
