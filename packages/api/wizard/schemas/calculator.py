# This project was developed with assistance from AI tools.
"""EMI calculator schemas."""

from lending import ScheduleRow
from pydantic import BaseModel, Field


class EMIRequest(BaseModel):
    """Input for the EMI calculator."""

    principal: float = Field(gt=0, le=50_000_000)
    annual_rate: float = Field(ge=0, le=50)
    tenure_months: int = Field(gt=0, le=360)


class ScheduleResponse(BaseModel):
    """Amortization schedule with the headline EMI figures."""

    emi: int
    total_payable: int
    total_interest: int
    rows: list[ScheduleRow]
