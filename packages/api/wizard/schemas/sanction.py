# This project was developed with assistance from AI tools.
"""Sanction letter snapshot schema."""

from datetime import datetime

from pydantic import BaseModel


class SanctionLetter(BaseModel):
    """Flattened data handed to the document generator."""

    reference: str
    applicant_name: str
    loan_type: str
    approved_amount: int
    interest_rate: float
    tenure: int
    emi: int
    total_payable: int
    processing_fee: int
    approved_at: datetime
