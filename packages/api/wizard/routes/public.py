# This project was developed with assistance from AI tools.
"""Public API routes -- loan catalog and calculators."""

from fastapi import APIRouter, HTTPException, status
from lending import EMIResult, LoanTypeConfig

from ..schemas.calculator import EMIRequest, ScheduleResponse
from ..services.emi import amortization_schedule, compute_emi
from ..services.products import LoanTypeNotFoundError, get_loan_type, list_loan_types

router = APIRouter()


@router.get("/loan-types", response_model=list[LoanTypeConfig])
async def list_products() -> list[LoanTypeConfig]:
    """Return the available loan products."""
    return list_loan_types()


@router.get("/loan-types/{type_id}", response_model=LoanTypeConfig)
async def get_product(type_id: str) -> LoanTypeConfig:
    try:
        return get_loan_type(type_id)
    except LoanTypeNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post("/calculate-emi", response_model=EMIResult)
async def calculate_emi(req: EMIRequest) -> EMIResult:
    """EMI = P * r * (1+r)^n / ((1+r)^n - 1) with r the monthly rate."""
    return compute_emi(req.principal, req.annual_rate, req.tenure_months)


@router.post("/amortization-schedule", response_model=ScheduleResponse)
async def calculate_schedule(req: EMIRequest) -> ScheduleResponse:
    """Month-by-month principal/interest split for the given loan."""
    result = compute_emi(req.principal, req.annual_rate, req.tenure_months)
    return ScheduleResponse(
        emi=result.emi,
        total_payable=result.total_payable,
        total_interest=result.total_interest,
        rows=amortization_schedule(req.principal, req.annual_rate, req.tenure_months),
    )
