# This project was developed with assistance from AI tools.
"""Application wizard endpoints.

Each mutating endpoint runs one orchestrator command against the stored
state and commits the result only when the command succeeds.
"""

import logging
from collections.abc import Callable

from fastapi import APIRouter, Depends, HTTPException, status
from lending import ApplicationState, ApplicationStore, get_store

from ..schemas import StageRef
from ..schemas.application import (
    ApplicationResponse,
    HistoryResponse,
    LoanUpdateRequest,
    PlanSelectionRequest,
    VerificationUpdateRequest,
)
from ..schemas.sanction import SanctionLetter
from ..services.application import (
    OutOfBoundsError,
    PlanNotFoundError,
    StagePreconditionError,
    advance_stage,
    attach_salary_slip,
    confirm_sanction,
    go_back_to_stage,
    reset_application,
    select_plan,
    update_loan,
    update_verification,
)
from ..services.emi import InvalidInputError
from ..services.products import LoanTypeNotFoundError
from ..services.random_source import RandomSource, get_random_source
from ..services.sanction import build_sanction_letter
from ..services.workflow import InvalidStageError

logger = logging.getLogger(__name__)

router = APIRouter()


def _project(state: ApplicationState) -> ApplicationResponse:
    return ApplicationResponse(
        current_stage=state.current_stage,
        is_complete=state.is_complete,
        loan=state.loan,
        emi=state.emi,
        verification=state.verification,
        underwriting=state.underwriting,
        history=state.history,
    )


def _apply(store: ApplicationStore, command: Callable[..., ApplicationState], *args, **kwargs):
    """Run a command and commit its result; map domain errors to HTTP errors."""
    try:
        new_state = command(store.state, *args, **kwargs)
    except StagePreconditionError as e:
        logger.warning("%s rejected: %s", command.__name__, e)
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except (InvalidInputError, OutOfBoundsError, InvalidStageError) as e:
        logger.warning("%s rejected: %s", command.__name__, e)
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    except (LoanTypeNotFoundError, PlanNotFoundError) as e:
        logger.warning("%s rejected: %s", command.__name__, e)
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return _project(store.commit(new_state))


@router.get("", response_model=ApplicationResponse)
async def get_application(store: ApplicationStore = Depends(get_store)) -> ApplicationResponse:
    """Current projection of the application."""
    return _project(store.state)


@router.get("/history", response_model=HistoryResponse)
async def get_history(store: ApplicationStore = Depends(get_store)) -> HistoryResponse:
    state = store.state
    return HistoryResponse(current_stage=state.current_stage, history=state.history)


@router.put("/loan", response_model=ApplicationResponse)
async def update_loan_details(
    body: LoanUpdateRequest,
    store: ApplicationStore = Depends(get_store),
) -> ApplicationResponse:
    """Edit loan type, amount, tenure and income (sales stage only)."""
    return _apply(store, update_loan, **body.model_dump(exclude_none=True))


@router.put("/verification", response_model=ApplicationResponse)
async def update_verification_details(
    body: VerificationUpdateRequest,
    store: ApplicationStore = Depends(get_store),
) -> ApplicationResponse:
    return _apply(store, update_verification, **body.model_dump(exclude_none=True))


@router.post("/verification/salary-slip", response_model=ApplicationResponse)
async def upload_salary_slip(
    store: ApplicationStore = Depends(get_store),
    rng: RandomSource = Depends(get_random_source),
) -> ApplicationResponse:
    """Mark the salary slip as provided and record the mocked parse."""
    return _apply(store, attach_salary_slip, rng)


@router.post("/advance", response_model=ApplicationResponse)
async def advance(
    body: StageRef,
    store: ApplicationStore = Depends(get_store),
    rng: RandomSource = Depends(get_random_source),
) -> ApplicationResponse:
    return _apply(store, advance_stage, body.stage, rng)


@router.post("/go-back", response_model=ApplicationResponse)
async def go_back(
    body: StageRef,
    store: ApplicationStore = Depends(get_store),
    rng: RandomSource = Depends(get_random_source),
) -> ApplicationResponse:
    return _apply(store, go_back_to_stage, body.stage, rng)


@router.post("/select-plan", response_model=ApplicationResponse)
async def choose_plan(
    body: PlanSelectionRequest,
    store: ApplicationStore = Depends(get_store),
) -> ApplicationResponse:
    return _apply(store, select_plan, body.plan_id)


@router.post("/sanction", response_model=ApplicationResponse)
async def sanction(store: ApplicationStore = Depends(get_store)) -> ApplicationResponse:
    """Confirm the sanction letter, completing the application."""
    return _apply(store, confirm_sanction)


@router.get("/sanction-letter", response_model=SanctionLetter)
async def get_sanction_letter(store: ApplicationStore = Depends(get_store)) -> SanctionLetter:
    try:
        return build_sanction_letter(store.state)
    except StagePreconditionError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


@router.post("/reset", response_model=ApplicationResponse)
async def reset(store: ApplicationStore = Depends(get_store)) -> ApplicationResponse:
    """Discard the application and start again from the first stage."""
    return _project(store.commit(reset_application()))
