# This project was developed with assistance from AI tools.
__version__ = "0.1.0"

from .enums import LoanType, Stage, StageStatus, UnderwritingDecision
from .models import (
    ApplicationState,
    EMIResult,
    LoanPlan,
    LoanRequest,
    LoanTypeConfig,
    ScheduleRow,
    StageHistoryEntry,
    UnderwritingOutcome,
    VerificationDetails,
)
from .store import ApplicationStore, get_store, init_store

__all__ = [
    "ApplicationStore",
    "get_store",
    "init_store",
    "__version__",
    # Enums
    "LoanType",
    "Stage",
    "StageStatus",
    "UnderwritingDecision",
    # Models
    "ApplicationState",
    "EMIResult",
    "LoanPlan",
    "LoanRequest",
    "LoanTypeConfig",
    "ScheduleRow",
    "StageHistoryEntry",
    "UnderwritingOutcome",
    "VerificationDetails",
]
