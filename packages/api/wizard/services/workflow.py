# This project was developed with assistance from AI tools.
"""Process state machine for the wizard stages.

The stage history is the single authoritative record of workflow
position: exactly one entry is ``current`` (none once the final stage is
confirmed), every entry before it is ``completed`` and every entry after
it is ``pending``. Transitions return a new history list and check that
invariant before returning; the input list is never modified.
"""

import logging
from datetime import datetime

from lending import Stage, StageHistoryEntry, StageStatus

logger = logging.getLogger(__name__)

DEFAULT_SUMMARIES: dict[Stage, str] = {
    Stage.SALES: "Understanding your loan requirements",
    Stage.VERIFICATION: "KYC & Document Verification",
    Stage.UNDERWRITING: "Credit Assessment",
    Stage.SANCTION: "Loan Sanction Letter",
}

_STATUS_RANK = {
    StageStatus.COMPLETED: 0,
    StageStatus.CURRENT: 1,
    StageStatus.PENDING: 2,
}


class InvalidStageError(ValueError):
    """Raised for an unknown stage or a transition that breaks stage order."""


class HistoryInvariantError(RuntimeError):
    """Raised when a history fails the completed/current/pending ordering."""


def coerce_stage(value: Stage | str) -> Stage:
    try:
        return Stage(value)
    except ValueError:
        valid = ", ".join(s.value for s in Stage.ordered())
        raise InvalidStageError(f"Unknown stage '{value}'. Valid: {valid}") from None


def initial_history(now: datetime) -> list[StageHistoryEntry]:
    """First stage current, all others pending."""
    return [
        StageHistoryEntry(
            stage=stage,
            status=StageStatus.CURRENT if i == 0 else StageStatus.PENDING,
            summary=DEFAULT_SUMMARIES[stage],
            timestamp=now,
        )
        for i, stage in enumerate(Stage.ordered())
    ]


def current_index(history: list[StageHistoryEntry]) -> int | None:
    """Position of the current entry, or None once the flow is complete."""
    for i, entry in enumerate(history):
        if entry.status == StageStatus.CURRENT:
            return i
    return None


def check_history(history: list[StageHistoryEntry]) -> None:
    """Raise HistoryInvariantError unless ``history`` is well formed."""
    stages = tuple(entry.stage for entry in history)
    if stages != Stage.ordered():
        raise HistoryInvariantError(f"History stages out of order: {[s.value for s in stages]}")

    ranks = [_STATUS_RANK[entry.status] for entry in history]
    if ranks != sorted(ranks):
        raise HistoryInvariantError(
            f"History statuses not monotonic: {[e.status.value for e in history]}"
        )
    current_count = sum(1 for entry in history if entry.status == StageStatus.CURRENT)
    if current_count > 1:
        raise HistoryInvariantError("More than one stage marked current")
    if current_count == 0 and any(e.status != StageStatus.COMPLETED for e in history):
        raise HistoryInvariantError("No current stage but the flow is not complete")


def _restatus(
    history: list[StageHistoryEntry], target: int, now: datetime
) -> list[StageHistoryEntry]:
    updated: list[StageHistoryEntry] = []
    for i, entry in enumerate(history):
        if i < target:
            status = StageStatus.COMPLETED
        elif i == target:
            status = StageStatus.CURRENT
        else:
            status = StageStatus.PENDING

        if status == entry.status:
            updated.append(entry)
        elif status == StageStatus.COMPLETED:
            updated.append(entry.model_copy(update={"status": status, "timestamp": now}))
        else:
            # Re-opened or re-queued stages lose their completion notes.
            updated.append(
                entry.model_copy(
                    update={
                        "status": status,
                        "summary": DEFAULT_SUMMARIES[entry.stage],
                        "decision": None,
                        "timestamp": now,
                    }
                )
            )
    check_history(updated)
    return updated


def advance(
    history: list[StageHistoryEntry], to_stage: Stage | str, now: datetime
) -> list[StageHistoryEntry]:
    """Move forward to ``to_stage``; every earlier stage becomes completed.

    Raises:
        InvalidStageError: unknown stage, flow already complete, or the
            target is not strictly after the current stage.
    """
    target = coerce_stage(to_stage)
    current = current_index(history)
    if current is None:
        raise InvalidStageError("Application is already complete; no stage to advance from")
    if target.position <= current:
        raise InvalidStageError(
            f"Cannot advance from '{history[current].stage.value}' to '{target.value}': "
            "target must come after the current stage."
        )
    logger.info("Stage advance: %s -> %s", history[current].stage.value, target.value)
    return _restatus(history, target.position, now)


def go_back(
    history: list[StageHistoryEntry], to_stage: Stage | str, now: datetime
) -> list[StageHistoryEntry]:
    """Return to ``to_stage`` (at or before the current stage).

    A completed flow counts as sitting on its final stage, so going back
    to that stage re-opens it.

    Raises:
        InvalidStageError: unknown stage or the target is after the current stage.
    """
    target = coerce_stage(to_stage)
    current = current_index(history)
    if current is None:
        current = len(history) - 1
    if target.position > current:
        raise InvalidStageError(
            f"Cannot go back from '{history[current].stage.value}' to '{target.value}': "
            "target must not come after the current stage."
        )
    logger.info("Stage go-back: %s -> %s", history[current].stage.value, target.value)
    return _restatus(history, target.position, now)


def complete_final(history: list[StageHistoryEntry], now: datetime) -> list[StageHistoryEntry]:
    """Mark the final stage completed once its action is confirmed."""
    current = current_index(history)
    if current != len(history) - 1:
        raise InvalidStageError("Only the final stage can be confirmed as complete")
    logger.info("Stage complete: %s", history[current].stage.value)
    return _restatus(history, len(history), now)


def annotate(
    history: list[StageHistoryEntry],
    stage: Stage,
    summary: str,
    decision: str | None = None,
) -> list[StageHistoryEntry]:
    """Replace the summary and decision note of one entry."""
    return [
        entry.model_copy(update={"summary": summary, "decision": decision})
        if entry.stage == stage
        else entry
        for entry in history
    ]
