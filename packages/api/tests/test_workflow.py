# This project was developed with assistance from AI tools.
"""Tests for the stage state machine."""

from datetime import UTC, datetime

import pytest
from lending import Stage, StageStatus

from wizard.services.workflow import (
    DEFAULT_SUMMARIES,
    HistoryInvariantError,
    InvalidStageError,
    advance,
    annotate,
    check_history,
    complete_final,
    current_index,
    go_back,
    initial_history,
)

T0 = datetime(2026, 1, 15, 10, 0, tzinfo=UTC)
T1 = datetime(2026, 1, 15, 10, 5, tzinfo=UTC)

ORDER = Stage.ordered()


def _statuses(history):
    return [entry.status for entry in history]


def _expected(target_index):
    return [
        StageStatus.COMPLETED if i < target_index
        else StageStatus.CURRENT if i == target_index
        else StageStatus.PENDING
        for i in range(len(ORDER))
    ]


def _at(stage):
    return advance(initial_history(T0), stage, T0) if stage != Stage.SALES else initial_history(T0)


def test_initial_history():
    history = initial_history(T0)
    assert [e.stage for e in history] == list(ORDER)
    assert _statuses(history) == _expected(0)
    assert all(e.summary == DEFAULT_SUMMARIES[e.stage] for e in history)


@pytest.mark.parametrize("target", ORDER[1:])
def test_advance_marks_everything_before_completed(target):
    history = advance(initial_history(T0), target, T1)
    assert _statuses(history) == _expected(target.position)
    assert history[target.position].timestamp == T1


def test_advance_accepts_string_stage():
    history = advance(initial_history(T0), "verification", T1)
    assert current_index(history) == 1


@pytest.mark.parametrize("target", ORDER)
def test_go_back_from_last_stage(target):
    history = go_back(_at(Stage.SANCTION), target, T1)
    assert _statuses(history) == _expected(target.position)


@pytest.mark.parametrize("target", ORDER)
def test_go_back_from_completed_flow(target):
    done = complete_final(_at(Stage.SANCTION), T1)
    history = go_back(done, target, T1)
    assert _statuses(history) == _expected(target.position)


def test_go_back_to_current_stage_is_allowed():
    history = go_back(_at(Stage.UNDERWRITING), Stage.UNDERWRITING, T1)
    assert _statuses(history) == _expected(2)


def test_go_back_resets_notes_of_reopened_stages():
    history = _at(Stage.SANCTION)
    history = annotate(history, Stage.VERIFICATION, "KYC verification completed", "Verified: A")
    history = go_back(history, Stage.VERIFICATION, T1)
    entry = history[Stage.VERIFICATION.position]
    assert entry.summary == DEFAULT_SUMMARIES[Stage.VERIFICATION]
    assert entry.decision is None


def test_completed_notes_survive_later_go_back():
    history = _at(Stage.SANCTION)
    history = annotate(history, Stage.SALES, "Loan requirements collected", "note")
    history = go_back(history, Stage.UNDERWRITING, T1)
    assert history[0].summary == "Loan requirements collected"
    assert history[0].decision == "note"


class TestInvalidTransitions:
    def test_advance_to_same_stage(self):
        with pytest.raises(InvalidStageError):
            advance(initial_history(T0), Stage.SALES, T1)

    def test_advance_backwards(self):
        with pytest.raises(InvalidStageError):
            advance(_at(Stage.UNDERWRITING), Stage.VERIFICATION, T1)

    def test_go_back_forwards(self):
        with pytest.raises(InvalidStageError):
            go_back(_at(Stage.VERIFICATION), Stage.UNDERWRITING, T1)

    def test_unknown_stage(self):
        with pytest.raises(InvalidStageError, match="Unknown stage"):
            advance(initial_history(T0), "disbursal", T1)
        with pytest.raises(InvalidStageError, match="Unknown stage"):
            go_back(initial_history(T0), "disbursal", T1)

    def test_advance_after_completion(self):
        done = complete_final(_at(Stage.SANCTION), T1)
        with pytest.raises(InvalidStageError):
            advance(done, Stage.SANCTION, T1)

    def test_complete_before_final_stage(self):
        with pytest.raises(InvalidStageError):
            complete_final(_at(Stage.UNDERWRITING), T1)

    def test_failed_transition_leaves_input_untouched(self):
        history = _at(Stage.VERIFICATION)
        before = [e.model_copy() for e in history]
        with pytest.raises(InvalidStageError):
            go_back(history, Stage.SANCTION, T1)
        assert history == before


def test_complete_final_marks_all_completed():
    history = complete_final(_at(Stage.SANCTION), T1)
    assert all(s == StageStatus.COMPLETED for s in _statuses(history))
    assert current_index(history) is None


def test_transitions_do_not_mutate_input():
    history = initial_history(T0)
    advance(history, Stage.UNDERWRITING, T1)
    assert _statuses(history) == _expected(0)


class TestCheckHistory:
    def test_two_current_entries(self):
        history = initial_history(T0)
        history[1] = history[1].model_copy(update={"status": StageStatus.CURRENT})
        with pytest.raises(HistoryInvariantError):
            check_history(history)

    def test_pending_before_completed(self):
        history = initial_history(T0)
        history[0] = history[0].model_copy(update={"status": StageStatus.PENDING})
        history[1] = history[1].model_copy(update={"status": StageStatus.COMPLETED})
        with pytest.raises(HistoryInvariantError):
            check_history(history)

    def test_no_current_but_pending_left(self):
        history = initial_history(T0)
        history[0] = history[0].model_copy(update={"status": StageStatus.COMPLETED})
        with pytest.raises(HistoryInvariantError):
            check_history(history)

    def test_wrong_order(self):
        history = list(reversed(initial_history(T0)))
        with pytest.raises(HistoryInvariantError):
            check_history(history)
