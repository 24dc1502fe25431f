"""
Session State Machine Tests

Setup flow, transition guards and reset semantics of the interview store.

Run with: pytest tests/test_session_store.py -v
"""

import pytest

from crisphire.core.errors import CandidateNotFoundError, StateTransitionError
from crisphire.models.candidate import CandidateDetails, MessageAuthor
from crisphire.models.evaluation import AnswerEvaluation, FinalAssessment
from crisphire.models.interview import (
    InterviewMode,
    InterviewStatus,
    InterviewStep,
    StepType,
)
from crisphire.models.roles import Role

from conftest import OPENING, RESUME

FULL_DETAILS = CandidateDetails(name="Jane Doe", email="jane@example.com", phone="555")


def start(store):
    candidate = store.add_candidate(FULL_DETAILS, RESUME)
    store.select_role(Role.BACKEND)
    store.start_interview()
    return candidate


def test_complete_details_go_straight_to_pending(store):
    candidate = store.add_candidate(FULL_DETAILS, RESUME, skills=["Go"])

    assert store.session.status == InterviewStatus.PENDING
    assert store.session.candidate_id == candidate.id
    assert candidate.skills == ["Go"]


def test_missing_email_requires_details(store):
    candidate = store.add_candidate(CandidateDetails(name="Jane", phone="555"), RESUME)
    assert store.session.status == InterviewStatus.DETAILS_MISSING

    store.complete_details(candidate.id, CandidateDetails(email="jane@example.com"))

    assert store.session.status == InterviewStatus.PENDING
    assert candidate.email == "jane@example.com"
    assert candidate.name == "Jane"


def test_complete_details_advances_even_if_still_incomplete(store):
    candidate = store.add_candidate(CandidateDetails(), RESUME)
    store.complete_details(candidate.id, CandidateDetails(name="Jane"))

    assert store.session.status == InterviewStatus.PENDING
    assert candidate.email is None


def test_start_seeds_opening_prompt_untimed(store):
    candidate = start(store)

    assert store.session.status == InterviewStatus.ACTIVE
    assert len(candidate.chat_history) == 1
    assert candidate.chat_history[0].author == MessageAuthor.AI
    assert candidate.chat_history[0].text == OPENING
    assert store.session.current_question == OPENING
    assert store.session.timer == 0


def test_start_requires_role(store):
    store.add_candidate(FULL_DETAILS, RESUME)
    with pytest.raises(StateTransitionError):
        store.start_interview()


def test_start_from_details_missing_is_rejected(store):
    store.add_candidate(CandidateDetails(name="Jane"), RESUME)
    store.select_role(Role.FRONTEND)
    with pytest.raises(StateTransitionError):
        store.start_interview()


def test_role_and_mode_locked_once_active(store):
    start(store)
    with pytest.raises(StateTransitionError):
        store.select_role(Role.FRONTEND)
    with pytest.raises(StateTransitionError):
        store.select_mode(InterviewMode.AVATAR)


def test_apply_step_requires_active(store):
    with pytest.raises(StateTransitionError):
        store.apply_step(InterviewStep(type=StepType.QUESTION, content="Q", time=20))


def test_apply_step_sets_question_timer_and_turn(store):
    start(store)
    turn = store.session.turn

    store.apply_step(InterviewStep(type=StepType.QUESTION, content="What is a join?", time=20))

    assert store.session.current_question == "What is a join?"
    assert store.session.timer == 20
    assert store.session.turn == turn + 1


def test_completed_is_terminal(store):
    candidate = start(store)
    store.complete_interview(candidate.id, FinalAssessment(summary="Good", final_score=70))

    assert store.session.status == InterviewStatus.COMPLETED
    assert candidate.final_score == 70
    with pytest.raises(StateTransitionError):
        store.apply_step(InterviewStep(type=StepType.QUESTION, content="Q", time=20))
    with pytest.raises(StateTransitionError):
        store.append_message(candidate.id, MessageAuthor.USER, "late")


def test_evaluation_correlates_by_seq(store):
    candidate = start(store)
    first = store.append_message(candidate.id, MessageAuthor.USER, "same answer")
    store.append_message(candidate.id, MessageAuthor.AI, "Next?")
    second = store.append_message(candidate.id, MessageAuthor.USER, "same answer")

    store.attach_evaluation(candidate.id, first.seq, AnswerEvaluation(feedback="ok", score=4))

    assert candidate.chat_history[first.seq - 1].score == 4
    assert candidate.chat_history[second.seq - 1].score is None
    assert candidate.scores == [4]


def test_evaluation_on_ai_message_is_rejected(store):
    candidate = start(store)
    with pytest.raises(ValueError):
        store.attach_evaluation(candidate.id, 1, AnswerEvaluation(score=5))


def test_reset_keeps_roster(store):
    candidate = start(store)
    store.reset()

    assert store.session.status == InterviewStatus.INITIAL
    assert store.session.candidate_id is None
    assert store.get_candidate(candidate.id) is candidate
    assert len(candidate.chat_history) == 1


def test_unknown_candidate(store):
    with pytest.raises(CandidateNotFoundError):
        store.require_candidate("missing")


def test_start_rejects_candidate_other_than_current(store):
    finished = start(store)
    store.complete_interview(finished.id, FinalAssessment(summary="Good", final_score=82))
    store.reset()
    fresh = store.add_candidate(
        CandidateDetails(name="Sam", email="sam@example.com", phone="1"), RESUME
    )
    store.select_role(Role.FRONTEND)

    with pytest.raises(StateTransitionError):
        store.start_interview(finished.id)

    assert store.session.status == InterviewStatus.PENDING
    assert len(finished.chat_history) == 1
    assert finished.final_score == 82

    store.start_interview(fresh.id)
    assert store.session.candidate_id == fresh.id


def test_timestamps_are_utc_aware(store):
    candidate = start(store)
    store.complete_interview(candidate.id, FinalAssessment(summary="Good", final_score=70))

    for stamp in (candidate.created_at, store.session.started_at, store.session.completed_at):
        assert stamp.tzinfo is not None
        assert stamp.utcoffset().total_seconds() == 0
