"""
Answer Orchestrator Tests

Drives full interviews through the engine with a scripted AI layer and
checks ordering, scoring, fallbacks and the single-flight guard.

Run with: pytest tests/test_orchestrator.py -v
"""

import asyncio

import httpx
import pytest

from crisphire.core.ai_reasoning import (
    ERROR_EVALUATION,
    ERROR_STEP,
    ERROR_SUMMARY,
    UNPARSABLE_STEP,
)
from crisphire.core.errors import InterviewBusyError, StateTransitionError
from crisphire.models.candidate import MessageAuthor
from crisphire.models.interview import InterviewStatus, InterviewStep, StepType


def current(engine):
    return engine.store.current_candidate()


async def run_to_completion(engine, answer="My answer"):
    """Answer every question until the interview completes."""
    submissions = 0
    while engine.session.status == InterviewStatus.ACTIVE:
        await engine.submit_answer(answer)
        submissions += 1
        assert submissions <= 20
    return submissions


async def test_intro_answer_is_not_scored(active_engine, fake_ai):
    step = await active_engine.submit_answer("I build web apps.")

    candidate = current(active_engine)
    assert step.type == StepType.CONVERSATION
    assert step.time == 0
    assert candidate.scores == []
    assert fake_ai.evaluations == []
    assert [m.author for m in candidate.chat_history] == [
        MessageAuthor.AI, MessageAuthor.USER, MessageAuthor.AI,
    ]


async def test_third_ai_message_is_easy_twenty_second_question(active_engine, fake_ai):
    await active_engine.submit_answer("Intro")
    step = await active_engine.submit_answer("Follow-up")

    assert step.type == StepType.QUESTION
    assert step.time == 20
    assert active_engine.session.timer == 20
    assert active_engine.session.current_question == step.content
    assert len(current(active_engine).ai_questions()) == 3


async def test_full_interview_asks_exactly_six_scored_questions(active_engine, fake_ai):
    fake_ai.scores = [3, 5, 6, 7, 8, 9]

    submissions = await run_to_completion(active_engine)

    candidate = current(active_engine)

    # opening + follow-up + six questions + conclusion
    assert submissions == 8
    assert len(fake_ai.step_calls) == 8
    assert len(candidate.ai_questions()) == 9
    assert candidate.evaluated_answer_count() == 6
    assert candidate.scores == [3, 5, 6, 7, 8, 9]
    assert len(fake_ai.evaluations) == 6
    assert active_engine.session.status == InterviewStatus.COMPLETED
    assert candidate.summary == "Strong candidate."
    assert candidate.final_score == 82
    assert fake_ai.summary_calls == 1


async def test_provider_timing_is_overridden_by_plan(active_engine, fake_ai):
    await active_engine.submit_answer("Intro")
    fake_ai.steps[1] = InterviewStep(type=StepType.CONVERSATION, content="Chatty", time=999)

    step = await active_engine.submit_answer("Follow-up")

    assert step.type == StepType.QUESTION
    assert step.time == 20
    assert step.content == "Chatty"


async def test_early_conclusion_from_provider_is_overridden(active_engine, fake_ai):
    fake_ai.steps[0] = InterviewStep(type=StepType.CONCLUSION, content="We're done.", time=45)

    step = await active_engine.submit_answer("Intro")

    assert step.type == StepType.CONVERSATION
    assert step.time == 0
    assert active_engine.session.status == InterviewStatus.ACTIVE
    assert current(active_engine).final_score is None


async def test_conclusion_mid_technical_phase_still_asks_six_questions(active_engine, fake_ai):
    # step call 3 generates scored question 2
    fake_ai.steps[2] = InterviewStep(type=StepType.CONCLUSION, content="That's all.", time=0)

    submissions = await run_to_completion(active_engine)

    candidate = current(active_engine)
    assert submissions == 8
    assert candidate.evaluated_answer_count() == 6
    assert len(candidate.scores) == 6
    assert fake_ai.summary_calls == 1


async def test_fallback_step_from_provider_ends_interview(active_engine, fake_ai):
    await active_engine.submit_answer("Intro")
    await active_engine.submit_answer("Follow-up")
    fake_ai.steps[2] = UNPARSABLE_STEP.model_copy()

    step = await active_engine.submit_answer("Answer to Q1")

    assert step.is_fallback
    assert step.type == StepType.CONCLUSION
    assert step.time == 0
    assert active_engine.session.status == InterviewStatus.COMPLETED
    assert current(active_engine).scores == [7]


async def test_step_failure_concludes_with_fallback(active_engine, fake_ai):
    fake_ai.steps[0] = httpx.ConnectError("boom")

    step = await active_engine.submit_answer("Intro")

    assert step == ERROR_STEP
    assert active_engine.session.current_question == ERROR_STEP.content
    assert active_engine.session.timer == 0
    assert active_engine.session.status == InterviewStatus.COMPLETED
    assert current(active_engine).chat_history[-1].text == ERROR_STEP.content


async def test_empty_step_content_concludes(active_engine, fake_ai):
    fake_ai.steps[0] = InterviewStep(type=StepType.QUESTION, content="   ", time=20)

    step = await active_engine.submit_answer("Intro")

    assert step.type == StepType.CONCLUSION
    assert active_engine.session.current_question


async def test_evaluation_failure_scores_zero_and_continues(active_engine, fake_ai):
    await active_engine.submit_answer("Intro")
    await active_engine.submit_answer("Follow-up")
    fake_ai.evaluation_error = RuntimeError("evaluator down")

    step = await active_engine.submit_answer("Answer to Q1")

    candidate = current(active_engine)
    answer = candidate.chat_history[-2]
    assert answer.author == MessageAuthor.USER
    assert answer.score == ERROR_EVALUATION.score == 0
    assert answer.feedback == ERROR_EVALUATION.feedback
    assert candidate.scores == [0]
    assert step.type == StepType.QUESTION


async def test_summary_failure_still_completes(active_engine, fake_ai):
    fake_ai.summary_error = RuntimeError("summary down")

    await run_to_completion(active_engine)

    candidate = current(active_engine)
    assert active_engine.session.status == InterviewStatus.COMPLETED
    assert candidate.summary == ERROR_SUMMARY.summary
    assert candidate.final_score == 0


async def test_final_score_only_set_on_completion(active_engine, fake_ai):
    for _ in range(7):
        await active_engine.submit_answer("answer")
        assert current(active_engine).final_score is None
    await active_engine.submit_answer("last")
    assert current(active_engine).final_score is not None


async def test_submission_after_completion_is_rejected(active_engine, fake_ai):
    await run_to_completion(active_engine)
    turn = active_engine.session.turn

    with pytest.raises(StateTransitionError):
        await active_engine.submit_answer("too late")
    assert active_engine.session.turn == turn


async def test_repeated_identical_answers_are_scored_individually(active_engine, fake_ai):
    fake_ai.scores = [2, 9]
    await active_engine.submit_answer("Intro")
    await active_engine.submit_answer("Follow-up")

    await active_engine.submit_answer("I don't know")
    await active_engine.submit_answer("I don't know")

    answers = [
        m for m in current(active_engine).chat_history
        if m.author == MessageAuthor.USER and m.text == "I don't know"
    ]
    assert [m.score for m in answers] == [2, 9]


async def test_empty_answers_are_scored(active_engine, fake_ai):
    await active_engine.submit_answer("")
    await active_engine.submit_answer("")
    await active_engine.submit_answer("")

    assert current(active_engine).scores == [7]
    assert fake_ai.evaluations[-1][1] == ""


async def test_concurrent_submission_is_rejected(active_engine, fake_ai):
    fake_ai.gate = asyncio.Event()

    first = asyncio.create_task(active_engine.submit_answer("Intro"))
    await asyncio.sleep(0.01)
    assert active_engine.busy
    assert active_engine.session.is_thinking

    with pytest.raises(InterviewBusyError):
        await active_engine.submit_answer("Intro again")

    fake_ai.gate.set()
    await first

    assert not active_engine.busy
    assert not active_engine.session.is_thinking
    user_messages = [
        m for m in current(active_engine).chat_history if m.author == MessageAuthor.USER
    ]
    assert len(user_messages) == 1


async def test_stale_turn_is_ignored(active_engine, fake_ai):
    turn = active_engine.session.turn
    await active_engine.submit_answer("Intro", turn=turn)

    result = await active_engine.submit_answer("Duplicate", turn=turn)

    assert result is None
    assert len(fake_ai.step_calls) == 1


async def test_prior_questions_passed_to_provider(active_engine, fake_ai):
    await active_engine.submit_answer("Intro")
    await active_engine.submit_answer("Follow-up")

    last_call = fake_ai.step_calls[-1]
    assert last_call["prior_questions"] == current(active_engine).ai_questions()[:2]
    assert last_call["model"] == "gemini-pro"
