"""
Shared fixtures for the CrispHire test suite.

The AI layer is replaced by a scripted fake so the interview loop can be
driven deterministically without network access.
"""

import asyncio

import pytest

from crisphire.config.settings import Settings
from crisphire.core.errors import ExtractionError
from crisphire.core.interview_engine import InterviewEngine
from crisphire.core.session_store import InterviewStore
from crisphire.core.turn_classifier import classify_turn
from crisphire.models.candidate import CandidateDetails
from crisphire.models.evaluation import AnswerEvaluation, FinalAssessment
from crisphire.models.interview import InterviewStep
from crisphire.models.roles import Role

OPENING = "Tell me about yourself."

RESUME = """Jane Doe
jane@example.com
+1 555 0100
Senior engineer. React, TypeScript, Node.js, PostgreSQL.
"""


class FakeAI:
    """
    Stand-in for AIReasoningLayer.

    By default it behaves like a well-formed model: every step follows the
    turn plan and every answer scores 7. Individual calls can be scripted
    through `steps` (by call index) and `scores`.
    """

    def __init__(
        self,
        details: CandidateDetails | None = None,
        skills: list[str] | None = None,
        summary: FinalAssessment | None = None,
    ):
        self.details = details or CandidateDetails(
            name="Jane Doe", email="jane@example.com", phone="+1 555 0100"
        )
        self.skills = skills if skills is not None else ["React", "Node.js"]
        self.summary = summary or FinalAssessment(summary="Strong candidate.", final_score=82)

        # call index -> InterviewStep | Exception
        self.steps: dict[int, object] = {}
        self.scores: list[int] = []
        self.evaluation_error: Exception | None = None
        self.summary_error: Exception | None = None
        self.extraction_error: Exception | None = None

        # When set, step generation waits on it
        self.gate: asyncio.Event | None = None

        self.step_calls: list[dict] = []
        self.evaluations: list[tuple[str, str]] = []
        self.summary_calls = 0

    async def extract_candidate_details(self, resume_text, model=None):
        if self.extraction_error is not None:
            raise self.extraction_error
        if not resume_text.strip():
            raise ExtractionError("Resume text is empty")
        return self.details

    async def extract_skills(self, resume_text, model=None):
        return list(self.skills)

    async def generate_next_step(
        self, role, resume_text, chat_history, prior_questions=None, model=None
    ):
        index = len(self.step_calls)
        self.step_calls.append(
            {
                "role": role,
                "history": list(chat_history),
                "prior_questions": list(prior_questions or []),
                "model": model,
            }
        )
        if self.gate is not None:
            await self.gate.wait()

        scripted = self.steps.get(index)
        if isinstance(scripted, Exception):
            raise scripted
        if scripted is not None:
            return scripted

        plan = classify_turn(chat_history)
        content = (
            "Thanks for your time today."
            if plan.is_conclusion
            else f"Step {index + 1}: {plan.phase.value}"
        )
        return InterviewStep(type=plan.step_type, content=content, time=plan.time)

    async def evaluate_answer(self, question, answer, model=None):
        self.evaluations.append((question, answer))
        if self.evaluation_error is not None:
            raise self.evaluation_error
        score = self.scores.pop(0) if self.scores else 7
        return AnswerEvaluation(feedback=f"Feedback on: {answer}", score=score)

    async def summarize(self, chat_history, model=None):
        self.summary_calls += 1
        if self.summary_error is not None:
            raise self.summary_error
        return self.summary

    async def close(self):
        pass


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        opening_question=OPENING,
        countdown_tick_seconds=0.01,
    )


@pytest.fixture
def fake_ai():
    return FakeAI()


@pytest.fixture
def store():
    return InterviewStore(opening_question=OPENING, selected_model="gemini-pro")


@pytest.fixture
async def engine(fake_ai, settings):
    engine = InterviewEngine(ai_reasoning=fake_ai, settings=settings)
    yield engine
    await engine.close()


@pytest.fixture
async def active_engine(engine):
    """Engine with a candidate ingested and the interview started."""
    await engine.ingest_candidate(RESUME)
    await engine.select_role(Role.FULL_STACK)
    await engine.start_interview()
    return engine
