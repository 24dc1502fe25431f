"""
Turn Classifier - maps a transcript to the next interview phase.

The interview is a two-message conversational intro followed by exactly
six scored questions (two Easy, two Medium, two Hard) and a conclusion.
Everything here is a pure function of the chat history.
"""

from crisphire.models.candidate import Message, MessageAuthor
from crisphire.models.interview import (
    SCORED_QUESTIONS,
    Difficulty,
    InterviewPhase,
    StepType,
    TurnPlan,
)

# AI messages that belong to the intro (opening prompt + one follow-up)
INTRO_AI_MESSAGES = 2

# (first T, last T, difficulty, seconds) keyed on the technical question index T
DIFFICULTY_TABLE: list[tuple[int, int, Difficulty, int]] = [
    (0, 1, Difficulty.EASY, 20),
    (2, 3, Difficulty.MEDIUM, 60),
    (4, 5, Difficulty.HARD, 120),
]


def count_ai_messages(history: list[Message]) -> int:
    return sum(1 for m in history if m.author == MessageAuthor.AI)


def technical_question_count(history: list[Message]) -> int:
    """Number of scored questions already asked."""
    return max(0, count_ai_messages(history) - INTRO_AI_MESSAGES)


def difficulty_for(technical_count: int) -> tuple[Difficulty | None, int]:
    """Difficulty tier and time budget for the question at index T."""
    for first, last, difficulty, seconds in DIFFICULTY_TABLE:
        if first <= technical_count <= last:
            return difficulty, seconds
    return None, 0


def classify_turn(history: list[Message]) -> TurnPlan:
    """Decide the phase, difficulty and time budget of the next AI message."""
    ai_count = count_ai_messages(history)
    technical = max(0, ai_count - INTRO_AI_MESSAGES)
    prior_questions = [m.text for m in history if m.author == MessageAuthor.AI]

    if ai_count <= 1:
        return TurnPlan(
            ai_message_count=ai_count,
            technical_question_count=technical,
            phase=InterviewPhase.INTRO,
            step_type=StepType.CONVERSATION,
            prior_questions=prior_questions,
        )

    if technical >= SCORED_QUESTIONS:
        return TurnPlan(
            ai_message_count=ai_count,
            technical_question_count=technical,
            phase=InterviewPhase.CONCLUSION,
            step_type=StepType.CONCLUSION,
            prior_questions=prior_questions,
        )

    difficulty, seconds = difficulty_for(technical)
    return TurnPlan(
        ai_message_count=ai_count,
        technical_question_count=technical,
        phase=InterviewPhase.TRANSITION if ai_count == INTRO_AI_MESSAGES else InterviewPhase.TECHNICAL,
        step_type=StepType.QUESTION,
        difficulty=difficulty,
        time=seconds,
        question_number=technical + 1,
        prior_questions=prior_questions,
    )
