"""
Interview session and step models for CrispHire
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from crisphire.models.roles import Role


class InterviewMode(str, Enum):
    """Presentation mode. Both modes share one engine."""

    CHAT = "chat"
    AVATAR = "avatar"


class InterviewStatus(str, Enum):
    """Session state machine states."""

    INITIAL = "initial"  # No résumé ingested yet
    DETAILS_MISSING = "details_missing"  # Contact details incomplete
    PENDING = "pending"  # Ready, waiting for role/mode and start
    ACTIVE = "active"  # Interview in progress
    COMPLETED = "completed"  # Final assessment recorded


class StepType(str, Enum):
    """Kind of the next AI message."""

    CONVERSATION = "conversation"  # Untimed intro follow-up
    QUESTION = "question"  # Scored technical question
    CONCLUSION = "conclusion"  # Closing statement, ends the interview


class Difficulty(str, Enum):
    """Scored question difficulty tiers."""

    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


class InterviewPhase(str, Enum):
    """Segment of the interview a turn falls into."""

    INTRO = "intro"
    TRANSITION = "transition"
    TECHNICAL = "technical"
    CONCLUSION = "conclusion"


# Scored questions per interview
SCORED_QUESTIONS = 6


class InterviewStep(BaseModel):
    """The provider's decision for the next AI message."""

    type: StepType
    content: str
    time: int = Field(default=0, ge=0)

    # Set on the fixed steps that replace a failed or unusable provider call
    is_fallback: bool = Field(default=False, exclude=True)


class InterviewSession(BaseModel):
    """The single active interview's transient state."""

    candidate_id: str | None = None
    status: InterviewStatus = InterviewStatus.INITIAL
    selected_role: Role | None = None
    interview_mode: InterviewMode = InterviewMode.CHAT

    # Current question shown to the candidate
    current_question: str | None = None
    timer: int = 0  # seconds allotted; 0 means untimed
    turn: int = 0  # increments with every new question

    # UI sync flags
    is_ai_speaking: bool = False
    is_thinking: bool = False

    # Timing
    started_at: datetime | None = None
    completed_at: datetime | None = None

    def is_timed(self) -> bool:
        return self.timer > 0


class TurnPlan(BaseModel):
    """What the next AI message has to be."""

    ai_message_count: int
    technical_question_count: int
    phase: InterviewPhase
    step_type: StepType
    difficulty: Difficulty | None = None
    time: int = 0
    question_number: int | None = None  # 1-based number of the scored question to ask
    prior_questions: list[str] = Field(default_factory=list)

    @property
    def is_conclusion(self) -> bool:
        return self.step_type == StepType.CONCLUSION
