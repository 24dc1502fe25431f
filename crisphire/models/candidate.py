"""
Candidate roster models for CrispHire
"""

from datetime import datetime, timezone
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, Field

from crisphire.models.evaluation import AnswerEvaluation, FinalAssessment


class MessageAuthor(str, Enum):
    """Who wrote a transcript message."""

    AI = "ai"
    USER = "user"


class Message(BaseModel):
    """A single transcript entry."""

    # Assigned at append time, used to correlate evaluations
    seq: int = Field(..., ge=1)
    author: MessageAuthor
    text: str

    # Only set on evaluated user answers
    feedback: str | None = None
    score: int | None = Field(default=None, ge=0, le=10)


class CandidateDetails(BaseModel):
    """Contact details extracted from (or completed after) a résumé."""

    name: str | None = None
    email: str | None = None
    phone: str | None = None

    def missing_fields(self) -> list[str]:
        """Names of contact fields that are empty."""
        return [
            field for field in ("name", "email", "phone")
            if not getattr(self, field)
        ]


class ResumeFile(BaseModel):
    """Opaque résumé blob kept for the interviewer's preview."""

    filename: str
    content_type: str
    data: str  # base64


class Candidate(BaseModel):
    """A candidate on the roster, with transcript and scoring."""

    id: str = Field(default_factory=lambda: uuid4().hex[:12])
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    # Contact details (may be unfilled after extraction)
    name: str | None = None
    email: str | None = None
    phone: str | None = None

    skills: list[str] = Field(default_factory=list)
    resume_text: str = Field(..., frozen=True)
    resume_file: ResumeFile | None = None

    # Conversation and scoring
    chat_history: list[Message] = Field(default_factory=list)
    scores: list[int] = Field(default_factory=list)

    # Final results, set once at conclusion
    summary: str | None = None
    final_score: int | None = Field(default=None, ge=0, le=100)

    @property
    def details(self) -> CandidateDetails:
        return CandidateDetails(name=self.name, email=self.email, phone=self.phone)

    def has_missing_details(self) -> bool:
        return bool(self.details.missing_fields())

    def append_message(self, author: MessageAuthor, text: str) -> Message:
        """Append a message to the transcript and return it with its sequence id."""
        seq = self.chat_history[-1].seq + 1 if self.chat_history else 1
        message = Message(seq=seq, author=author, text=text)
        self.chat_history.append(message)
        return message

    def attach_evaluation(self, seq: int, evaluation: AnswerEvaluation) -> None:
        """Attach an evaluation to the user message with the given seq and record its score."""
        for message in reversed(self.chat_history):
            if message.seq == seq:
                if message.author != MessageAuthor.USER:
                    raise ValueError(f"Message {seq} is not a candidate answer")
                message.feedback = evaluation.feedback
                message.score = evaluation.score
                self.scores.append(evaluation.score)
                return
        raise ValueError(f"No message with seq {seq}")

    def set_final_results(self, assessment: FinalAssessment) -> None:
        self.summary = assessment.summary
        self.final_score = assessment.final_score

    def ai_questions(self) -> list[str]:
        """Texts of every AI message so far, in order."""
        return [m.text for m in self.chat_history if m.author == MessageAuthor.AI]

    def evaluated_answer_count(self) -> int:
        return sum(
            1 for m in self.chat_history
            if m.author == MessageAuthor.USER and m.score is not None
        )
