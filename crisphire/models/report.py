"""
Interviewer dashboard models for CrispHire
"""

from enum import Enum

from pydantic import BaseModel, Field

from crisphire.models.candidate import Message, ResumeFile


class CandidateStatus(str, Enum):
    """Roster-level status shown in the dashboard table."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class CandidateRow(BaseModel):
    """One row of the candidate table."""

    id: str
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    skills: list[str] = Field(default_factory=list)
    final_score: int | None = None
    status: CandidateStatus


class CandidateReport(CandidateRow):
    """Full interview details for a single candidate."""

    summary: str | None = None
    scores: list[int] = Field(default_factory=list)
    average_answer_score: float | None = None
    transcript: list[Message] = Field(default_factory=list)
    resume_file: ResumeFile | None = None


class DashboardStats(BaseModel):
    """Headline numbers for the dashboard."""

    total_candidates: int
    completed: int
    average_final_score: float | None = None
