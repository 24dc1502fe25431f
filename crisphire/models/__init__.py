"""
Data models and schemas for CrispHire

Contains Pydantic models for:
- Candidates and transcripts
- Interview sessions and steps
- Evaluation results
- Dashboard views
- Roles
"""

from crisphire.models.candidate import (
    Candidate,
    CandidateDetails,
    Message,
    MessageAuthor,
    ResumeFile,
)
from crisphire.models.evaluation import AnswerEvaluation, FinalAssessment
from crisphire.models.interview import (
    Difficulty,
    InterviewMode,
    InterviewPhase,
    InterviewSession,
    InterviewStatus,
    InterviewStep,
    StepType,
    TurnPlan,
)
from crisphire.models.report import (
    CandidateReport,
    CandidateRow,
    CandidateStatus,
    DashboardStats,
)
from crisphire.models.roles import Role

__all__ = [
    # Candidate
    "Candidate",
    "CandidateDetails",
    "Message",
    "MessageAuthor",
    "ResumeFile",
    # Evaluation
    "AnswerEvaluation",
    "FinalAssessment",
    # Interview
    "Difficulty",
    "InterviewMode",
    "InterviewPhase",
    "InterviewSession",
    "InterviewStatus",
    "InterviewStep",
    "StepType",
    "TurnPlan",
    # Dashboard
    "CandidateReport",
    "CandidateRow",
    "CandidateStatus",
    "DashboardStats",
    # Roles
    "Role",
]
