"""
Evaluation models for CrispHire

Per-answer scores and the final interview assessment.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _clamp_int(value: Any, low: int, high: int) -> int:
    """Coerce a model-supplied number into an integer range."""
    try:
        number = int(round(float(value)))
    except (TypeError, ValueError):
        return low
    return max(low, min(high, number))


class AnswerEvaluation(BaseModel):
    """Feedback and score for one timed answer."""

    feedback: str = ""
    score: int = Field(default=0, ge=0, le=10)

    @field_validator("score", mode="before")
    @classmethod
    def clamp_score(cls, value: Any) -> int:
        return _clamp_int(value, 0, 10)

    @field_validator("feedback", mode="before")
    @classmethod
    def coerce_feedback(cls, value: Any) -> str:
        return "" if value is None else str(value)


class FinalAssessment(BaseModel):
    """Prose summary and aggregate 0-100 score for a finished interview."""

    model_config = ConfigDict(populate_by_name=True)

    summary: str = ""
    final_score: int = Field(default=0, ge=0, le=100, alias="finalScore")

    @field_validator("final_score", mode="before")
    @classmethod
    def clamp_final_score(cls, value: Any) -> int:
        return _clamp_int(value, 0, 100)

    @field_validator("summary", mode="before")
    @classmethod
    def coerce_summary(cls, value: Any) -> str:
        return "" if value is None else str(value)
