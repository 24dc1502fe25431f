"""
API Dependencies

Provides the process-wide engine and its collaborators.
Manages singleton instances of core components.
"""

import logging

from fastapi import HTTPException

from crisphire.core.ai_reasoning import AIReasoningLayer
from crisphire.core.audio_processor import AudioProcessor
from crisphire.core.errors import (
    CandidateNotFoundError,
    ExtractionError,
    InterviewBusyError,
    StateTransitionError,
)
from crisphire.core.interview_engine import InterviewEngine
from crisphire.core.report_generator import ReportGenerator

logger = logging.getLogger(__name__)


# ============================================================================
# SINGLETON INSTANCES
# ============================================================================

_engine: InterviewEngine | None = None
_audio_processor: AudioProcessor | None = None


def get_audio_processor() -> AudioProcessor:
    """Get the audio processor singleton."""
    global _audio_processor

    if _audio_processor is None:
        _audio_processor = AudioProcessor()

    return _audio_processor


def get_engine() -> InterviewEngine:
    """
    Get the interview engine singleton.

    Lazily initializes all required components.
    """
    global _engine

    if _engine is None:
        _engine = InterviewEngine(
            ai_reasoning=AIReasoningLayer(),
            audio_processor=get_audio_processor(),
        )
        logger.info("Interview engine initialized")

    return _engine


def get_report_generator() -> ReportGenerator:
    """Dashboard views over the engine's store."""
    return ReportGenerator(get_engine().store)


async def cleanup():
    """Cleanup resources on shutdown."""
    global _engine, _audio_processor

    if _engine:
        await _engine.close()
        if _engine.ai_reasoning:
            await _engine.ai_reasoning.close()
        _engine = None

    if _audio_processor:
        await _audio_processor.close()
        _audio_processor = None


def to_http_exception(error: Exception) -> HTTPException:
    """Map core errors onto HTTP status codes."""
    if isinstance(error, CandidateNotFoundError):
        return HTTPException(status_code=404, detail=str(error))
    if isinstance(error, (InterviewBusyError, StateTransitionError)):
        return HTTPException(status_code=409, detail=str(error))
    if isinstance(error, ExtractionError):
        return HTTPException(status_code=422, detail=str(error))
    if isinstance(error, ValueError):
        return HTTPException(status_code=400, detail=str(error))
    return HTTPException(status_code=500, detail=str(error))
