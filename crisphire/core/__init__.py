"""
Core business logic modules for CrispHire

Contains:
- Turn Classifier: Phase, difficulty and time budget from the transcript
- AI Reasoning: Extraction, step generation, evaluation and summary
- Session Store: Roster and the single session state machine
- Interview Orchestrator: Per-answer control loop
- Countdown Timer: Per-question auto-submit
- Interview Engine: Facade used by the API
- Report Generator: Interviewer dashboard views
"""

from crisphire.core.turn_classifier import TurnPlan, classify_turn
from crisphire.core.ai_reasoning import AIReasoningLayer
from crisphire.core.audio_processor import AudioProcessor, SpeechCoordinator
from crisphire.core.countdown import CountdownTimer
from crisphire.core.session_store import InterviewStore
from crisphire.core.interview_orchestrator import InterviewOrchestrator
from crisphire.core.interview_engine import InterviewEngine
from crisphire.core.report_generator import ReportGenerator

__all__ = [
    "TurnPlan",
    "classify_turn",
    "AIReasoningLayer",
    "AudioProcessor",
    "SpeechCoordinator",
    "CountdownTimer",
    "InterviewStore",
    "InterviewOrchestrator",
    "InterviewEngine",
    "ReportGenerator",
]
