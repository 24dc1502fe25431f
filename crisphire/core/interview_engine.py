"""
Interview Engine - the single authoritative interview backend.

Both presentation modes (chat and avatar) drive this one object. It wires
the session store, the answer orchestrator, the countdown timer and the
speech coordinator together and exposes the operations the API calls.
"""

import logging
from typing import Any, Awaitable, Callable

from crisphire.config.settings import Settings, get_settings
from crisphire.core.audio_processor import SpeechCoordinator
from crisphire.core.countdown import CountdownTimer
from crisphire.core.errors import CrispHireError, InterviewBusyError, StateTransitionError
from crisphire.core.interview_orchestrator import InterviewOrchestrator
from crisphire.core.session_store import InterviewStore
from crisphire.models.candidate import Candidate, CandidateDetails, ResumeFile
from crisphire.models.interview import (
    InterviewMode,
    InterviewSession,
    InterviewStatus,
    InterviewStep,
)
from crisphire.models.roles import Role

logger = logging.getLogger(__name__)


class InterviewEngine:
    """
    Facade over the interview core.

    Submissions from the countdown and from the candidate share one path:
    the countdown cancels on any submission, the orchestrator rejects a
    second in-flight call, and every submission names the turn it answers
    so a stale one is ignored.
    """

    def __init__(
        self,
        ai_reasoning: Any,  # AIReasoningLayer
        audio_processor: Any = None,  # AudioProcessor
        settings: Settings | None = None,
    ):
        self.settings = settings or get_settings()
        self.ai_reasoning = ai_reasoning
        self.audio_processor = audio_processor

        self.store = InterviewStore(
            opening_question=self.settings.opening_question,
            selected_model=self.settings.default_model,
        )
        self.orchestrator = InterviewOrchestrator(self.store, ai_reasoning)
        self.countdown = CountdownTimer(
            on_expire=self._on_countdown_expired,
            on_tick=self._on_countdown_tick,
            tick_seconds=self.settings.countdown_tick_seconds,
        )
        self.speech = SpeechCoordinator(
            speak=self._speak,
            on_speaking=self._on_speaking,
            on_audio=self._on_speech_audio,
        )

        # Answer content staged by the UI, submitted on time-out
        self._draft = ""

        # Event callbacks
        self._session_callbacks: list[Callable[[dict[str, Any]], Awaitable[None]]] = []

    @property
    def session(self) -> InterviewSession:
        return self.store.session

    @property
    def busy(self) -> bool:
        return self.orchestrator.busy

    # =========================================================================
    # SETUP
    # =========================================================================

    async def ingest_candidate(
        self,
        resume_text: str,
        resume_file: ResumeFile | None = None,
    ) -> Candidate:
        """
        Create a candidate from résumé text.

        Raises:
            ExtractionError: If contact details cannot be extracted; no
                state changes in that case
        """
        if self.store.session.status != InterviewStatus.INITIAL:
            raise StateTransitionError(
                f"Cannot ingest a resume in status: {self.store.session.status.value}"
            )
        model = self.store.selected_model
        details = await self.ai_reasoning.extract_candidate_details(resume_text, model=model)
        skills = await self.ai_reasoning.extract_skills(resume_text, model=model)

        candidate = self.store.add_candidate(
            details=details,
            resume_text=resume_text,
            skills=skills,
            resume_file=resume_file,
        )
        await self._notify()
        return candidate

    async def complete_details(self, candidate_id: str, details: CandidateDetails) -> Candidate:
        candidate = self.store.complete_details(candidate_id, details)
        await self._notify()
        return candidate

    async def select_role(self, role: Role) -> None:
        self.store.select_role(role)
        await self._notify()

    async def select_mode(self, mode: InterviewMode) -> None:
        self.store.select_mode(mode)
        await self._notify()

    def select_model(self, model: str) -> None:
        if model not in self.settings.available_models:
            raise ValueError(f"Unknown model: {model}")
        self.store.select_model(model)
        logger.info(f"Selected model: {model}")

    async def start_interview(self, candidate_id: str | None = None) -> InterviewSession:
        session = self.store.start_interview(candidate_id)
        self._draft = ""
        self._after_question()
        await self._notify()
        return session

    # =========================================================================
    # ANSWERS
    # =========================================================================

    def stage_answer(self, text: str) -> None:
        """Stage the in-progress answer; it is what a time-out submits."""
        self._draft = text

    async def submit_answer(
        self,
        answer: str | None = None,
        turn: int | None = None,
    ) -> InterviewStep | None:
        """
        Submit an answer for the current question.

        Args:
            answer: Answer text; the staged draft when omitted
            turn: Turn the answer belongs to; a mismatch means the
                question already moved on and the call is ignored

        Returns:
            The applied step, or None for a stale submission

        Raises:
            StateTransitionError: If no interview is active
            InterviewBusyError: If another answer is being processed
        """
        session = self.store.session
        if session.status != InterviewStatus.ACTIVE:
            raise StateTransitionError(
                f"Cannot submit an answer in status: {session.status.value}"
            )
        if turn is not None and turn != session.turn:
            logger.info(f"Ignoring stale submission for turn {turn} (current {session.turn})")
            return None
        if self.orchestrator.busy:
            raise InterviewBusyError("An answer is already being processed")

        if answer is None:
            answer = self._draft

        self.countdown.cancel()
        self.speech.stop()

        try:
            step = await self.orchestrator.process_answer(
                candidate_id=session.candidate_id,
                question=session.current_question or "",
                answer=answer,
            )
        finally:
            self._draft = ""

        self._after_question()
        await self._notify()
        return step

    async def set_ai_speaking(self, speaking: bool) -> None:
        """Client-reported playback state."""
        await self._on_speaking(speaking)

    async def reset(self) -> InterviewSession:
        """Discard the current session; candidates are kept."""
        self.countdown.cancel()
        self.speech.stop()
        self._draft = ""
        session = self.store.reset()
        await self._notify()
        return session

    async def close(self) -> None:
        self.countdown.cancel()
        self.speech.stop()

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _after_question(self) -> None:
        """Re-arm the countdown and voice the new question."""
        session = self.store.session
        if session.status != InterviewStatus.ACTIVE:
            self.countdown.cancel()
            return
        self.countdown.arm(session.timer, session.turn)
        if (
            session.interview_mode == InterviewMode.AVATAR
            and self.audio_processor is not None
            and session.current_question
        ):
            self.speech.speak_latest(session.current_question)

    async def _on_countdown_expired(self, turn: int) -> None:
        try:
            await self.submit_answer(self._draft, turn=turn)
        except (InterviewBusyError, StateTransitionError) as e:
            logger.info(f"Auto-submit for turn {turn} skipped: {e}")
        except CrispHireError as e:
            logger.error(f"Auto-submit for turn {turn} failed: {e}")

    async def _on_countdown_tick(self, remaining: int) -> None:
        await self._notify(event="tick")

    async def _speak(self, text: str) -> Any:
        return await self.audio_processor.text_to_speech(text)

    async def _on_speaking(self, speaking: bool) -> None:
        self.store.set_ai_speaking(speaking)
        await self._notify(event="speaking")

    async def _on_speech_audio(self, text: str, audio: dict[str, Any]) -> None:
        """Push synthesized speech to the client for playback."""
        await self._broadcast(
            {
                "type": "speech",
                "data": {
                    "text": text,
                    "audio_base64": audio.get("audio_data", ""),
                    "format": audio.get("format", "mp3"),
                    "sample_rate": audio.get("sample_rate", 24000),
                    "duration_seconds": audio.get("duration_seconds", 0),
                },
            }
        )

    def snapshot(self) -> dict[str, Any]:
        """Session state as the UI renders it."""
        data = self.store.session.model_dump(mode="json")
        data["remaining_seconds"] = self.countdown.remaining_seconds
        data["busy"] = self.busy
        data["selected_model"] = self.store.selected_model
        return data

    # =========================================================================
    # EVENT CALLBACKS
    # =========================================================================

    def on_session_update(
        self,
        callback: Callable[[dict[str, Any]], Awaitable[None]],
    ) -> None:
        """Register a callback for session changes."""
        self._session_callbacks.append(callback)

    def remove_session_callback(
        self,
        callback: Callable[[dict[str, Any]], Awaitable[None]],
    ) -> None:
        if callback in self._session_callbacks:
            self._session_callbacks.remove(callback)

    async def _notify(self, event: str = "session") -> None:
        if not self._session_callbacks:
            return
        await self._broadcast({"type": event, "data": self.snapshot()})

    async def _broadcast(self, payload: dict[str, Any]) -> None:
        for callback in list(self._session_callbacks):
            try:
                await callback(payload)
            except Exception as e:
                logger.error(f"Session callback error: {e}")
