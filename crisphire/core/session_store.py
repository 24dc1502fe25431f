"""
Session State Machine - the process-wide interview store.

Owns the candidate roster and the single active interview session. Every
mutation of either goes through the operations defined here; nothing
else writes to a Candidate or the InterviewSession directly.

States:
    INITIAL → (DETAILS_MISSING | PENDING) → ACTIVE → COMPLETED
    reset() returns to INITIAL from anywhere and keeps the roster.
"""

import logging
from datetime import datetime, timezone

from crisphire.core.errors import CandidateNotFoundError, StateTransitionError
from crisphire.models.candidate import (
    Candidate,
    CandidateDetails,
    Message,
    MessageAuthor,
    ResumeFile,
)
from crisphire.models.evaluation import AnswerEvaluation, FinalAssessment
from crisphire.models.interview import (
    InterviewMode,
    InterviewSession,
    InterviewStatus,
    InterviewStep,
)
from crisphire.models.roles import Role

logger = logging.getLogger(__name__)


class InterviewStore:
    """
    In-memory roster plus the one active session.

    State is process-local and volatile; candidates are never deleted.
    """

    VALID_TRANSITIONS: dict[InterviewStatus, list[InterviewStatus]] = {
        InterviewStatus.INITIAL: [InterviewStatus.DETAILS_MISSING, InterviewStatus.PENDING],
        InterviewStatus.DETAILS_MISSING: [InterviewStatus.PENDING],
        InterviewStatus.PENDING: [InterviewStatus.ACTIVE],
        InterviewStatus.ACTIVE: [InterviewStatus.COMPLETED],
        InterviewStatus.COMPLETED: [],  # Terminal until reset
    }

    # Role and mode are fixed once the interview starts
    SETUP_STATES = (
        InterviewStatus.INITIAL,
        InterviewStatus.DETAILS_MISSING,
        InterviewStatus.PENDING,
    )

    def __init__(self, opening_question: str, selected_model: str):
        self.opening_question = opening_question
        self.selected_model = selected_model
        self._candidates: dict[str, Candidate] = {}
        self.session = InterviewSession()

    # =========================================================================
    # ROSTER
    # =========================================================================

    def get_candidate(self, candidate_id: str) -> Candidate | None:
        return self._candidates.get(candidate_id)

    def require_candidate(self, candidate_id: str) -> Candidate:
        candidate = self._candidates.get(candidate_id)
        if candidate is None:
            raise CandidateNotFoundError(f"Candidate not found: {candidate_id}")
        return candidate

    def list_candidates(self) -> list[Candidate]:
        return list(self._candidates.values())

    def current_candidate(self) -> Candidate | None:
        if self.session.candidate_id is None:
            return None
        return self._candidates.get(self.session.candidate_id)

    # =========================================================================
    # STATE MACHINE
    # =========================================================================

    def _transition(self, new_status: InterviewStatus) -> None:
        old_status = self.session.status
        valid_next = self.VALID_TRANSITIONS.get(old_status, [])
        if new_status not in valid_next:
            raise StateTransitionError(
                f"Invalid transition from {old_status.value} to {new_status.value}. "
                f"Valid transitions: {[s.value for s in valid_next]}"
            )
        self.session.status = new_status
        logger.info(f"Session: {old_status.value} → {new_status.value}")

    def add_candidate(
        self,
        details: CandidateDetails,
        resume_text: str,
        skills: list[str] | None = None,
        resume_file: ResumeFile | None = None,
    ) -> Candidate:
        """Create a candidate from an ingested résumé and make it current."""
        candidate = Candidate(
            name=details.name,
            email=details.email,
            phone=details.phone,
            skills=list(skills or []),
            resume_text=resume_text,
            resume_file=resume_file,
        )
        target = (
            InterviewStatus.DETAILS_MISSING
            if candidate.has_missing_details()
            else InterviewStatus.PENDING
        )
        self._transition(target)
        self._candidates[candidate.id] = candidate
        self.session.candidate_id = candidate.id
        logger.info(f"Added candidate {candidate.id} (missing: {details.missing_fields()})")
        return candidate

    def complete_details(self, candidate_id: str, details: CandidateDetails) -> Candidate:
        """Apply operator-supplied details; always advances to PENDING."""
        if self.session.candidate_id != candidate_id:
            raise StateTransitionError("Only the current candidate's details can be completed")
        candidate = self.require_candidate(candidate_id)
        self._transition(InterviewStatus.PENDING)
        candidate.name = details.name or candidate.name
        candidate.email = details.email or candidate.email
        candidate.phone = details.phone or candidate.phone
        return candidate

    def select_role(self, role: Role) -> None:
        if self.session.status not in self.SETUP_STATES:
            raise StateTransitionError("Role cannot change once the interview has started")
        self.session.selected_role = role

    def select_mode(self, mode: InterviewMode) -> None:
        if self.session.status not in self.SETUP_STATES:
            raise StateTransitionError("Mode cannot change once the interview has started")
        self.session.interview_mode = mode

    def select_model(self, model: str) -> None:
        self.selected_model = model

    def start_interview(self, candidate_id: str | None = None) -> InterviewSession:
        """
        Seed the opening prompt and enter ACTIVE with an untimed intro.

        Only the session's current candidate can be started; an explicit
        `candidate_id` must match it.
        """
        if self.session.candidate_id is None:
            raise StateTransitionError("No candidate to interview")
        if candidate_id is not None and candidate_id != self.session.candidate_id:
            raise StateTransitionError(
                f"Candidate {candidate_id} is not the session's current candidate"
            )
        candidate_id = self.session.candidate_id
        if self.session.selected_role is None:
            raise StateTransitionError("A role must be selected before starting")
        candidate = self.require_candidate(candidate_id)

        self._transition(InterviewStatus.ACTIVE)
        self.session.candidate_id = candidate.id
        self.session.started_at = datetime.now(timezone.utc)
        candidate.append_message(MessageAuthor.AI, self.opening_question)
        self.session.current_question = self.opening_question
        self.session.timer = 0
        self.session.turn = 1
        return self.session

    def _require_active(self, candidate_id: str) -> Candidate:
        if self.session.status != InterviewStatus.ACTIVE:
            raise StateTransitionError(
                f"Interview is not active (status: {self.session.status.value})"
            )
        if self.session.candidate_id != candidate_id:
            raise StateTransitionError("Candidate is not in the active interview")
        return self.require_candidate(candidate_id)

    def append_message(self, candidate_id: str, author: MessageAuthor, text: str) -> Message:
        candidate = self._require_active(candidate_id)
        return candidate.append_message(author, text)

    def attach_evaluation(
        self,
        candidate_id: str,
        seq: int,
        evaluation: AnswerEvaluation,
    ) -> None:
        candidate = self._require_active(candidate_id)
        candidate.attach_evaluation(seq, evaluation)

    def apply_step(self, step: InterviewStep) -> InterviewSession:
        """Advance turn: show the step's content as the current question."""
        if self.session.status != InterviewStatus.ACTIVE:
            raise StateTransitionError(
                f"Cannot advance turn in status: {self.session.status.value}"
            )
        self.session.current_question = step.content
        self.session.timer = step.time or 0
        self.session.turn += 1
        return self.session

    def complete_interview(self, candidate_id: str, assessment: FinalAssessment) -> InterviewSession:
        """Record the final results and enter the terminal COMPLETED state."""
        candidate = self._require_active(candidate_id)
        self._transition(InterviewStatus.COMPLETED)
        candidate.set_final_results(assessment)
        self.session.timer = 0
        self.session.completed_at = datetime.now(timezone.utc)
        return self.session

    def set_ai_speaking(self, speaking: bool) -> None:
        self.session.is_ai_speaking = speaking

    def set_thinking(self, thinking: bool) -> None:
        self.session.is_thinking = thinking

    def reset(self) -> InterviewSession:
        """Discard the session; the roster is kept."""
        old_status = self.session.status
        self.session = InterviewSession()
        logger.info(f"Session: {old_status.value} → {InterviewStatus.INITIAL.value} (reset)")
        return self.session
