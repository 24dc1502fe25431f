"""
Report Generator for CrispHire

Read side of the interviewer dashboard:
- Candidate table (search + score ordering)
- Per-candidate transcript report
- Headline stats
"""

import logging

from crisphire.core.session_store import InterviewStore
from crisphire.models.candidate import Candidate
from crisphire.models.interview import InterviewStatus
from crisphire.models.report import (
    CandidateReport,
    CandidateRow,
    CandidateStatus,
    DashboardStats,
)

logger = logging.getLogger(__name__)


class ReportGenerator:
    """Builds dashboard views from the interview store."""

    def __init__(self, store: InterviewStore):
        self.store = store

    def candidate_status(self, candidate: Candidate) -> CandidateStatus:
        if candidate.final_score is not None:
            return CandidateStatus.COMPLETED
        session = self.store.session
        if session.candidate_id == candidate.id and session.status == InterviewStatus.ACTIVE:
            return CandidateStatus.IN_PROGRESS
        return CandidateStatus.PENDING

    def _row(self, candidate: Candidate) -> CandidateRow:
        return CandidateRow(
            id=candidate.id,
            name=candidate.name,
            email=candidate.email,
            phone=candidate.phone,
            skills=candidate.skills,
            final_score=candidate.final_score,
            status=self.candidate_status(candidate),
        )

    def list_candidates(self, search: str | None = None) -> list[CandidateRow]:
        """
        Candidate table rows.

        Filters by case-insensitive name substring and orders by final
        score, highest first; candidates without a score come last.
        """
        candidates = self.store.list_candidates()
        if search:
            needle = search.lower()
            candidates = [c for c in candidates if needle in (c.name or "").lower()]

        candidates = sorted(
            candidates,
            key=lambda c: (c.final_score is None, -(c.final_score or 0), c.created_at),
        )
        return [self._row(c) for c in candidates]

    def candidate_report(self, candidate_id: str) -> CandidateReport:
        """Full transcript, feedback and final assessment for one candidate."""
        candidate = self.store.require_candidate(candidate_id)
        average = (
            round(sum(candidate.scores) / len(candidate.scores), 2)
            if candidate.scores else None
        )
        return CandidateReport(
            **self._row(candidate).model_dump(),
            summary=candidate.summary,
            scores=list(candidate.scores),
            average_answer_score=average,
            transcript=list(candidate.chat_history),
            resume_file=candidate.resume_file,
        )

    def stats(self) -> DashboardStats:
        candidates = self.store.list_candidates()
        completed = [c for c in candidates if c.summary]
        final_scores = [c.final_score for c in completed if c.final_score is not None]
        return DashboardStats(
            total_candidates=len(candidates),
            completed=len(completed),
            average_final_score=(
                round(sum(final_scores) / len(final_scores), 1) if final_scores else None
            ),
        )
