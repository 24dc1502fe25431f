"""
Candidate API endpoints

Handles:
- Résumé ingestion
- Completing missing contact details
- Interviewer dashboard reads
"""

import base64

from fastapi import APIRouter, File, Form, UploadFile
from pydantic import BaseModel

from crisphire.api.dependencies import get_engine, get_report_generator, to_http_exception
from crisphire.core.errors import CrispHireError
from crisphire.models.candidate import CandidateDetails, ResumeFile
from crisphire.models.report import CandidateReport, CandidateRow, DashboardStats

router = APIRouter()


# ============================================================================
# REQUEST/RESPONSE MODELS
# ============================================================================

class CandidateResponse(BaseModel):
    """Candidate as seen right after ingestion or detail completion."""
    id: str
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    skills: list[str] = []
    missing_fields: list[str] = []
    status: str


class DetailsRequest(BaseModel):
    """Operator-supplied contact details."""
    name: str | None = None
    email: str | None = None
    phone: str | None = None


def _candidate_response(candidate, status: str) -> CandidateResponse:
    return CandidateResponse(
        id=candidate.id,
        name=candidate.name,
        email=candidate.email,
        phone=candidate.phone,
        skills=candidate.skills,
        missing_fields=candidate.details.missing_fields(),
        status=status,
    )


# ============================================================================
# INGESTION
# ============================================================================

@router.post("", response_model=CandidateResponse)
async def ingest_candidate(
    resume_text: str = Form(...),
    file: UploadFile | None = File(default=None),
) -> CandidateResponse:
    """
    Create a candidate from résumé text.

    The optional file is stored untouched for the interviewer's preview.
    """
    resume_file = None
    if file is not None:
        content = await file.read()
        resume_file = ResumeFile(
            filename=file.filename or "resume",
            content_type=file.content_type or "application/octet-stream",
            data=base64.b64encode(content).decode("utf-8"),
        )

    engine = get_engine()
    try:
        candidate = await engine.ingest_candidate(resume_text, resume_file=resume_file)
    except (CrispHireError, ValueError) as e:
        raise to_http_exception(e)

    return _candidate_response(candidate, engine.session.status.value)


@router.put("/{candidate_id}/details", response_model=CandidateResponse)
async def complete_details(candidate_id: str, request: DetailsRequest) -> CandidateResponse:
    """Fill in contact details the résumé did not provide."""
    engine = get_engine()
    try:
        candidate = await engine.complete_details(
            candidate_id,
            CandidateDetails(**request.model_dump()),
        )
    except CrispHireError as e:
        raise to_http_exception(e)

    return _candidate_response(candidate, engine.session.status.value)


# ============================================================================
# DASHBOARD
# ============================================================================

@router.get("", response_model=list[CandidateRow])
async def list_candidates(search: str | None = None) -> list[CandidateRow]:
    """Candidate table, highest final score first."""
    return get_report_generator().list_candidates(search)


@router.get("/stats", response_model=DashboardStats)
async def get_stats() -> DashboardStats:
    """Headline dashboard numbers."""
    return get_report_generator().stats()


@router.get("/{candidate_id}", response_model=CandidateReport)
async def get_candidate(candidate_id: str) -> CandidateReport:
    """Full transcript, feedback and final assessment."""
    try:
        return get_report_generator().candidate_report(candidate_id)
    except CrispHireError as e:
        raise to_http_exception(e)
