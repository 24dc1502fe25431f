"""
Main API router for CrispHire

Aggregates all API routes and provides the main application router.
"""

from fastapi import APIRouter

from crisphire.api.endpoints import audio, candidates, interview, metadata

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(
    candidates.router,
    prefix="/candidates",
    tags=["Candidates"]
)

api_router.include_router(
    interview.router,
    prefix="/interview",
    tags=["Interview"]
)

api_router.include_router(
    audio.router,
    prefix="/audio",
    tags=["Audio"]
)

api_router.include_router(
    metadata.router,
    prefix="/metadata",
    tags=["Metadata"]
)
