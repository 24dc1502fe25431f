"""
API layer for CrispHire

Contains FastAPI routers for:
- Candidate ingestion and the interviewer dashboard
- Interview lifecycle and answer submission
- Audio synthesis
- Metadata and model selection
"""

from crisphire.api.router import api_router

__all__ = ["api_router"]
