"""
API endpoint modules for CrispHire
"""

from crisphire.api.endpoints import audio, candidates, interview, metadata

__all__ = ["audio", "candidates", "interview", "metadata"]
