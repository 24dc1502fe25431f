"""
Role definitions for CrispHire

The positions a candidate can be interviewed for.
"""

from enum import Enum


class Role(str, Enum):
    """Target role definitions."""

    FRONTEND = "Frontend Developer"
    BACKEND = "Backend Developer"
    FULL_STACK = "Full Stack Developer"

    @property
    def focus_areas(self) -> list[str]:
        """Topics the interviewer should lean on for this role."""
        areas = {
            "Frontend Developer": [
                "JavaScript and TypeScript", "React and component design",
                "browser rendering and performance", "accessibility", "CSS layout",
            ],
            "Backend Developer": [
                "API design", "databases and data modeling", "concurrency",
                "caching", "service reliability",
            ],
            "Full Stack Developer": [
                "end-to-end feature delivery", "React", "Node.js and APIs",
                "databases", "deployment and debugging across the stack",
            ],
        }
        return areas.get(self.value, [])
