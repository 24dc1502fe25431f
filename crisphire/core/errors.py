"""
Exception types raised by the CrispHire core.
"""


class CrispHireError(Exception):
    """Base class for engine errors."""


class StateTransitionError(CrispHireError):
    """Raised when an invalid state transition is attempted."""


class CandidateNotFoundError(CrispHireError):
    """Raised when a candidate id is not on the roster."""


class InterviewBusyError(CrispHireError):
    """Raised when an answer is submitted while another is being processed."""


class ExtractionError(CrispHireError):
    """Raised when résumé details cannot be extracted."""
