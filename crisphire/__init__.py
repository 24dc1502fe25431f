"""
CrispHire - AI-Driven Timed Interview Engine

Runs a résumé-aware, timed mock interview with escalating question
difficulty, per-answer scoring and a final assessment for the interviewer.
"""

__version__ = "0.1.0"
__author__ = "CrispHire Team"
