"""
AI prompt templates for CrispHire

Contains structured prompts for:
- Résumé detail and skill extraction
- Next interview step generation
- Answer evaluation
- Final summary
"""

from crisphire.prompts.resume import ResumePrompts
from crisphire.prompts.interviewer import InterviewerPrompts
from crisphire.prompts.evaluator import EvaluatorPrompts
from crisphire.prompts.report import ReportPrompts

__all__ = [
    "ResumePrompts",
    "InterviewerPrompts",
    "EvaluatorPrompts",
    "ReportPrompts",
]
