"""
AI Report Generation Prompts

Produces the hiring manager's final assessment from the full transcript.
"""

from crisphire.models.candidate import Message
from crisphire.prompts.transcript import render_transcript


class ReportPrompts:
    """Prompt templates for the final interview summary."""

    SYSTEM_CONTEXT = """You are a senior hiring manager reviewing an interview transcript."""

    def generate_summary_prompt(self, chat_history: list[Message]) -> str:
        """Generate prompt for the overall interview summary."""
        return f"""{self.SYSTEM_CONTEXT}

Based on the entire transcript, provide a final assessment.
Your response must be a clean JSON object with "summary" (a 2-3 sentence paragraph)
and "finalScore" (an integer from 0 to 100).

Transcript: {render_transcript(chat_history, include_scores=True)}
"""
