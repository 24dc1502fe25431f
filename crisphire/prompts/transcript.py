"""Transcript rendering shared by the prompt templates."""

import json

from crisphire.models.candidate import Message


def render_transcript(history: list[Message], include_scores: bool = False) -> str:
    """Serialize the chat history as a JSON array for the model."""
    fields = {"author", "text"}
    if include_scores:
        fields |= {"feedback", "score"}
    entries = [
        message.model_dump(mode="json", include=fields, exclude_none=True)
        for message in history
    ]
    return json.dumps(entries, ensure_ascii=False)
