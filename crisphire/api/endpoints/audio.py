"""
Audio API endpoints

Handles:
- Text-to-speech for the avatar interviewer
"""

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from crisphire.api.dependencies import get_audio_processor

router = APIRouter()


# ============================================================================
# REQUEST/RESPONSE MODELS
# ============================================================================

class TTSRequest(BaseModel):
    """Request for text-to-speech."""
    text: str
    voice: str | None = None


class TTSResponse(BaseModel):
    """Response with generated audio."""
    audio_base64: str
    format: str
    duration_seconds: float
    sample_rate: int


# ============================================================================
# ENDPOINTS
# ============================================================================

@router.post("/tts", response_model=TTSResponse)
async def text_to_speech(request: TTSRequest) -> TTSResponse:
    """
    Convert text to speech.

    Returns base64-encoded MP3 audio.
    """
    if not request.text.strip():
        raise HTTPException(status_code=400, detail="Text is required")

    processor = get_audio_processor()
    result = await processor.text_to_speech(
        text=request.text,
        voice=request.voice,
    )

    if result.get("error"):
        raise HTTPException(
            status_code=502,
            detail=f"TTS failed: {result['error']}"
        )

    return TTSResponse(
        audio_base64=result.get("audio_data", ""),
        format=result.get("format", "mp3"),
        duration_seconds=result.get("duration_seconds", 0),
        sample_rate=result.get("sample_rate", 24000),
    )
