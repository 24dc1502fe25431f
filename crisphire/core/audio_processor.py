"""
Audio Processing Layer for CrispHire

Handles:
- Text-to-Speech (TTS) using edge-tts for the avatar interviewer's voice
- Playback coordination with the session's "AI speaking" flag

Voice capture is done in the browser and arrives as plain answer text.
"""

import asyncio
import base64
import logging
from typing import Any, Awaitable, Callable

import edge_tts

from crisphire.config.settings import Settings, get_settings

logger = logging.getLogger(__name__)


class AudioProcessor:
    """Synthesizes interviewer speech with Edge TTS (Microsoft)."""

    EDGE_VOICES = {
        "male": "en-US-GuyNeural",
        "female": "en-US-JennyNeural",
        "professional": "en-US-AriaNeural",
        "default": "en-US-GuyNeural",
    }

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()

    async def close(self):
        """Nothing to release; kept for symmetric shutdown."""

    async def text_to_speech(
        self,
        text: str,
        voice: str | None = None,
    ) -> dict[str, Any]:
        """
        Convert text to speech.

        Args:
            text: Text to synthesize
            voice: Voice to use (optional, uses default)

        Returns:
            Dict with audio_data (base64), format and estimated duration,
            plus "error" when synthesis failed
        """
        voice = voice or self.settings.tts_voice
        edge_voice = self.EDGE_VOICES.get(voice, self.EDGE_VOICES["default"])

        try:
            communicate = edge_tts.Communicate(text, edge_voice)

            # Collect audio chunks
            audio_chunks = []
            async for chunk in communicate.stream():
                if chunk["type"] == "audio":
                    audio_chunks.append(chunk["data"])

            audio_data = b"".join(audio_chunks)

            # Estimate duration (rough: 150 words per minute)
            word_count = len(text.split())
            return {
                "audio_data": base64.b64encode(audio_data).decode("utf-8"),
                "format": "mp3",
                "sample_rate": 24000,
                "duration_seconds": word_count / 150 * 60,
            }

        except Exception as e:
            logger.error(f"Edge TTS failed: {e}")
            return {
                "audio_data": "",
                "format": "mp3",
                "sample_rate": 24000,
                "duration_seconds": 0,
                "error": str(e),
            }


class SpeechCoordinator:
    """
    Voices the latest AI message without gating answer submission.

    Synthesis runs in the background; the finished audio is handed to
    `on_audio(text, audio)` for delivery to the client, and the speaking
    flag stays raised for the clip's duration. Only one playback runs at a
    time; starting a new one cancels the old.
    """

    def __init__(
        self,
        speak: Callable[[str], Awaitable[Any]],
        on_speaking: Callable[[bool], Awaitable[None]],
        on_audio: Callable[[str, dict[str, Any]], Awaitable[None]] | None = None,
    ):
        self._speak = speak
        self._on_speaking = on_speaking
        self._on_audio = on_audio
        self._task: asyncio.Task | None = None
        self.last_audio: Any = None

    @property
    def is_playing(self) -> bool:
        return self._task is not None and not self._task.done()

    def speak_latest(self, text: str) -> asyncio.Task:
        """Start synthesis and playback of `text` in the background."""
        self.stop()
        self._task = asyncio.create_task(self._play(text))
        return self._task

    def stop(self) -> None:
        """Best-effort stop; does not wait for the playback to unwind."""
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def _play(self, text: str) -> None:
        try:
            audio = await self._speak(text)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.warning(f"Speech synthesis failed: {e}")
            return

        self.last_audio = audio
        if isinstance(audio, dict) and audio.get("error"):
            logger.warning(f"Speech synthesis failed: {audio['error']}")
            return

        await self._on_speaking(True)
        try:
            if self._on_audio is not None and isinstance(audio, dict):
                await self._on_audio(text, audio)
            duration = audio.get("duration_seconds", 0) if isinstance(audio, dict) else 0
            if duration > 0:
                await asyncio.sleep(duration)
        finally:
            await self._on_speaking(False)
