"""
Interview API endpoints

Handles interview session lifecycle:
- Role and mode selection
- Starting interviews
- Staging and submitting answers
- Resetting the session
- Real-time session updates over WebSocket
"""

import asyncio
import logging
from typing import Any

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from pydantic import BaseModel

from crisphire.api.dependencies import get_engine, to_http_exception
from crisphire.core.errors import CrispHireError
from crisphire.models.interview import InterviewMode, InterviewStep
from crisphire.models.roles import Role

logger = logging.getLogger(__name__)

router = APIRouter()


# ============================================================================
# REQUEST/RESPONSE MODELS
# ============================================================================

class RoleRequest(BaseModel):
    """Request model for role selection."""
    role: Role


class ModeRequest(BaseModel):
    """Request model for presentation mode selection."""
    mode: InterviewMode


class StartRequest(BaseModel):
    """Request model for starting the interview."""
    candidate_id: str | None = None


class DraftRequest(BaseModel):
    """Answer content staged for auto-submission."""
    text: str = ""


class SubmitAnswerRequest(BaseModel):
    """Request model for submitting an answer."""
    answer: str = ""
    turn: int | None = None


class SubmitAnswerResponse(BaseModel):
    """Response after submitting an answer."""
    ignored: bool = False
    step: InterviewStep | None = None
    session: dict[str, Any]


class SpeakingRequest(BaseModel):
    """Client-reported speech playback state."""
    speaking: bool


# ============================================================================
# REST ENDPOINTS
# ============================================================================

@router.get("")
async def get_session() -> dict[str, Any]:
    """Get the current session state."""
    return get_engine().snapshot()


@router.put("/role")
async def select_role(request: RoleRequest) -> dict[str, Any]:
    """Select the role to interview for."""
    engine = get_engine()
    try:
        await engine.select_role(request.role)
    except CrispHireError as e:
        raise to_http_exception(e)
    return engine.snapshot()


@router.put("/mode")
async def select_mode(request: ModeRequest) -> dict[str, Any]:
    """Select chat or avatar presentation."""
    engine = get_engine()
    try:
        await engine.select_mode(request.mode)
    except CrispHireError as e:
        raise to_http_exception(e)
    return engine.snapshot()


@router.post("/start")
async def start_interview(request: StartRequest | None = None) -> dict[str, Any]:
    """
    Start the interview.

    Seeds the opening "introduce yourself" prompt with no time limit.
    """
    engine = get_engine()
    try:
        await engine.start_interview(request.candidate_id if request else None)
    except CrispHireError as e:
        raise to_http_exception(e)
    return engine.snapshot()


@router.put("/draft")
async def stage_answer(request: DraftRequest) -> dict[str, str]:
    """Stage the in-progress answer; a time-out submits it."""
    get_engine().stage_answer(request.text)
    return {"status": "staged"}


@router.post("/answer", response_model=SubmitAnswerResponse)
async def submit_answer(request: SubmitAnswerRequest) -> SubmitAnswerResponse:
    """
    Submit an answer to the current question.

    The answer is evaluated (timed questions only) and the next step is
    generated before this returns.
    """
    engine = get_engine()
    try:
        step = await engine.submit_answer(request.answer, turn=request.turn)
    except CrispHireError as e:
        raise to_http_exception(e)

    return SubmitAnswerResponse(
        ignored=step is None,
        step=step,
        session=engine.snapshot(),
    )


@router.put("/speaking")
async def set_speaking(request: SpeakingRequest) -> dict[str, Any]:
    """Record whether the client is playing the interviewer's voice."""
    engine = get_engine()
    await engine.set_ai_speaking(request.speaking)
    return engine.snapshot()


@router.post("/reset")
async def reset_session() -> dict[str, Any]:
    """Discard the current session. Candidates are kept."""
    engine = get_engine()
    await engine.reset()
    return engine.snapshot()


# ============================================================================
# WEBSOCKET ENDPOINT
# ============================================================================

@router.websocket("/ws")
async def websocket_session(websocket: WebSocket):
    """
    WebSocket endpoint for real-time session updates.

    Server sends:
    - session: Session state changed (new question, completion, reset)
    - tick: Countdown ticked
    - speaking: AI speaking flag changed
    - speech: Synthesized audio of the new question (avatar mode)
    - pong: Reply to ping

    Client may send:
    - ping
    - draft: {"type": "draft", "text": "..."} to stage the answer
    """
    await websocket.accept()

    engine = get_engine()
    queue: asyncio.Queue[dict[str, Any]] = asyncio.Queue()

    async def forward(payload: dict[str, Any]) -> None:
        await queue.put(payload)

    async def pump() -> None:
        while True:
            payload = await queue.get()
            await websocket.send_json(payload)

    engine.on_session_update(forward)
    sender = asyncio.create_task(pump())

    try:
        await websocket.send_json({"type": "session", "data": engine.snapshot()})
        while True:
            data = await websocket.receive_json()
            message_type = data.get("type")

            if message_type == "ping":
                await queue.put({"type": "pong"})
            elif message_type == "draft":
                engine.stage_answer(str(data.get("text", "")))

    except WebSocketDisconnect:
        logger.info("Session WebSocket disconnected")
    finally:
        engine.remove_session_callback(forward)
        sender.cancel()
