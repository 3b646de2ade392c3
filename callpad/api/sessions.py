"""
API Router: Chip Session Endpoints.

One session per call. Each session owns a LiveParseSession (parser +
chips + call record). Sessions live in process memory only; one that
sees no request for ``session_idle_timeout_seconds`` is closed and
dropped.
"""

from __future__ import annotations

import time
from typing import Any, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from callpad.config import get_settings
from callpad.errors import ChipNotFoundError, ChipTransitionError
from callpad.logging_config import generate_trace_id, get_logger
from callpad.schemas.detection import ItemKind
from callpad.services.live_session import LiveParseSession

logger = get_logger(__name__)
router = APIRouter(prefix="/sessions", tags=["Sessions"])

_sessions: dict[str, LiveParseSession] = {}
_last_seen: dict[str, float] = {}
_clock = time.monotonic


class CreateSessionRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    use_ai: bool = Field(default=False, alias="useAI")
    agent_name: Optional[str] = Field(default=None, alias="agentName")


class SessionInputRequest(BaseModel):
    text: str = ""


class ReclassifyRequest(BaseModel):
    kind: ItemKind


async def evict_idle_sessions() -> int:
    """Close sessions untouched for longer than the idle timeout."""
    cutoff = _clock() - get_settings().session_idle_timeout_seconds
    expired = [sid for sid, seen in _last_seen.items() if seen < cutoff]
    for session_id in expired:
        _last_seen.pop(session_id, None)
        session = _sessions.pop(session_id, None)
        if session is not None:
            await session.close()
    if expired:
        logger.info("idle_sessions_evicted", count=len(expired))
    return len(expired)


async def _get_session(session_id: str) -> LiveParseSession:
    await evict_idle_sessions()
    session = _sessions.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")
    _last_seen[session_id] = _clock()
    return session


def _chip_action(session: LiveParseSession, action: str, chip_id: str, *args: Any) -> dict[str, Any]:
    try:
        chip = getattr(session.chips, action)(chip_id, *args)
    except ChipNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ChipTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return {"chip": chip.to_public(), "record": session.chips.record.to_public()}


@router.post("")
async def create_session(body: CreateSessionRequest | None = None) -> dict[str, Any]:
    """Start a chip session for a new call."""
    await evict_idle_sessions()
    body = body or CreateSessionRequest()
    session_id = generate_trace_id()
    session = LiveParseSession(session_id=session_id, use_ai=body.use_ai)
    if body.agent_name:
        session.chips.record.agent_name = body.agent_name
    _sessions[session_id] = session
    _last_seen[session_id] = _clock()

    logger.info("session_created", session_id=session_id, use_ai=body.use_ai)
    return {"session_id": session_id, "record": session.chips.record.to_public()}


@router.post("/{session_id}/input")
async def submit_input(session_id: str, body: SessionInputRequest) -> dict[str, Any]:
    """Parse a typed line and add its items as chips."""
    session = await _get_session(session_id)
    chips = await session.commit(body.text)
    return {
        "chips": [chip.to_public() for chip in chips],
        "record": session.chips.record.to_public(),
    }


@router.get("/{session_id}/chips")
async def list_chips(session_id: str, pending_only: bool = False) -> dict[str, Any]:
    session = await _get_session(session_id)
    chips = session.chips.pending() if pending_only else session.chips.chips
    return {"data": [chip.to_public() for chip in chips], "total": len(chips)}


@router.post("/{session_id}/chips/{chip_id}/confirm")
async def confirm_chip(session_id: str, chip_id: str) -> dict[str, Any]:
    return _chip_action(await _get_session(session_id), "confirm", chip_id)


@router.post("/{session_id}/chips/{chip_id}/reject")
async def reject_chip(session_id: str, chip_id: str) -> dict[str, Any]:
    return _chip_action(await _get_session(session_id), "reject", chip_id)


@router.post("/{session_id}/chips/{chip_id}/reclassify")
async def reclassify_chip(session_id: str, chip_id: str, body: ReclassifyRequest) -> dict[str, Any]:
    """Change a pending chip's kind; the chip is confirmed and applied."""
    return _chip_action(await _get_session(session_id), "reclassify", chip_id, body.kind)


@router.post("/{session_id}/confirm-all")
async def confirm_all(session_id: str) -> dict[str, Any]:
    session = await _get_session(session_id)
    confirmed = session.chips.confirm_all()
    return {"confirmed": len(confirmed), "record": session.chips.record.to_public()}


@router.get("/{session_id}/record")
async def get_record(session_id: str) -> dict[str, Any]:
    return (await _get_session(session_id)).chips.record.to_public()


@router.delete("/{session_id}")
async def delete_session(session_id: str) -> dict[str, str]:
    _last_seen.pop(session_id, None)
    session = _sessions.pop(session_id, None)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")
    await session.close()
    return {"status": "deleted", "session_id": session_id}


async def close_all_sessions() -> None:
    """Cancel in-flight parsing for every session (shutdown hook)."""
    for session in list(_sessions.values()):
        await session.close()
    _sessions.clear()
    _last_seen.clear()
