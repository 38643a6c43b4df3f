"""
Per-session WebSocket fan-out.

Every frame is JSON text: {"event_type": "...", "data": {...}, "timestamp": "..."}.
A socket that joins is first sent the session's balance and status, so a client
that opens the page mid-job sees where the job stands before the next event.
"""

import json
import logging
from datetime import datetime, timezone
from uuid import UUID

from fastapi import WebSocket

from videoja.models.session import Session

logger = logging.getLogger(__name__)

SESSION_CLOSED_CODE = 1000


def encode_event(event_type: str, data: dict) -> str:
    return json.dumps(
        {
            "event_type": event_type,
            "data": data,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
        default=str,
    )


def status_snapshot(session: Session) -> dict:
    return {"status": session.status.value, "status_message": session.status_message}


class ConnectionManager:
    """Tracks the open sockets of each live session."""

    def __init__(self):
        self._connections: dict[UUID, list[WebSocket]] = {}

    def connection_count(self, session_id: UUID) -> int:
        return len(self._connections.get(session_id, []))

    async def connect(self, session: Session, websocket: WebSocket) -> None:
        await websocket.accept()
        self._connections.setdefault(session.id, []).append(websocket)
        await websocket.send_text(encode_event("credits_updated", {"credits": session.credits}))
        await websocket.send_text(encode_event("session_status", status_snapshot(session)))
        logger.info(f"Socket joined session {session.id} ({self.connection_count(session.id)} open)")

    def disconnect(self, session_id: UUID, websocket: WebSocket) -> None:
        sockets = self._connections.get(session_id)
        if sockets is None:
            return
        if websocket in sockets:
            sockets.remove(websocket)
        if not sockets:
            del self._connections[session_id]

    async def broadcast_to_session(self, session_id: UUID, event_type: str, data: dict) -> None:
        """Send an event to every socket of a session, dropping the ones that fail."""
        sockets = self._connections.get(session_id)
        if not sockets:
            return

        message = encode_event(event_type, data)
        stale = []
        for ws in list(sockets):
            try:
                await ws.send_text(message)
            except Exception as e:
                logger.warning(f"Dropping socket of session {session_id}: {e}")
                stale.append(ws)

        for ws in stale:
            self.disconnect(session_id, ws)

    async def close_session(self, session_id: UUID, reason: str = "Session closed") -> int:
        """Close and forget every socket of a session. Returns how many were open."""
        sockets = self._connections.pop(session_id, [])
        for ws in sockets:
            try:
                await ws.close(code=SESSION_CLOSED_CODE, reason=reason)
            except Exception as e:
                logger.warning(f"Socket of session {session_id} was already gone: {e}")
        return len(sockets)


ws_manager = ConnectionManager()
