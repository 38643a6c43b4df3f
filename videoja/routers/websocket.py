from uuid import UUID

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect

from videoja.dependencies import get_session_manager, get_ws_manager
from videoja.errors import SessionNotFoundError
from videoja.services.session_manager import SessionManager
from videoja.services.ws_manager import ConnectionManager

router = APIRouter(tags=["websocket"])

# Application close codes live in 4000-4999; this one mirrors HTTP 404
UNKNOWN_SESSION_CLOSE_CODE = 4404


@router.websocket("/api/sessions/{session_id}/ws")
async def session_ws(
    session_id: UUID,
    websocket: WebSocket,
    sessions: SessionManager = Depends(get_session_manager),
    manager: ConnectionManager = Depends(get_ws_manager),
):
    """
    Live updates for one session.

    On join the client gets `credits_updated` and `session_status`, then:
    - generation_started, generation_completed, generation_failed
    - credits_updated

    Unknown session ids are refused with close code 4404.
    """
    try:
        session = sessions.get(session_id)
    except SessionNotFoundError:
        await websocket.close(code=UNKNOWN_SESSION_CLOSE_CODE)
        return

    await manager.connect(session, websocket)
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        manager.disconnect(session.id, websocket)
