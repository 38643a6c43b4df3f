from uuid import UUID

from fastapi import APIRouter, Depends, Response

from videoja.dependencies import get_credential_gate, get_session, get_session_manager
from videoja.models.session import Session
from videoja.schemas.session import SessionCreate, SessionResponse
from videoja.services.credentials import CredentialGate
from videoja.services.session_manager import SessionManager

router = APIRouter(prefix="/api/sessions", tags=["sessions"])


@router.post("/", response_model=SessionResponse, status_code=201)
async def create_session(
    session_data: SessionCreate = SessionCreate(),
    sessions: SessionManager = Depends(get_session_manager),
    gate: CredentialGate = Depends(get_credential_gate),
):
    """Open a session with the welcome bonus. Requires a connected API key."""
    await gate.require()
    session = sessions.create(session_data.email)
    return SessionResponse.model_validate(session)


@router.get("/{session_id}", response_model=SessionResponse)
async def get_session_endpoint(session: Session = Depends(get_session)):
    """Get a session by ID, including its current status signal."""
    return SessionResponse.model_validate(session)


@router.delete("/{session_id}", status_code=204)
async def close_session(session_id: UUID, sessions: SessionManager = Depends(get_session_manager)):
    """
    Log out: cancel any running job, disconnect the session's sockets and drop
    its credits and gallery.
    """
    await sessions.close(session_id)
    return Response(status_code=204)
