"""
Process-wide service instances and the FastAPI dependencies that hand them out.

Tests swap any of these through `app.dependency_overrides`.
"""

from uuid import UUID

from fastapi import Depends

from videoja.config import settings
from videoja.models.session import Session
from videoja.services.credentials import ApiKeyCredentials, CredentialGate
from videoja.services.generation_service import GenerationService
from videoja.services.script_writer import ScriptWriter
from videoja.services.session_manager import SessionManager, session_manager
from videoja.services.ws_manager import ConnectionManager, ws_manager

credential_gate = CredentialGate(ApiKeyCredentials(settings.GEMINI_API_KEY))
generation_service = GenerationService(credential_gate)


def get_session_manager() -> SessionManager:
    return session_manager


def get_ws_manager() -> ConnectionManager:
    return ws_manager


def get_credential_gate() -> CredentialGate:
    return credential_gate


def get_generation_service() -> GenerationService:
    return generation_service


def get_session(
    session_id: UUID,
    sessions: SessionManager = Depends(get_session_manager),
) -> Session:
    return sessions.get(session_id)


async def get_script_writer(gate: CredentialGate = Depends(get_credential_gate)) -> ScriptWriter:
    # A fresh client per call picks up a key connected after startup
    api_key = await gate.require()
    return ScriptWriter(api_key=api_key, model=settings.SCRIPT_MODEL)
