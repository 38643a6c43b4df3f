from fastapi import APIRouter, Depends

from videoja.dependencies import get_credential_gate
from videoja.schemas.session import CredentialConnect, CredentialStatus
from videoja.services.credentials import CredentialGate

router = APIRouter(prefix="/api/credentials", tags=["credentials"])


@router.get("/", response_model=CredentialStatus)
async def get_credential_status(gate: CredentialGate = Depends(get_credential_gate)):
    return CredentialStatus(connected=await gate.check())


@router.post("/", response_model=CredentialStatus)
async def connect_credential(
    credential: CredentialConnect,
    gate: CredentialGate = Depends(get_credential_gate),
):
    """Select an API key, then re-check it with the configured retry policy."""
    return CredentialStatus(connected=await gate.connect(credential.api_key))
