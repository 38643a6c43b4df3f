from videoja.schemas.generation import (
    CancelResponse,
    GalleryResponse,
    ReferenceImagePayload,
    ScriptRequest,
    ScriptResponse,
    VideoGenerationRequest,
    VideoResponse,
)
from videoja.schemas.session import (
    CredentialConnect,
    CredentialStatus,
    CreditsResponse,
    PricingResponse,
    SessionCreate,
    SessionResponse,
    TopUpRequest,
)

__all__ = [
    "CancelResponse", "GalleryResponse", "ReferenceImagePayload", "ScriptRequest", "ScriptResponse",
    "VideoGenerationRequest", "VideoResponse",
    "CredentialConnect", "CredentialStatus", "CreditsResponse", "PricingResponse",
    "SessionCreate", "SessionResponse", "TopUpRequest",
]
