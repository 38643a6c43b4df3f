from videoja.models.generation import (
    AspectRatio,
    GeneratedVideo,
    GenerationJob,
    GenerationRequest,
    ImageJob,
    JobStatus,
    ReferenceImage,
    Resolution,
    TextJob,
)
from videoja.models.session import Session, SessionStatus

__all__ = [
    "AspectRatio", "GeneratedVideo", "GenerationJob", "GenerationRequest", "ImageJob",
    "JobStatus", "ReferenceImage", "Resolution", "TextJob", "Session", "SessionStatus",
]
