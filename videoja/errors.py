"""
Exception hierarchy for the studio.

Job errors (submission, remote failure, missing result, timeout, cancel) are
raised to the caller after the reservation has been refunded.
"""

from typing import Any


class VideoJaError(Exception):
    """Base class for every error the studio raises on purpose."""

    code = "VIDEOJA_ERROR"
    status_code = 500

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.message, "details": self.details}


class JobError(VideoJaError):
    """Anything that ends a generation job without a video."""

    code = "JOB_ERROR"
    status_code = 502


class SubmissionError(JobError):
    """The remote service rejected job creation (auth, quota, malformed request)."""

    code = "SUBMISSION_ERROR"


class RemoteGenerationError(JobError):
    """The remote operation finished with an error payload."""

    code = "REMOTE_GENERATION_ERROR"


class MissingResultError(RemoteGenerationError):
    """The remote operation finished without a playable media reference."""

    code = "MISSING_RESULT"

    def __init__(self, message: str = "No video URI returned.", details: dict[str, Any] | None = None):
        super().__init__(message, details)


class GenerationTimeoutError(JobError):
    code = "GENERATION_TIMEOUT"
    status_code = 504


class GenerationCancelledError(JobError):
    code = "GENERATION_CANCELLED"
    status_code = 409


class CapabilityError(VideoJaError):
    """No usable API credential is available."""

    code = "CAPABILITY_ERROR"
    status_code = 403


class InsufficientCreditsError(VideoJaError):
    code = "INSUFFICIENT_CREDITS"
    status_code = 402

    def __init__(self, balance: int, cost: int):
        super().__init__(
            f"Insufficient credits: {cost} required, {balance} available",
            {"balance": balance, "cost": cost},
        )


class JobInProgressError(VideoJaError):
    code = "JOB_IN_PROGRESS"
    status_code = 409

    def __init__(self, session_id: str):
        super().__init__(
            "A generation job is already running for this session",
            {"session_id": session_id},
        )


class SessionNotFoundError(VideoJaError):
    code = "SESSION_NOT_FOUND"
    status_code = 404

    def __init__(self, session_id: str):
        super().__init__(f"Session '{session_id}' not found", {"session_id": session_id})


class InvalidReferenceImageError(VideoJaError, ValueError):
    """Raised from model validators, so pydantic reports it as a validation error."""

    code = "INVALID_REFERENCE_IMAGE"
    status_code = 422
