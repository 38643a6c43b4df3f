import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Literal

from google.genai import types
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from videoja.config import settings
from videoja.utils.images import normalize_media_type, verify_reference_image


class AspectRatio(str, Enum):
    LANDSCAPE = "16:9"
    PORTRAIT = "9:16"


class Resolution(str, Enum):
    HD = "720p"
    FULL_HD = "1080p"


class JobStatus(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class ReferenceImage(BaseModel):
    data: bytes
    media_type: str

    model_config = ConfigDict(frozen=True)

    @field_validator("media_type")
    @classmethod
    def normalize(cls, v: str) -> str:
        return normalize_media_type(v)

    @model_validator(mode="after")
    def check_image(self) -> "ReferenceImage":
        verify_reference_image(self.data, self.media_type, settings.MAX_IMAGE_BYTES)
        return self


class _RemoteJobBase(BaseModel):
    aspect_ratio: AspectRatio
    resolution: Resolution

    model_config = ConfigDict(frozen=True)

    def video_config(self) -> types.GenerateVideosConfig:
        return types.GenerateVideosConfig(
            number_of_videos=1,
            aspect_ratio=self.aspect_ratio.value,
            resolution=self.resolution.value,
        )

    def source_kwargs(self) -> dict[str, Any]:
        raise NotImplementedError


class TextJob(_RemoteJobBase):
    """Text-to-video call shape."""

    kind: Literal["text"] = "text"
    prompt: str

    def source_kwargs(self) -> dict[str, Any]:
        return {"prompt": self.prompt}


class ImageJob(_RemoteJobBase):
    """Image-to-video call shape. The prompt is optional but steers the motion."""

    kind: Literal["image"] = "image"
    prompt: str | None = None
    image: ReferenceImage

    def source_kwargs(self) -> dict[str, Any]:
        return {
            "prompt": self.prompt,
            "image": types.Image(image_bytes=self.image.data, mime_type=self.image.media_type),
        }


RemoteJob = TextJob | ImageJob


class GenerationRequest(BaseModel):
    prompt: str = ""
    aspect_ratio: AspectRatio = AspectRatio.LANDSCAPE
    resolution: Resolution = Resolution.HD
    image: ReferenceImage | None = None

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def require_prompt_or_image(self) -> "GenerationRequest":
        if not self.prompt.strip() and self.image is None:
            raise ValueError("Provide a prompt, a reference image, or both")
        return self

    def to_remote_job(self) -> RemoteJob:
        if self.image is not None:
            return ImageJob(
                prompt=self.prompt or None,
                image=self.image,
                aspect_ratio=self.aspect_ratio,
                resolution=self.resolution,
            )
        return TextJob(
            prompt=self.prompt,
            aspect_ratio=self.aspect_ratio,
            resolution=self.resolution,
        )


class GenerationJob(BaseModel):
    """Handle for one remote operation. Mutated only by the polling routine."""

    operation_name: str
    operation: Any = Field(default=None, exclude=True, repr=False)
    status: JobStatus = JobStatus.PENDING
    result_uri: str | None = None
    error: str | None = None
    poll_count: int = 0
    submitted_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    model_config = ConfigDict(arbitrary_types_allowed=True)


class GeneratedVideo(BaseModel):
    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    uri: str
    prompt: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    aspect_ratio: AspectRatio
    model: str

    model_config = ConfigDict(frozen=True)
