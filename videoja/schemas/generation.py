import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from videoja.errors import InvalidReferenceImageError
from videoja.models.generation import AspectRatio, GenerationRequest, ReferenceImage, Resolution
from videoja.utils.images import decode_base64, split_data_url


class ReferenceImagePayload(BaseModel):
    """
    Either a full `data:<mime>;base64,...` URL in `data`, or a bare base64
    payload together with `mime_type`.
    """

    data: str
    mime_type: str | None = None

    def to_reference_image(self) -> ReferenceImage:
        parsed = split_data_url(self.data)
        if parsed:
            mime_type, payload = parsed
        elif self.mime_type:
            mime_type, payload = self.mime_type, self.data
        else:
            raise InvalidReferenceImageError("mime_type is required when data is not a data URL")
        return ReferenceImage(data=decode_base64(payload), media_type=mime_type)


class VideoGenerationRequest(BaseModel):
    prompt: str = ""
    aspect_ratio: AspectRatio = AspectRatio.LANDSCAPE
    resolution: Resolution = Resolution.HD
    image: ReferenceImagePayload | None = None

    def to_domain(self) -> GenerationRequest:
        return GenerationRequest(
            prompt=self.prompt,
            aspect_ratio=self.aspect_ratio,
            resolution=self.resolution,
            image=self.image.to_reference_image() if self.image else None,
        )


class VideoResponse(BaseModel):
    id: uuid.UUID
    uri: str
    prompt: str
    created_at: datetime
    aspect_ratio: AspectRatio
    model: str

    model_config = ConfigDict(from_attributes=True)


class GalleryResponse(BaseModel):
    videos: list[VideoResponse]
    total: int


class CancelResponse(BaseModel):
    cancelled: bool


class ScriptRequest(BaseModel):
    topic: str = Field(min_length=1)


class ScriptResponse(BaseModel):
    script: str | None
