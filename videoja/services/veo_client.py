"""
Thin async adapter over the Veo long-running operation API.

Only three remote calls matter: create an operation, poll it, and (implicitly)
authorize playback of the produced media by appending the API key.
"""

import logging
from typing import Any, Protocol
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from google import genai

from videoja.models.generation import RemoteJob

logger = logging.getLogger(__name__)


class RemoteJobApi(Protocol):
    api_key: str

    async def create_operation(self, job: RemoteJob) -> Any: ...

    async def poll_operation(self, operation: Any) -> Any: ...


def with_access_key(uri: str, api_key: str) -> str:
    """Return `uri` with the API key added as the `key` query parameter."""
    parts = urlsplit(uri)
    query = [(k, v) for k, v in parse_qsl(parts.query, keep_blank_values=True) if k != "key"]
    query.append(("key", api_key))
    return urlunsplit(parts._replace(query=urlencode(query)))


def operation_error_message(operation: Any) -> str | None:
    error = getattr(operation, "error", None)
    if not error:
        return None
    if isinstance(error, dict):
        return str(error.get("message") or error)
    return str(getattr(error, "message", None) or error)


def operation_media_uri(operation: Any) -> str | None:
    response = getattr(operation, "response", None) or getattr(operation, "result", None)
    videos = getattr(response, "generated_videos", None) if response else None
    if not videos:
        return None
    video = getattr(videos[0], "video", None)
    return getattr(video, "uri", None) if video else None


class VeoClient:
    """Creates and polls video operations. Build a fresh one per API key."""

    def __init__(self, api_key: str, model: str, client: genai.Client | None = None):
        self.api_key = api_key
        self.model = model
        self._client = client or genai.Client(api_key=api_key)

    async def create_operation(self, job: RemoteJob) -> Any:
        logger.info(f"Creating {job.kind} video operation on {self.model}")
        return await self._client.aio.models.generate_videos(
            model=self.model,
            config=job.video_config(),
            **job.source_kwargs(),
        )

    async def poll_operation(self, operation: Any) -> Any:
        return await self._client.aio.operations.get(operation)
