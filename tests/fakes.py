"""In-memory stand-ins for the Veo operation API and small image helpers."""

from __future__ import annotations

import base64
import io
from types import SimpleNamespace

from PIL import Image

API_KEY = "test-key"
VIDEO_URI = "https://generativelanguage.googleapis.com/v1beta/files/abc:download?alt=media"


def make_operation(done: bool = False, uri: str | None = None, error: dict | None = None, name: str = "operations/op-1"):
    response = None
    if uri is not None:
        response = SimpleNamespace(generated_videos=[SimpleNamespace(video=SimpleNamespace(uri=uri))])
    return SimpleNamespace(name=name, done=done, error=error, response=response, metadata=None)


class FakeRemote:
    """
    Scripted remote job API.

    `create_operation` returns `initial`; each `poll_operation` call returns the
    next entry of `polls`, repeating the last one once the script runs out.
    """

    def __init__(self, initial=None, polls=None, create_error: Exception | None = None, poll_error: Exception | None = None):
        self.api_key = API_KEY
        self.initial = initial if initial is not None else make_operation()
        self.polls = list(polls or [make_operation(done=True, uri=VIDEO_URI)])
        self.create_error = create_error
        self.poll_error = poll_error
        self.created_jobs = []
        self.poll_calls = 0
        self.on_poll = None

    async def create_operation(self, job):
        self.created_jobs.append(job)
        if self.create_error is not None:
            raise self.create_error
        return self.initial

    async def poll_operation(self, operation):
        self.poll_calls += 1
        if self.on_poll is not None:
            self.on_poll()
        if self.poll_error is not None:
            raise self.poll_error
        index = min(self.poll_calls - 1, len(self.polls) - 1)
        return self.polls[index]


def png_bytes(size: tuple[int, int] = (4, 4)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, color=(16, 185, 129)).save(buf, format="PNG")
    return buf.getvalue()


def jpeg_bytes(size: tuple[int, int] = (4, 4)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, color=(16, 185, 129)).save(buf, format="JPEG")
    return buf.getvalue()


def image_bytes(fmt: str, size: tuple[int, int] = (4, 4)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, color=(16, 185, 129)).save(buf, format=fmt)
    return buf.getvalue()


def png_data_url() -> str:
    return "data:image/png;base64," + base64.b64encode(png_bytes()).decode()


