from __future__ import annotations

import asyncio
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING

from videoja.models.generation import GeneratedVideo, GenerationJob

if TYPE_CHECKING:
    from videoja.services.ledger import CreditLedger


class SessionStatus(str, Enum):
    IDLE = "idle"
    GENERATING = "generating"
    COMPLETED = "completed"
    FAILED = "failed"


class Session:
    """
    Everything one user owns while the process lives: a ledger, a newest-first
    gallery and at most one outstanding job.
    """

    def __init__(self, email: str, ledger: CreditLedger, session_id: uuid.UUID | None = None):
        self.id = session_id or uuid.uuid4()
        self.email = email
        self.ledger = ledger
        self.videos: list[GeneratedVideo] = []
        self.status = SessionStatus.IDLE
        self.status_message = ""
        self.active_job: GenerationJob | None = None
        self.cancel_event: asyncio.Event | None = None
        self.created_at = datetime.now(timezone.utc)

    @property
    def credits(self) -> int:
        return self.ledger.balance

    @property
    def video_count(self) -> int:
        return len(self.videos)

    @property
    def is_busy(self) -> bool:
        return self.cancel_event is not None

    def add_video(self, video: GeneratedVideo) -> None:
        self.videos.insert(0, video)
