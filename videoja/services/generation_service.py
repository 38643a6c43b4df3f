"""
Generation flow for one session.

credential check -> one-job guard -> affordability guard -> reserve ->
submit -> poll -> prepend to gallery, or refund and re-raise.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable

from videoja.config import settings
from videoja.errors import InsufficientCreditsError, JobInProgressError, VideoJaError
from videoja.models.generation import GeneratedVideo, GenerationRequest
from videoja.models.session import Session, SessionStatus
from videoja.services.credentials import CredentialGate
from videoja.services.ledger import cost_for
from videoja.services.orchestrator import JobOrchestrator
from videoja.services.veo_client import RemoteJobApi, VeoClient
from videoja.services.ws_manager import ConnectionManager, ws_manager

logger = logging.getLogger(__name__)

RemoteFactory = Callable[[str], RemoteJobApi]


def veo_client_factory(api_key: str) -> RemoteJobApi:
    return VeoClient(api_key=api_key, model=settings.VIDEO_MODEL)


class GenerationService:
    def __init__(
        self,
        gate: CredentialGate,
        remote_factory: RemoteFactory = veo_client_factory,
        model_name: str = settings.VIDEO_MODEL,
        poll_interval: float = settings.POLL_INTERVAL_SECONDS,
        max_wait: float | None = settings.MAX_WAIT_SECONDS,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        notifier: ConnectionManager = ws_manager,
    ):
        self.gate = gate
        self.remote_factory = remote_factory
        self.model_name = model_name
        self.poll_interval = poll_interval
        self.max_wait = max_wait
        self._sleep = sleep
        self._notifier = notifier

    async def generate(
        self,
        session: Session,
        request: GenerationRequest,
        cancel: asyncio.Event | None = None,
    ) -> GeneratedVideo:
        """
        Run one job for the session. `cancel` lets the caller stop it as well;
        `cancel(session)` and closing the session set the same token.
        """
        api_key = await self.gate.require()

        if session.is_busy:
            raise JobInProgressError(str(session.id))

        cost = cost_for(request.resolution)
        if not session.ledger.can_afford(cost):
            raise InsufficientCreditsError(session.ledger.balance, cost)

        # Claim the session before the first await so a second request sees it busy
        if cancel is None:
            cancel = asyncio.Event()
        session.cancel_event = cancel
        session.ledger.reserve(cost)
        session.status = SessionStatus.GENERATING
        session.status_message = "Initializing Veo model..."

        try:
            await self._notify(session, "generation_started", {"cost": cost, "resolution": request.resolution.value})
            await self._notify_credits(session)

            orchestrator = JobOrchestrator(
                self.remote_factory(api_key),
                poll_interval=self.poll_interval,
                max_wait=self.max_wait,
                sleep=self._sleep,
            )
            job = await orchestrator.submit(request)
            session.active_job = job
            session.status_message = "Generating video. This takes a few minutes..."
            job = await orchestrator.await_completion(job, cancel)

        except asyncio.CancelledError:
            session.ledger.refund(cost)
            session.status = SessionStatus.FAILED
            logger.warning(f"Generation for session {session.id} abandoned, credits refunded")
            raise

        except Exception as e:
            session.ledger.refund(cost)
            session.status = SessionStatus.FAILED
            logger.error(f"Generation failed for session {session.id}, {cost} credits refunded: {e}")
            payload = e.to_dict() if isinstance(e, VideoJaError) else {"code": "UNEXPECTED_ERROR", "message": str(e)}
            await self._notify(session, "generation_failed", payload)
            await self._notify_credits(session)
            raise

        else:
            video = GeneratedVideo(
                uri=job.result_uri,
                prompt=request.prompt,
                aspect_ratio=request.aspect_ratio,
                model=self.model_name,
            )
            session.add_video(video)
            session.status = SessionStatus.COMPLETED
            await self._notify(session, "generation_completed", {"video_id": str(video.id), "uri": video.uri})
            return video

        finally:
            session.active_job = None
            session.cancel_event = None
            session.status = SessionStatus.IDLE
            session.status_message = ""

    def cancel(self, session: Session) -> bool:
        """Signal the outstanding job to stop polling. False when nothing is running."""
        if session.cancel_event is None:
            return False
        session.cancel_event.set()
        logger.info(f"Cancellation requested for session {session.id}")
        return True

    async def _notify(self, session: Session, event_type: str, data: dict) -> None:
        await self._notifier.broadcast_to_session(session.id, event_type, data)

    async def _notify_credits(self, session: Session) -> None:
        await self._notify(session, "credits_updated", {"credits": session.credits})
