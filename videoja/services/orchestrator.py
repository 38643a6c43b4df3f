"""
Job orchestrator: submit one generation request and poll it to a terminal state.

Polling runs at a fixed interval with no backoff. The wait ends when the
remote operation reports done, when the cancellation token is set, or when the
accumulated wait reaches `max_wait` (None waits indefinitely).
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable

from videoja.errors import (
    GenerationCancelledError,
    GenerationTimeoutError,
    MissingResultError,
    RemoteGenerationError,
    SubmissionError,
)
from videoja.models.generation import GenerationJob, GenerationRequest, JobStatus
from videoja.services.veo_client import (
    RemoteJobApi,
    operation_error_message,
    operation_media_uri,
    with_access_key,
)

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]


class JobOrchestrator:
    def __init__(
        self,
        remote: RemoteJobApi,
        poll_interval: float = 5.0,
        max_wait: float | None = None,
        sleep: Sleep = asyncio.sleep,
    ):
        self._remote = remote
        self.poll_interval = poll_interval
        self.max_wait = max_wait
        self._sleep = sleep

    async def submit(self, request: GenerationRequest) -> GenerationJob:
        """
        Issue the single create-operation call for `request`.

        Raises SubmissionError before any polling if the remote call fails.
        """
        remote_job = request.to_remote_job()
        try:
            operation = await self._remote.create_operation(remote_job)
        except Exception as e:
            logger.error(f"Video submission failed: {e}")
            raise SubmissionError(str(e) or e.__class__.__name__) from e

        job = GenerationJob(operation_name=getattr(operation, "name", None) or "", operation=operation)
        logger.info(f"Submitted {remote_job.kind} job {job.operation_name}")
        return job

    async def await_completion(
        self,
        job: GenerationJob,
        cancel: asyncio.Event | None = None,
    ) -> GenerationJob:
        """Poll until the operation is done and return the job in `succeeded`."""
        operation = job.operation
        waited = 0.0

        while not getattr(operation, "done", False):
            self._check_cancelled(job, cancel)
            if self.max_wait is not None and waited >= self.max_wait:
                self._fail(job, f"Gave up after waiting {waited:g}s")
                raise GenerationTimeoutError(
                    f"Video generation did not finish within {self.max_wait:g}s",
                    {"operation": job.operation_name, "waited_seconds": waited},
                )

            await self._pause(cancel)
            waited += self.poll_interval
            self._check_cancelled(job, cancel)

            try:
                operation = await self._remote.poll_operation(operation)
            except Exception as e:
                self._fail(job, str(e))
                raise RemoteGenerationError(
                    f"Polling video operation failed: {e}",
                    {"operation": job.operation_name},
                ) from e

            job.operation = operation
            job.poll_count += 1
            if job.status is JobStatus.PENDING:
                job.status = JobStatus.RUNNING
            logger.info(
                f"Video generation status for {job.operation_name}: "
                f"poll={job.poll_count} metadata={getattr(operation, 'metadata', None)}"
            )

        message = operation_error_message(operation)
        if message:
            self._fail(job, message)
            raise RemoteGenerationError(message, {"operation": job.operation_name})

        uri = operation_media_uri(operation)
        if not uri:
            error = MissingResultError(details={"operation": job.operation_name})
            self._fail(job, error.message)
            raise error

        job.result_uri = with_access_key(uri, self._remote.api_key)
        job.status = JobStatus.SUCCEEDED
        logger.info(f"Video generation succeeded for {job.operation_name}")
        return job

    async def run(self, request: GenerationRequest, cancel: asyncio.Event | None = None) -> GenerationJob:
        job = await self.submit(request)
        return await self.await_completion(job, cancel)

    async def _pause(self, cancel: asyncio.Event | None) -> None:
        if cancel is None:
            await self._sleep(self.poll_interval)
            return

        sleeper = asyncio.ensure_future(self._sleep(self.poll_interval))
        waiter = asyncio.ensure_future(cancel.wait())
        try:
            await asyncio.wait({sleeper, waiter}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            for task in (sleeper, waiter):
                task.cancel()

    def _check_cancelled(self, job: GenerationJob, cancel: asyncio.Event | None) -> None:
        if cancel is not None and cancel.is_set():
            self._fail(job, "Cancelled")
            raise GenerationCancelledError(
                "Video generation was cancelled",
                {"operation": job.operation_name},
            )

    @staticmethod
    def _fail(job: GenerationJob, message: str) -> None:
        job.status = JobStatus.FAILED
        job.error = message
        logger.error(f"Video generation failed for {job.operation_name}: {message}")
