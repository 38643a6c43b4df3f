import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Protocol

from videoja.config import settings
from videoja.errors import CapabilityError

logger = logging.getLogger(__name__)


class CredentialProvider(Protocol):
    api_key: str

    async def has_usable_credential(self) -> bool: ...

    async def request_credential_selection(self, api_key: str | None = None) -> None: ...


class ApiKeyCredentials:
    """Holds the Gemini API key; the connect call may replace it at runtime."""

    def __init__(self, api_key: str = ""):
        self.api_key = api_key.strip()

    async def has_usable_credential(self) -> bool:
        return bool(self.api_key)

    async def request_credential_selection(self, api_key: str | None = None) -> None:
        if api_key is None:
            logger.warning("Credential selection requested without a key; nothing to select")
            return
        self.api_key = api_key.strip()


class CredentialGate:
    """
    Capability check in front of every generation.

    After a selection is requested the check is repeated up to `attempts`
    times, sleeping `delay` seconds between tries and multiplying the delay
    by `backoff` each time.
    """

    def __init__(
        self,
        provider: CredentialProvider,
        attempts: int = settings.CREDENTIAL_RECHECK_ATTEMPTS,
        delay: float = settings.CREDENTIAL_RECHECK_DELAY_SECONDS,
        backoff: float = settings.CREDENTIAL_RECHECK_BACKOFF,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.provider = provider
        self.attempts = max(1, attempts)
        self.delay = delay
        self.backoff = backoff
        self._sleep = sleep

    @property
    def api_key(self) -> str:
        return self.provider.api_key

    async def check(self) -> bool:
        try:
            return await self.provider.has_usable_credential()
        except Exception as e:
            logger.error(f"Error checking API key: {e}")
            return False

    async def connect(self, api_key: str | None = None) -> bool:
        await self.provider.request_credential_selection(api_key)

        delay = self.delay
        for attempt in range(self.attempts):
            if await self.check():
                return True
            if attempt == self.attempts - 1:
                break
            logger.info(f"API key not usable yet, re-checking in {delay:g}s")
            await self._sleep(delay)
            delay *= self.backoff
        return False

    async def require(self) -> str:
        """Return the usable API key or raise CapabilityError."""
        if not await self.check():
            raise CapabilityError("Connect a Google API key with billing enabled to generate videos")
        return self.provider.api_key
