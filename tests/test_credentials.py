"""Tests for the API key capability check and its re-check policy."""

from unittest.mock import AsyncMock

import pytest

from videoja.errors import CapabilityError
from videoja.services.credentials import ApiKeyCredentials, CredentialGate


class FlakyProvider:
    """Reports a usable credential only from the `ready_after`-th check on."""

    def __init__(self, ready_after: int):
        self.api_key = ""
        self.ready_after = ready_after
        self.checks = 0
        self.selected = []

    async def has_usable_credential(self) -> bool:
        self.checks += 1
        return self.checks >= self.ready_after

    async def request_credential_selection(self, api_key=None) -> None:
        self.selected.append(api_key)


@pytest.mark.asyncio
async def test_connect_with_key_succeeds_immediately(fake_sleep):
    gate = CredentialGate(ApiKeyCredentials(""), sleep=fake_sleep)

    assert await gate.connect("  AIza-test  ") is True

    assert gate.api_key == "AIza-test"
    fake_sleep.assert_not_called()


@pytest.mark.asyncio
async def test_connect_rechecks_once_after_delay(fake_sleep):
    provider = FlakyProvider(ready_after=2)
    gate = CredentialGate(provider, attempts=2, delay=1.0, backoff=2.0, sleep=fake_sleep)

    assert await gate.connect("key") is True

    assert provider.selected == ["key"]
    assert provider.checks == 2
    fake_sleep.assert_awaited_once_with(1.0)


@pytest.mark.asyncio
async def test_connect_gives_up_after_attempts_with_backoff(fake_sleep):
    provider = FlakyProvider(ready_after=10)
    gate = CredentialGate(provider, attempts=3, delay=1.0, backoff=2.0, sleep=fake_sleep)

    assert await gate.connect("key") is False

    assert provider.checks == 3
    assert [c.args[0] for c in fake_sleep.await_args_list] == [1.0, 2.0]


@pytest.mark.asyncio
async def test_check_treats_provider_error_as_unusable():
    provider = FlakyProvider(ready_after=1)
    provider.has_usable_credential = AsyncMock(side_effect=RuntimeError("bridge unavailable"))

    assert await CredentialGate(provider).check() is False


@pytest.mark.asyncio
async def test_require():
    assert await CredentialGate(ApiKeyCredentials("abc")).require() == "abc"

    with pytest.raises(CapabilityError):
        await CredentialGate(ApiKeyCredentials("")).require()


@pytest.mark.asyncio
async def test_selection_without_key_keeps_current_key():
    provider = ApiKeyCredentials("abc")

    await provider.request_credential_selection(None)

    assert provider.api_key == "abc"
