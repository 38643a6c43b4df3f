"""Shared fixtures for service and API tests."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from tests.fakes import API_KEY, FakeRemote
from videoja.services.credentials import ApiKeyCredentials, CredentialGate


@pytest.fixture
def fake_sleep():
    return AsyncMock(return_value=None)


@pytest.fixture
def remote():
    return FakeRemote()


@pytest.fixture
def gate(fake_sleep):
    return CredentialGate(ApiKeyCredentials(API_KEY), attempts=2, delay=1.0, backoff=2.0, sleep=fake_sleep)


@pytest.fixture
def notifier():
    return SimpleNamespace(
        broadcast_to_session=AsyncMock(return_value=None),
        close_session=AsyncMock(return_value=0),
    )
