import asyncio
import uuid

import pytest

from videoja.errors import SessionNotFoundError
from videoja.services.session_manager import SessionManager


@pytest.fixture
def sessions(notifier):
    return SessionManager(welcome_credits=100, notifier=notifier)


def test_create_grants_welcome_credits(sessions):
    session = sessions.create()

    assert session.credits == 100
    assert session.email == "creator@videoja.ai"
    assert sessions.get(session.id) is session
    assert len(sessions) == 1


def test_unknown_session(sessions):
    with pytest.raises(SessionNotFoundError):
        sessions.get(uuid.uuid4())


@pytest.mark.asyncio
async def test_close_forgets_session_and_disconnects_sockets(sessions, notifier):
    session = sessions.create()

    closed = await sessions.close(session.id)

    assert closed is session
    assert len(sessions) == 0
    notifier.close_session.assert_awaited_once_with(session.id)
    with pytest.raises(SessionNotFoundError):
        sessions.get(session.id)


@pytest.mark.asyncio
async def test_close_sets_outstanding_cancel_token(sessions):
    session = sessions.create()
    session.cancel_event = asyncio.Event()

    await sessions.close(session.id)

    assert session.cancel_event.is_set()


@pytest.mark.asyncio
async def test_close_unknown_session(sessions, notifier):
    with pytest.raises(SessionNotFoundError):
        await sessions.close(uuid.uuid4())

    notifier.close_session.assert_not_called()
