import logging
from uuid import UUID

from videoja.config import settings
from videoja.errors import SessionNotFoundError
from videoja.models.session import Session
from videoja.services.ledger import CreditLedger
from videoja.services.ws_manager import ConnectionManager, ws_manager

logger = logging.getLogger(__name__)


class SessionManager:
    """In-memory session registry. Nothing survives a restart."""

    def __init__(self, welcome_credits: int = settings.WELCOME_CREDITS, notifier: ConnectionManager = ws_manager):
        self.welcome_credits = welcome_credits
        self._notifier = notifier
        self._sessions: dict[UUID, Session] = {}

    def create(self, email: str | None = None) -> Session:
        session = Session(
            email=email or settings.DEFAULT_EMAIL,
            ledger=CreditLedger(balance=self.welcome_credits),
        )
        self._sessions[session.id] = session
        logger.info(f"Session {session.id} created with {self.welcome_credits} welcome credits")
        return session

    def get(self, session_id: UUID) -> Session:
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(str(session_id))
        return session

    async def close(self, session_id: UUID) -> Session:
        """
        End a session: stop its outstanding job, forget it and close its sockets.

        The running generation sees the cancel token at its next poll and refunds
        its reservation, so nothing is added to the discarded gallery.
        """
        session = self.get(session_id)
        if session.cancel_event is not None:
            session.cancel_event.set()
        del self._sessions[session_id]

        closed = await self._notifier.close_session(session_id)
        logger.info(f"Session {session_id} closed, {closed} socket(s) disconnected")
        return session

    def __len__(self) -> int:
        return len(self._sessions)


session_manager = SessionManager()
