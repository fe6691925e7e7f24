"""
Registry of live game sessions, keyed by username.

Login opens (or replaces) a session; logout closes it. Closing drops the
in-memory view only. Stored progress is untouched.

INVARIANTS:
- A session is never replaced while one of its actions is in flight.
  The replacement would be loaded from the store before that action's
  final persist and would overwrite it.
- Each session carries a token issued at login. Game routes must present
  it, so one player cannot act on another player's lair.
"""

import logging
import secrets

from dragonhoard.models.failure import FailureKind, KnownError, SessionBusyError
from dragonhoard.services.game_session import GameSession

logger = logging.getLogger(__name__)


class NoActiveSessionError(KnownError):
    """Raised when acting on a username that is not logged in."""

    def __init__(self, username: str):
        self.username = username
        super().__init__(
            kind=FailureKind.NOT_FOUND,
            message="You are not logged in.",
            detail=f"No active session for {username!r}",
            suggestion="Log in again.",
            status_code=404,
        )


class InvalidSessionTokenError(KnownError):
    """Raised when the session token is missing or belongs to another login."""

    def __init__(self, username: str):
        self.username = username
        super().__init__(
            kind=FailureKind.BAD_CREDENTIALS,
            message="Your session is not valid.",
            detail=f"Missing or stale session token for {username!r}",
            suggestion="Log in again.",
            status_code=401,
        )


class SessionRegistry:
    """In-memory map of logged-in players."""

    def __init__(self) -> None:
        self._sessions: dict[str, GameSession] = {}

    def __contains__(self, username: object) -> bool:
        return username in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)

    def open(self, session: GameSession) -> GameSession:
        """
        Register a session, replacing any previous one for the same user.

        Raises:
            SessionBusyError: If the previous session has an action in flight
        """
        current = self._sessions.get(session.username)
        if current is not None:
            if current.busy:
                logger.info("SESSION_REPLACE_REJECTED", extra={"username": session.username})
                raise SessionBusyError("login")
            logger.info("SESSION_REPLACED", extra={"username": session.username})
        self._sessions[session.username] = session
        return session

    def get(self, username: str) -> GameSession:
        """Get a live session. Raises NoActiveSessionError if none."""
        session = self._sessions.get(username)
        if session is None:
            raise NoActiveSessionError(username)
        return session

    def authorize(self, username: str, token: str | None) -> GameSession:
        """
        Get a live session after checking its token.

        Raises:
            NoActiveSessionError: If the user is not logged in
            InvalidSessionTokenError: If the token does not match
        """
        session = self.get(username)
        if token is None or not secrets.compare_digest(token, session.token):
            raise InvalidSessionTokenError(username)
        return session

    def close(self, username: str) -> bool:
        """
        Drop a session.

        Returns True if a session was closed, False if none was open.
        """
        return self._sessions.pop(username, None) is not None


# Singleton registry instance
_registry: SessionRegistry | None = None


def get_session_registry() -> SessionRegistry:
    """Get the global session registry."""
    global _registry
    if _registry is None:
        _registry = SessionRegistry()
    return _registry


def reset_session_registry() -> None:
    """Reset the global session registry (for testing)."""
    global _registry
    _registry = None
