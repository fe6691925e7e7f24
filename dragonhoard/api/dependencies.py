"""
Shared FastAPI dependencies.

Tests override these to inject an in-memory database and a fake generator.
"""

from typing import Annotated

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from dragonhoard.config import settings
from dragonhoard.db.database import get_session_factory
from dragonhoard.db.store import AccountStore
from dragonhoard.models.failure import FailureKind, KnownError
from dragonhoard.services.game_session import GameSession
from dragonhoard.services.generator import AnthropicDragonGenerator, DragonGenerator
from dragonhoard.services.session_registry import SessionRegistry, get_session_registry


class GeneratorUnavailableError(KnownError):
    """Raised when no content generator is configured."""

    def __init__(self) -> None:
        super().__init__(
            kind=FailureKind.SERVICE_UNAVAILABLE,
            message="The dragon summoners are not available right now.",
            detail="Anthropic API key not configured",
            suggestion="Try again later.",
            status_code=503,
        )


def get_account_store(
    session_factory: Annotated[async_sessionmaker[AsyncSession], Depends(get_session_factory)],
) -> AccountStore:
    """Account store bound to the configured database."""
    return AccountStore(session_factory)


def get_generator() -> DragonGenerator:
    """
    Content generator for chests and breeding.

    Resolved before the action starts, so a missing key fails the request
    before any gold is spent.
    """
    if not settings.anthropic_api_key:
        raise GeneratorUnavailableError()
    return AnthropicDragonGenerator(api_key=settings.anthropic_api_key)


def get_game_session(
    username: str,
    registry: Annotated[SessionRegistry, Depends(get_session_registry)],
    x_session_token: Annotated[str | None, Header()] = None,
) -> GameSession:
    """Live session of `username`, authorized by the X-Session-Token header."""
    return registry.authorize(username, x_session_token)
