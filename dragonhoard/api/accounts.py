"""
Account API endpoints.

Registration, login and logout. Login loads stored progress into a live
game session and returns the session token that game routes require.
Logout discards the session without touching stored data.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Header, status
from pydantic import BaseModel, Field

from dragonhoard.api.dependencies import get_account_store
from dragonhoard.api.game import GameStateResponse, state_response
from dragonhoard.db.store import AccountStore
from dragonhoard.models.failure import FailureKind, KnownError
from dragonhoard.services.game_session import GameSession
from dragonhoard.services.session_registry import SessionRegistry, get_session_registry

router = APIRouter(prefix="/accounts", tags=["accounts"])


class CredentialsRequest(BaseModel):
    """Request model for login and registration."""

    username: str = Field(..., min_length=1, max_length=255, examples=["dragonlord"])
    password: str = Field(..., min_length=1, examples=["hunter2"])


class SessionResponse(GameStateResponse):
    """Game state plus the token to send as X-Session-Token."""

    session_token: str


class LogoutResponse(BaseModel):
    """Response model for logout."""

    username: str
    logged_out: bool
    message: str = ""


def _validate_username(username: str) -> str:
    username = username.strip()
    if not username:
        raise KnownError(
            kind=FailureKind.INVALID_INPUT,
            message="Username cannot be empty",
            suggestion="Pick a name with at least one visible character.",
            status_code=400,
        )
    return username


def _session_response(game: GameSession) -> SessionResponse:
    return SessionResponse(**state_response(game).model_dump(), session_token=game.token)


@router.post("/register", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
async def register(
    request: CredentialsRequest,
    store: Annotated[AccountStore, Depends(get_account_store)],
    registry: Annotated[SessionRegistry, Depends(get_session_registry)],
) -> SessionResponse:
    """
    Register a new account and log in.

    New accounts start with 500 gold, no experience and an empty lair.
    """
    username = _validate_username(request.username)
    account = await store.create(username, request.password)
    game = registry.open(GameSession(account, store))
    return _session_response(game)


@router.post("/login", response_model=SessionResponse)
async def login(
    request: CredentialsRequest,
    store: Annotated[AccountStore, Depends(get_account_store)],
    registry: Annotated[SessionRegistry, Depends(get_session_registry)],
) -> SessionResponse:
    """
    Log in and load stored progress.

    Replaces an idle live session for the same account. Refused while that
    session still has a chest or breeding in flight.
    """
    username = _validate_username(request.username)
    account = await store.load(username, request.password)
    game = registry.open(GameSession(account, store))
    return _session_response(game)


@router.post("/{username}/logout", response_model=LogoutResponse)
async def logout(
    username: str,
    registry: Annotated[SessionRegistry, Depends(get_session_registry)],
    x_session_token: Annotated[str | None, Header()] = None,
) -> LogoutResponse:
    """Log out. Stored progress is kept."""
    if username not in registry:
        return LogoutResponse(username=username, logged_out=False, message="No active session.")

    registry.authorize(username, x_session_token)
    registry.close(username)
    return LogoutResponse(username=username, logged_out=True, message="Farewell, dragon keeper.")
