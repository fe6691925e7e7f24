"""
Leaderboard endpoint.

Ranks stored accounts by experience. Reads stored progress, so live
sessions appear as of their last persisted change.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from dragonhoard.api.dependencies import get_account_store
from dragonhoard.config import settings
from dragonhoard.db.store import AccountStore
from dragonhoard.models.catalog import Element
from dragonhoard.services.leaderboard import build_leaderboard

router = APIRouter(tags=["leaderboard"])


class LeaderboardEntryResponse(BaseModel):
    """One ranked account."""

    rank: int
    username: str
    level: int
    experience: int
    score: int
    best_dragon: str | None = None
    favorite_element: Element | None = None


@router.get("/leaderboard", response_model=list[LeaderboardEntryResponse])
async def get_leaderboard(
    store: Annotated[AccountStore, Depends(get_account_store)],
    limit: Annotated[int | None, Query(ge=1, le=500)] = None,
) -> list[LeaderboardEntryResponse]:
    """Top accounts by experience."""
    accounts = await store.list_ranked(limit or settings.leaderboard_limit)
    return [
        LeaderboardEntryResponse(
            rank=entry.rank,
            username=entry.username,
            level=entry.level,
            experience=entry.experience,
            score=entry.score,
            best_dragon=entry.best_dragon,
            favorite_element=entry.favorite_element,
        )
        for entry in build_leaderboard(accounts)
    ]
