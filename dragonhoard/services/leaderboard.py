"""
Leaderboard entries.

Accounts are ranked by experience. Each entry also shows derived
collection stats: score, best dragon and favourite element.
"""

from dataclasses import dataclass

from dragonhoard.models.account import AccountState
from dragonhoard.models.catalog import Element
from dragonhoard.models.dragon import Dragon
from dragonhoard.models.progression import ProgressionLedger
from dragonhoard.services.valuation import collection_score


@dataclass(frozen=True, slots=True)
class LeaderboardEntry:
    """One ranked account."""

    rank: int
    username: str
    level: int
    experience: int
    score: int
    best_dragon: str | None
    favorite_element: Element | None


def best_dragon(dragons: list[Dragon]) -> Dragon | None:
    """Highest-rarity dragon. On ties the later one in lair order wins."""
    best: Dragon | None = None
    for dragon in dragons:
        if best is None or dragon.rarity >= best.rarity:
            best = dragon
    return best


def favorite_element(dragons: list[Dragon]) -> Element | None:
    """Most frequent element. On ties the element first seen later wins."""
    counts: dict[Element, int] = {}
    for dragon in dragons:
        counts[dragon.element] = counts.get(dragon.element, 0) + 1

    favorite: Element | None = None
    for element, count in counts.items():
        if favorite is None or count >= counts[favorite]:
            favorite = element
    return favorite


def build_leaderboard(accounts: list[AccountState]) -> list[LeaderboardEntry]:
    """Build entries for accounts already ordered by experience."""
    entries: list[LeaderboardEntry] = []
    for rank, account in enumerate(accounts, start=1):
        best = best_dragon(account.collection)
        entries.append(
            LeaderboardEntry(
                rank=rank,
                username=account.username,
                level=ProgressionLedger(experience=account.experience).level,
                experience=account.experience,
                score=collection_score(account.collection),
                best_dragon=best.name if best else None,
                favorite_element=favorite_element(account.collection),
            )
        )
    return entries
