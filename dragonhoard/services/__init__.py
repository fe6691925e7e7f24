"""
DragonHoard services.

Reward generation, valuation and the live game session.
"""

from dragonhoard.services.breeding import ResolvedOffspring, offspring_rarity, resolve_offspring
from dragonhoard.services.game_session import GameSession, ProgressStore
from dragonhoard.services.generator import AnthropicDragonGenerator, DragonGenerator
from dragonhoard.services.leaderboard import (
    LeaderboardEntry,
    best_dragon,
    build_leaderboard,
    favorite_element,
)
from dragonhoard.services.session_registry import (
    InvalidSessionTokenError,
    NoActiveSessionError,
    SessionRegistry,
    get_session_registry,
    reset_session_registry,
)
from dragonhoard.services.tier_resolver import (
    resolve_element,
    resolve_tier,
    tier_weights,
    weighted_pick,
)
from dragonhoard.services.valuation import (
    collection_score,
    dragon_score,
    dragon_value,
    element_value,
)

__all__ = [
    # Tier resolver
    "resolve_element",
    "resolve_tier",
    "tier_weights",
    "weighted_pick",
    # Breeding
    "ResolvedOffspring",
    "offspring_rarity",
    "resolve_offspring",
    # Valuation
    "collection_score",
    "dragon_score",
    "dragon_value",
    "element_value",
    # Content generator
    "AnthropicDragonGenerator",
    "DragonGenerator",
    # Sessions
    "GameSession",
    "InvalidSessionTokenError",
    "NoActiveSessionError",
    "ProgressStore",
    "SessionRegistry",
    "get_session_registry",
    "reset_session_registry",
    # Leaderboard
    "LeaderboardEntry",
    "best_dragon",
    "build_leaderboard",
    "favorite_element",
]
