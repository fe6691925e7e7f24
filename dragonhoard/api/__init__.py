from dragonhoard.api.accounts import router as accounts_router
from dragonhoard.api.catalog import router as catalog_router
from dragonhoard.api.game import router as game_router
from dragonhoard.api.health import router as health_router
from dragonhoard.api.leaderboard import router as leaderboard_router

__all__ = [
    "accounts_router",
    "catalog_router",
    "game_router",
    "health_router",
    "leaderboard_router",
]
