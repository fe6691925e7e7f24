from dragonhoard.models.account import AccountState
from dragonhoard.models.catalog import (
    BREEDING_XP,
    CHEST_COSTS,
    CHEST_XP,
    CHESTS,
    DROP_RATES,
    ELEMENT_TIERS,
    MAX_RARITY,
    SCORE_VALUES,
    SELL_VALUES,
    STARTING_CURRENCY,
    TIER_ELEMENTS,
    XP_PER_LEVEL,
    ChestOffer,
    Element,
    Rarity,
    element_tier,
    get_chest,
)
from dragonhoard.models.collection import (
    DragonCollection,
    DragonNotFoundError,
    InvalidSelectionError,
)
from dragonhoard.models.dragon import Dragon, DragonContent, OffspringContent
from dragonhoard.models.failure import (
    ApiResponse,
    FailureDetail,
    FailureKind,
    GenerationFailedError,
    KnownError,
    OutcomeType,
    RefusalError,
    SessionBusyError,
)
from dragonhoard.models.progression import InsufficientFundsError, ProgressionLedger

__all__ = [
    "AccountState",
    "ApiResponse",
    "BREEDING_XP",
    "CHESTS",
    "CHEST_COSTS",
    "CHEST_XP",
    "ChestOffer",
    "DROP_RATES",
    "Dragon",
    "DragonCollection",
    "DragonContent",
    "DragonNotFoundError",
    "ELEMENT_TIERS",
    "Element",
    "FailureDetail",
    "FailureKind",
    "GenerationFailedError",
    "InsufficientFundsError",
    "InvalidSelectionError",
    "KnownError",
    "MAX_RARITY",
    "OffspringContent",
    "OutcomeType",
    "ProgressionLedger",
    "Rarity",
    "RefusalError",
    "SCORE_VALUES",
    "SELL_VALUES",
    "STARTING_CURRENCY",
    "SessionBusyError",
    "TIER_ELEMENTS",
    "XP_PER_LEVEL",
    "element_tier",
    "get_chest",
]
