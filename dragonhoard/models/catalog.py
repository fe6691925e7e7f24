"""
Rarity and element catalog.

Static reference data for the reward economy:
- Four rarity tiers (chest quality), each with cost, XP grant,
  base sale value and collection score
- Fifteen elements grouped into four element tiers
- Per-rarity drop rates over element tiers

Element tiers and rarity tiers are independent axes. Element tier only
feeds the sale value formula.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum


class Rarity(IntEnum):
    """Chest / dragon quality. Higher is better."""

    WOODEN = 1
    IRON = 2
    SILVER = 3
    GOLDEN = 4


MAX_RARITY = Rarity.GOLDEN


class Element(str, Enum):
    """The fifteen dragon elements."""

    FIRE = "Fire"
    WIND = "Wind"
    EARTH = "Earth"
    WATER = "Water"
    VERDANT = "Verdant"
    METAL = "Metal"
    ENERGY = "Energy"
    VOID = "Void"
    SHADOW = "Shadow"
    LIGHT = "Light"
    LEGENDARY = "Legendary"
    PRIMORDIAL = "Primordial"
    DIVINE = "Divine"
    ANCIENT = "Ancient"
    TYRANT = "Tyrant"


# =============================================================================
# ELEMENT TIERS
# =============================================================================

TIER_ELEMENTS: dict[int, tuple[Element, ...]] = {
    1: (Element.FIRE, Element.WIND, Element.EARTH, Element.WATER, Element.VERDANT),
    2: (Element.METAL, Element.ENERGY, Element.SHADOW),
    3: (Element.VOID, Element.LIGHT, Element.ANCIENT),
    4: (Element.LEGENDARY, Element.PRIMORDIAL, Element.DIVINE, Element.TYRANT),
}

ELEMENT_TIERS: dict[Element, int] = {
    element: tier for tier, elements in TIER_ELEMENTS.items() for element in elements
}


def element_tier(element: Element) -> int:
    """Element tier (1-4) of an element."""
    return ELEMENT_TIERS[element]


# =============================================================================
# PER-RARITY TABLES
# =============================================================================

# Probability of each element tier when opening a chest of a given rarity
DROP_RATES: dict[Rarity, dict[int, float]] = {
    Rarity.WOODEN: {1: 0.90, 2: 0.10},
    Rarity.IRON: {1: 0.30, 2: 0.60, 3: 0.10},
    Rarity.SILVER: {2: 0.30, 3: 0.60, 4: 0.10},
    Rarity.GOLDEN: {3: 0.20, 4: 0.80},
}

SELL_VALUES: dict[Rarity, int] = {
    Rarity.WOODEN: 15,
    Rarity.IRON: 60,
    Rarity.SILVER: 200,
    Rarity.GOLDEN: 1000,
}

SCORE_VALUES: dict[Rarity, int] = {
    Rarity.WOODEN: 10,
    Rarity.IRON: 50,
    Rarity.SILVER: 250,
    Rarity.GOLDEN: 1500,
}

CHEST_XP: dict[Rarity, int] = {
    Rarity.WOODEN: 25,
    Rarity.IRON: 100,
    Rarity.SILVER: 350,
    Rarity.GOLDEN: 1000,
}

CHEST_COSTS: dict[Rarity, int] = {
    Rarity.WOODEN: 100,
    Rarity.IRON: 350,
    Rarity.SILVER: 1000,
    Rarity.GOLDEN: 5000,
}


# =============================================================================
# PROGRESSION CONSTANTS
# =============================================================================

STARTING_CURRENCY = 500
BREEDING_XP = 50
XP_PER_LEVEL = 1000


# =============================================================================
# CHEST OFFERS
# =============================================================================


@dataclass(frozen=True, slots=True)
class ChestOffer:
    """
    A purchasable chest.

    Attributes:
        chest_id: Stable identifier used in URLs ("wood", "iron", ...)
        name: Display name
        rarity: Rarity of the dragon it yields
        description: Short flavour line
        cost: Gold debited when the chest is opened
        xp: Experience granted when the dragon is revealed
    """

    chest_id: str
    name: str
    rarity: Rarity
    description: str
    cost: int
    xp: int


CHESTS: tuple[ChestOffer, ...] = (
    ChestOffer(
        chest_id="wood",
        name="Wooden Chest",
        rarity=Rarity.WOODEN,
        description="Common dragons",
        cost=CHEST_COSTS[Rarity.WOODEN],
        xp=CHEST_XP[Rarity.WOODEN],
    ),
    ChestOffer(
        chest_id="iron",
        name="Iron Chest",
        rarity=Rarity.IRON,
        description="Rare breeds",
        cost=CHEST_COSTS[Rarity.IRON],
        xp=CHEST_XP[Rarity.IRON],
    ),
    ChestOffer(
        chest_id="silver",
        name="Silver Chest",
        rarity=Rarity.SILVER,
        description="Mystic dragons",
        cost=CHEST_COSTS[Rarity.SILVER],
        xp=CHEST_XP[Rarity.SILVER],
    ),
    ChestOffer(
        chest_id="gold",
        name="Golden Chest",
        rarity=Rarity.GOLDEN,
        description="Epic dragons",
        cost=CHEST_COSTS[Rarity.GOLDEN],
        xp=CHEST_XP[Rarity.GOLDEN],
    ),
)

_CHESTS_BY_ID: dict[str, ChestOffer] = {chest.chest_id: chest for chest in CHESTS}


def get_chest(chest_id: str) -> ChestOffer | None:
    """Look up a chest offer by id. Returns None if unknown."""
    return _CHESTS_BY_ID.get(chest_id)
