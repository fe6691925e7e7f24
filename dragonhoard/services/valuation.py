"""
Dragon valuation.

Sale value depends on rarity and element tier. Score depends on rarity
only and is the coarser collection-strength metric used for ranking.
"""

from collections.abc import Iterable

from dragonhoard.models.catalog import SCORE_VALUES, SELL_VALUES, Element, element_tier
from dragonhoard.models.dragon import Dragon

# Element value floor (tier 1) and increment per tier above it
ELEMENT_BASE_VALUE = 100
ELEMENT_TIER_STEP = 50


def element_value(element: Element) -> int:
    """Value contributed by the element: 100, 150, 200 or 250 for tiers 1-4."""
    return ELEMENT_BASE_VALUE + (element_tier(element) - 1) * ELEMENT_TIER_STEP


def dragon_value(dragon: Dragon) -> int:
    """Gold credited when the dragon is sold."""
    return SELL_VALUES[dragon.rarity] + element_value(dragon.element)


def dragon_score(dragon: Dragon) -> int:
    """Collection score of a single dragon."""
    return SCORE_VALUES[dragon.rarity]


def collection_score(dragons: Iterable[Dragon]) -> int:
    """Total score of a collection."""
    return sum(dragon_score(dragon) for dragon in dragons)
