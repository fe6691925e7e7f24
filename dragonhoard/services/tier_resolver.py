"""
Tier resolver.

Picks the element of a chest dragon: first an element tier according to
the chest rarity's drop rates, then an element uniformly within that tier.
"""

import random
from collections.abc import Sequence
from typing import TypeVar

from dragonhoard.models.catalog import DROP_RATES, TIER_ELEMENTS, Element, Rarity

K = TypeVar("K")

_default_rng = random.Random()


def weighted_pick(weights: Sequence[tuple[K, float]], draw: float) -> K:
    """
    Pick a key by walking cumulative weights.

    Returns the first key whose cumulative weight meets or exceeds `draw`.
    If rounding leaves `draw` above the final cumulative total, the last
    key is returned.

    Args:
        weights: (key, weight) pairs in walk order
        draw: Uniform value in [0, 1)

    Raises:
        ValueError: If weights is empty
    """
    if not weights:
        raise ValueError("Cannot pick from an empty weight table")

    cumulative = 0.0
    for key, weight in weights:
        cumulative += weight
        if draw <= cumulative:
            return key

    # Overshoot: draw beyond the accumulated total
    return weights[-1][0]


def tier_weights(rarity: Rarity) -> list[tuple[int, float]]:
    """Drop-rate table of a rarity as (tier, weight) pairs in ascending tier order."""
    rates = DROP_RATES[rarity]
    return [(tier, rates[tier]) for tier in sorted(rates)]


def resolve_tier(rarity: Rarity, rng: random.Random | None = None) -> int:
    """Sample an element tier for a chest of the given rarity."""
    source = rng if rng is not None else _default_rng
    return weighted_pick(tier_weights(rarity), source.random())


def resolve_element(rarity: Rarity, rng: random.Random | None = None) -> Element:
    """
    Sample the element of a chest dragon.

    Args:
        rarity: Rarity of the opened chest
        rng: Random source (defaults to a module-level generator)

    Returns:
        An element whose tier appears in the rarity's drop-rate table.
    """
    source = rng if rng is not None else _default_rng
    tier = resolve_tier(rarity, source)
    return source.choice(TIER_ELEMENTS[tier])
