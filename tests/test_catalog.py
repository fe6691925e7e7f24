"""Tests for the static game catalog."""

import math

from dragonhoard.models.catalog import (
    CHESTS,
    DROP_RATES,
    ELEMENT_TIERS,
    MAX_RARITY,
    TIER_ELEMENTS,
    Element,
    Rarity,
    element_tier,
    get_chest,
)


class TestElementTiers:
    def test_every_element_has_exactly_one_tier(self) -> None:
        """The tier lists partition the fifteen elements."""
        listed = [element for elements in TIER_ELEMENTS.values() for element in elements]

        assert len(listed) == 15
        assert set(listed) == set(Element)
        assert set(ELEMENT_TIERS) == set(Element)

    def test_known_tiers(self) -> None:
        """Spot-check tier membership."""
        assert element_tier(Element.FIRE) == 1
        assert element_tier(Element.SHADOW) == 2
        assert element_tier(Element.ANCIENT) == 3
        assert element_tier(Element.TYRANT) == 4


class TestDropRates:
    def test_every_rarity_sums_to_one(self) -> None:
        """Each drop-rate table is a probability distribution."""
        for rarity, rates in DROP_RATES.items():
            assert math.isclose(sum(rates.values()), 1.0), rarity

    def test_tiers_exist(self) -> None:
        """Drop tables only reference known element tiers."""
        for rates in DROP_RATES.values():
            assert set(rates) <= set(TIER_ELEMENTS)

    def test_max_rarity_is_golden(self) -> None:
        assert MAX_RARITY is Rarity.GOLDEN


class TestChests:
    def test_one_chest_per_rarity(self) -> None:
        """Chests cover every rarity once, cheapest first."""
        assert [chest.rarity for chest in CHESTS] == list(Rarity)
        costs = [chest.cost for chest in CHESTS]
        assert costs == sorted(costs)

    def test_chest_values(self) -> None:
        """Costs and XP match the economy tables."""
        assert [(c.chest_id, c.cost, c.xp) for c in CHESTS] == [
            ("wood", 100, 25),
            ("iron", 350, 100),
            ("silver", 1000, 350),
            ("gold", 5000, 1000),
        ]

    def test_get_chest(self) -> None:
        """Lookup by id returns the offer, unknown ids return None."""
        gold = get_chest("gold")

        assert gold is not None
        assert gold.rarity == Rarity.GOLDEN
        assert get_chest("diamond") is None
