"""Tests for the dragon collection and breeding selection."""

import pytest

from dragonhoard.models.catalog import Rarity
from dragonhoard.models.collection import (
    MAX_PAIR_MESSAGE,
    DragonCollection,
    DragonNotFoundError,
    InvalidSelectionError,
)
from dragonhoard.models.failure import FailureKind


@pytest.fixture
def lair(make_dragon) -> DragonCollection:
    """Collection with two wooden and two golden dragons."""
    return DragonCollection(
        dragons=[
            make_dragon(Rarity.WOODEN),  # dragon-1
            make_dragon(Rarity.WOODEN),  # dragon-2
            make_dragon(Rarity.GOLDEN),  # dragon-3
            make_dragon(Rarity.GOLDEN),  # dragon-4
        ]
    )


class TestMembership:
    def test_add_puts_dragon_first(self, lair: DragonCollection, make_dragon) -> None:
        """Newest dragon goes to the front."""
        newcomer = make_dragon()

        lair.add(newcomer)

        assert lair.dragons[0] == newcomer
        assert len(lair) == 5

    def test_remove_drops_from_selection(self, lair: DragonCollection) -> None:
        lair.toggle_select("dragon-1")

        removed = lair.remove("dragon-1")

        assert removed.id == "dragon-1"
        assert lair.find("dragon-1") is None
        assert lair.selected_ids == []

    def test_remove_unknown_raises(self, lair: DragonCollection) -> None:
        with pytest.raises(DragonNotFoundError) as exc_info:
            lair.remove("nope")

        assert exc_info.value.status_code == 404


class TestToggleSelect:
    def test_select_then_deselect(self, lair: DragonCollection) -> None:
        """Toggling the same dragon twice empties the selection."""
        assert lair.toggle_select("dragon-1") == ["dragon-1"]
        assert lair.toggle_select("dragon-1") == []

    def test_second_pick_forms_pair(self, lair: DragonCollection) -> None:
        lair.toggle_select("dragon-1")

        assert lair.toggle_select("dragon-3") == ["dragon-1", "dragon-3"]
        assert lair.can_breed

    def test_third_pick_starts_over(self, lair: DragonCollection) -> None:
        """With a pair selected, a new pick replaces the pair."""
        lair.toggle_select("dragon-1")
        lair.toggle_select("dragon-2")

        assert lair.toggle_select("dragon-3") == ["dragon-3"]
        assert not lair.can_breed

    def test_deselect_from_pair(self, lair: DragonCollection) -> None:
        lair.toggle_select("dragon-1")
        lair.toggle_select("dragon-2")

        assert lair.toggle_select("dragon-1") == ["dragon-2"]

    def test_two_max_rarity_rejected(self, lair: DragonCollection) -> None:
        """Pairing two golden dragons is refused and the first stays selected."""
        lair.toggle_select("dragon-3")

        with pytest.raises(InvalidSelectionError) as exc_info:
            lair.toggle_select("dragon-4")

        assert exc_info.value.kind == FailureKind.INVALID_SELECTION
        assert exc_info.value.message == MAX_PAIR_MESSAGE
        assert lair.selected_ids == ["dragon-3"]

    def test_unknown_id_raises(self, lair: DragonCollection) -> None:
        with pytest.raises(DragonNotFoundError):
            lair.toggle_select("ghost")

        assert lair.selected_ids == []

    def test_clear_selection(self, lair: DragonCollection) -> None:
        lair.toggle_select("dragon-1")
        lair.toggle_select("dragon-2")

        lair.clear_selection()

        assert lair.selected_ids == []


class TestReplaceParents:
    def test_offspring_replaces_parents(self, lair: DragonCollection, make_dragon) -> None:
        """Both parents leave, offspring arrives first, selection cleared."""
        lair.toggle_select("dragon-2")
        lair.toggle_select("dragon-3")
        offspring = make_dragon(Rarity.GOLDEN)

        lair.replace_parents(offspring, "dragon-2", "dragon-3")

        assert [d.id for d in lair] == [offspring.id, "dragon-1", "dragon-4"]
        assert lair.selected_ids == []

    def test_missing_parent_changes_nothing(self, lair: DragonCollection, make_dragon) -> None:
        before = list(lair.dragons)

        with pytest.raises(DragonNotFoundError):
            lair.replace_parents(make_dragon(), "dragon-1", "ghost")

        assert lair.dragons == before
