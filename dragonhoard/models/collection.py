from collections.abc import Iterator
from dataclasses import dataclass, field

from dragonhoard.models.catalog import MAX_RARITY
from dragonhoard.models.dragon import Dragon
from dragonhoard.models.failure import FailureKind, KnownError, RefusalError


class DragonNotFoundError(KnownError):
    """Raised when a dragon id is not in the collection."""

    def __init__(self, dragon_id: str):
        self.dragon_id = dragon_id
        super().__init__(
            kind=FailureKind.NOT_FOUND,
            message="That dragon is not in your lair.",
            detail=f"Unknown dragon id: {dragon_id}",
            status_code=404,
        )


class InvalidSelectionError(RefusalError):
    """Raised when a breeding pair is not allowed. The selection is unchanged."""

    def __init__(self, reason: str):
        super().__init__(
            kind=FailureKind.INVALID_SELECTION,
            message=reason,
            suggestion="Pick a different pair of dragons.",
        )


MAX_PAIR_MESSAGE = "Two golden dragons cannot be bred (the limit of magic)."


@dataclass
class DragonCollection:
    """
    A player's lair: dragons in most-recent-first order plus the
    transient breeding selection (at most two ids).

    The selection is never persisted.
    """

    dragons: list[Dragon] = field(default_factory=list)
    selected_ids: list[str] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.dragons)

    def __iter__(self) -> Iterator[Dragon]:
        return iter(self.dragons)

    def find(self, dragon_id: str) -> Dragon | None:
        """Get a dragon by id, or None."""
        for dragon in self.dragons:
            if dragon.id == dragon_id:
                return dragon
        return None

    def get(self, dragon_id: str) -> Dragon:
        """Get a dragon by id. Raises DragonNotFoundError if missing."""
        dragon = self.find(dragon_id)
        if dragon is None:
            raise DragonNotFoundError(dragon_id)
        return dragon

    def add(self, dragon: Dragon) -> None:
        """Add a dragon at the front of the lair."""
        self.dragons.insert(0, dragon)

    def remove(self, dragon_id: str) -> Dragon:
        """Remove a dragon and drop it from the selection."""
        dragon = self.get(dragon_id)
        self.dragons = [d for d in self.dragons if d.id != dragon_id]
        self.deselect(dragon_id)
        return dragon

    # --- Selection ---

    def deselect(self, dragon_id: str) -> None:
        """Remove an id from the selection if present."""
        self.selected_ids = [sid for sid in self.selected_ids if sid != dragon_id]

    def clear_selection(self) -> None:
        """Empty the selection."""
        self.selected_ids = []

    def toggle_select(self, dragon_id: str) -> list[str]:
        """
        Toggle a dragon in the breeding selection.

        - Selected already: deselect it
        - Nothing selected: select it
        - One other selected: pair them, unless both are max rarity
        - A pair selected: start over with only this dragon

        Returns:
            The selection after the toggle.

        Raises:
            DragonNotFoundError: If the id is not in the lair
            InvalidSelectionError: If pairing two max-rarity dragons
                (the first one stays selected)
        """
        dragon = self.get(dragon_id)

        if dragon_id in self.selected_ids:
            self.deselect(dragon_id)
        elif not self.selected_ids:
            self.selected_ids = [dragon_id]
        elif len(self.selected_ids) == 1:
            first = self.get(self.selected_ids[0])
            if first.rarity == MAX_RARITY and dragon.rarity == MAX_RARITY:
                raise InvalidSelectionError(MAX_PAIR_MESSAGE)
            self.selected_ids = [first.id, dragon_id]
        else:
            self.selected_ids = [dragon_id]

        return list(self.selected_ids)

    def selected_dragons(self) -> list[Dragon]:
        """Selected dragons in selection order."""
        return [self.get(sid) for sid in self.selected_ids]

    @property
    def can_breed(self) -> bool:
        """True if exactly two dragons are selected and they are not both max rarity."""
        if len(self.selected_ids) != 2:
            return False
        first, second = self.selected_dragons()
        return not (first.rarity == MAX_RARITY and second.rarity == MAX_RARITY)

    def replace_parents(self, offspring: Dragon, parent_a_id: str, parent_b_id: str) -> None:
        """
        Consume both parents and add their offspring at the front.

        Clears the selection.
        """
        self.get(parent_a_id)
        self.get(parent_b_id)
        remaining = [d for d in self.dragons if d.id not in (parent_a_id, parent_b_id)]
        self.dragons = [offspring, *remaining]
        self.clear_selection()
