from dataclasses import dataclass, field, replace
from typing import Any
from uuid import uuid4

from dragonhoard.models.catalog import Element, Rarity


@dataclass(frozen=True, slots=True)
class DragonContent:
    """
    Flavour content returned by the generator for a chest dragon.

    Attributes:
        name: Dragon name
        description: Lore or poem describing the dragon
        tags: Two or three short traits
    """

    name: str
    description: str
    tags: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class OffspringContent:
    """Flavour content plus the element chosen by the generator for a bred dragon."""

    name: str
    description: str
    element: Element
    tags: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class Dragon:
    """
    An owned dragon.

    Rarity and element are fixed at creation. Name, description and tags
    are generator payload and are not validated beyond their shape.
    `is_new` is a display hint only: it is not persisted and is ignored
    by equality.
    """

    id: str
    name: str
    description: str
    rarity: Rarity
    element: Element
    tags: tuple[str, ...] = ()
    is_new: bool = field(default=False, compare=False)

    @classmethod
    def create(
        cls,
        name: str,
        description: str,
        rarity: Rarity,
        element: Element,
        tags: tuple[str, ...] = (),
    ) -> "Dragon":
        """Create a freshly acquired dragon with a new unique id."""
        return cls(
            id=str(uuid4()),
            name=name,
            description=description,
            rarity=rarity,
            element=element,
            tags=tags,
            is_new=True,
        )

    def seen(self) -> "Dragon":
        """Copy of this dragon without the new-acquisition flag."""
        return replace(self, is_new=False)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON storage."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "rarity": int(self.rarity),
            "element": self.element.value,
            "tags": list(self.tags),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Dragon":
        """
        Deserialize from JSON storage.

        Raises:
            KeyError: If a required field is missing
            ValueError: If rarity or element is not a known value
        """
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            description=str(data.get("description", "")),
            rarity=Rarity(int(data["rarity"])),
            element=Element(data["element"]),
            tags=tuple(str(tag) for tag in data.get("tags", [])),
        )
