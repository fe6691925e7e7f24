"""
Breeding resolver.

Offspring rarity is a pure function of the parents' rarities:
- Equal rarities upgrade by one tier, capped at the maximum
- Different rarities inherit the higher one

The offspring's element is chosen by the content generator, not by the
drop-rate tables. Callers must not pass two max-rarity parents; the
selection rule rejects that pair before breeding is attempted.
"""

from dataclasses import dataclass

from dragonhoard.models.catalog import MAX_RARITY, Element, Rarity
from dragonhoard.models.dragon import Dragon, OffspringContent
from dragonhoard.models.failure import GenerationFailedError
from dragonhoard.services.generator import DragonGenerator


@dataclass(frozen=True, slots=True)
class ResolvedOffspring:
    """Rarity computed by the resolver plus the generator's content."""

    rarity: Rarity
    content: OffspringContent

    def to_dragon(self) -> Dragon:
        """Create the offspring dragon with a fresh id."""
        return Dragon.create(
            name=self.content.name,
            description=self.content.description,
            rarity=self.rarity,
            element=self.content.element,
            tags=self.content.tags,
        )


def offspring_rarity(rarity_a: Rarity, rarity_b: Rarity) -> Rarity:
    """Rarity of the offspring of two parents."""
    if rarity_a == rarity_b:
        return Rarity(min(rarity_a + 1, MAX_RARITY))
    return Rarity(max(rarity_a, rarity_b))


async def resolve_offspring(
    parent_a: Dragon,
    parent_b: Dragon,
    generator: DragonGenerator,
) -> ResolvedOffspring:
    """
    Resolve the offspring of two dragons.

    Raises:
        GenerationFailedError: If the generator fails or returns bad data
    """
    rarity = offspring_rarity(parent_a.rarity, parent_b.rarity)
    content = await generator.generate_offspring(rarity, parent_a, parent_b)
    if not isinstance(content.element, Element):
        raise GenerationFailedError(detail=f"Unknown offspring element: {content.element!r}")
    return ResolvedOffspring(rarity=rarity, content=content)
