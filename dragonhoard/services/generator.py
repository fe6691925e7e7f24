"""
Dragon content generator.

Calls Claude to write a dragon's name, lore and tags, and for breeding
to pick the offspring's element. The model is forced to answer through a
single tool call so the payload arrives as structured JSON, which is then
validated with pydantic.

Any transport error, missing tool call or malformed payload surfaces as
GenerationFailedError. The generator never changes game state.
"""

import logging
from typing import Any, Protocol, cast

import anthropic
from anthropic.types import MessageParam, ToolParam, ToolUseBlock
from pydantic import BaseModel, Field, ValidationError

from dragonhoard.config import settings
from dragonhoard.models.catalog import Element, Rarity
from dragonhoard.models.dragon import Dragon, DragonContent, OffspringContent
from dragonhoard.models.failure import GenerationFailedError

logger = logging.getLogger(__name__)

ELEMENT_NAMES = [element.value for element in Element]

CHEST_SYSTEM_PROMPT = (
    "You are the Dragon Treasury. You create unique dragons bound to the elements."
)

BREED_SYSTEM_PROMPT = (
    "You are the Dragon Master. You cross two dragons to create a new kind of dragon."
)

CHEST_TEMPERATURE = 0.9
BREED_TEMPERATURE = 0.95


class DragonGenerator(Protocol):
    """Source of dragon flavour content."""

    async def generate(self, rarity: Rarity, element: Element) -> DragonContent:
        """Write a dragon for a chest of `rarity` with the given element."""
        ...

    async def generate_offspring(
        self, rarity: Rarity, parent_a: Dragon, parent_b: Dragon
    ) -> OffspringContent:
        """Write the offspring of two dragons and choose its element."""
        ...


# =============================================================================
# PAYLOAD SCHEMAS
# =============================================================================


class DragonPayload(BaseModel):
    """Structured payload expected from the chest tool call."""

    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    tags: list[str] = Field(default_factory=list)


class OffspringPayload(DragonPayload):
    """Structured payload expected from the breeding tool call."""

    element: Element


_DRAGON_PROPERTIES: dict[str, Any] = {
    "name": {"type": "string", "description": "The dragon's name"},
    "description": {
        "type": "string",
        "description": "A poetic description or legend of the dragon",
    },
    "tags": {
        "type": "array",
        "items": {"type": "string"},
        "description": "Traits, for example: Scales, Wings, Breath",
    },
}

DRAGON_TOOL: ToolParam = {
    "name": "record_dragon",
    "description": "Record the newly summoned dragon.",
    "input_schema": {
        "type": "object",
        "properties": _DRAGON_PROPERTIES,
        "required": ["name", "description", "tags"],
    },
}

OFFSPRING_TOOL: ToolParam = {
    "name": "record_offspring",
    "description": "Record the dragon born from the two parents.",
    "input_schema": {
        "type": "object",
        "properties": {
            **_DRAGON_PROPERTIES,
            "element": {
                "type": "string",
                "enum": ELEMENT_NAMES,
                "description": "The offspring's element, one of the listed values",
            },
        },
        "required": ["name", "description", "tags", "element"],
    },
}


# =============================================================================
# PROMPTS
# =============================================================================


def build_chest_prompt(rarity: Rarity, element: Element) -> str:
    """User prompt for a chest dragon."""
    return (
        f"Create a dragon of the element: {element.value}.\n"
        f"Chest rarity: {int(rarity)} star(s).\n\n"
        "1. Give it a beautiful fantasy name.\n"
        "2. Write a short but epic description (it may rhyme or read as a legend) "
        f"revealing its nature and its bond with {element.value}.\n"
        "3. Add 2-3 tags (traits)."
    )


def _describe_parent(index: int, dragon: Dragon) -> str:
    return (
        f'{index}. "{dragon.name}" (Element: {dragon.element.value}, '
        f"Rarity: {int(dragon.rarity)}*, Description: {dragon.description})"
    )


def build_breed_prompt(rarity: Rarity, parent_a: Dragon, parent_b: Dragon) -> str:
    """User prompt for breeding two dragons."""
    return (
        "Cross two dragons:\n"
        f"{_describe_parent(1, parent_a)}\n"
        f"{_describe_parent(2, parent_b)}\n\n"
        f"Goal: create a new dragon of rarity {int(rarity)} stars.\n\n"
        "Tasks:\n"
        "1. Choose the offspring's new element.\n"
        "   - If the parents' rarities differ, the element may lean toward the rarer parent.\n"
        "   - If they are equal, it may be a mutation.\n"
        f"   Available elements: {', '.join(ELEMENT_NAMES)}.\n"
        "2. Give it a name.\n"
        "3. Write a description explaining its descent from both parents.\n"
        "4. Tags."
    )


# =============================================================================
# ANTHROPIC IMPLEMENTATION
# =============================================================================


class AnthropicDragonGenerator:
    """DragonGenerator backed by the Anthropic Messages API."""

    def __init__(
        self,
        api_key: str,
        model: str | None = None,
        max_tokens: int | None = None,
    ) -> None:
        self._client = anthropic.AsyncAnthropic(api_key=api_key)
        self.model = model or settings.generation_model
        self.max_tokens = max_tokens or settings.generation_max_tokens

    async def _call_tool(
        self,
        system: str,
        prompt: str,
        tool: ToolParam,
        temperature: float,
    ) -> dict[str, Any]:
        """Send one prompt that must be answered with `tool` and return its input."""
        messages: list[MessageParam] = [{"role": "user", "content": prompt}]

        try:
            response = await self._client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                system=system,
                tools=[tool],
                tool_choice={"type": "tool", "name": tool["name"]},
                messages=messages,
                temperature=temperature,
            )
        except anthropic.APIError as e:
            logger.warning(
                "GENERATION_FAILED",
                extra={"tool": tool["name"], "error_type": type(e).__name__},
            )
            raise GenerationFailedError(detail=f"{type(e).__name__}: {e}") from e

        if response.usage:
            logger.info(
                "generation_usage",
                extra={
                    "tool": tool["name"],
                    "input_tokens": response.usage.input_tokens,
                    "output_tokens": response.usage.output_tokens,
                },
            )

        for block in response.content:
            if isinstance(block, ToolUseBlock) and block.name == tool["name"]:
                return cast(dict[str, Any], block.input)

        logger.warning("GENERATION_FAILED", extra={"tool": tool["name"], "error_type": "no_payload"})
        raise GenerationFailedError(detail="No structured payload returned")

    async def generate(self, rarity: Rarity, element: Element) -> DragonContent:
        """Write a chest dragon."""
        raw = await self._call_tool(
            CHEST_SYSTEM_PROMPT,
            build_chest_prompt(rarity, element),
            DRAGON_TOOL,
            CHEST_TEMPERATURE,
        )
        try:
            payload = DragonPayload.model_validate(raw)
        except ValidationError as e:
            raise GenerationFailedError(detail=f"Malformed dragon payload: {e}") from e

        return DragonContent(
            name=payload.name,
            description=payload.description,
            tags=tuple(payload.tags),
        )

    async def generate_offspring(
        self, rarity: Rarity, parent_a: Dragon, parent_b: Dragon
    ) -> OffspringContent:
        """Write a bred dragon. The element must be one of the fifteen known values."""
        raw = await self._call_tool(
            BREED_SYSTEM_PROMPT,
            build_breed_prompt(rarity, parent_a, parent_b),
            OFFSPRING_TOOL,
            BREED_TEMPERATURE,
        )
        try:
            payload = OffspringPayload.model_validate(raw)
        except ValidationError as e:
            raise GenerationFailedError(detail=f"Malformed offspring payload: {e}") from e

        return OffspringContent(
            name=payload.name,
            description=payload.description,
            element=payload.element,
            tags=tuple(payload.tags),
        )
