"""
Tests for the Anthropic-backed dragon generator.

The Anthropic client is mocked; these tests cover request shape and
payload validation only.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import anthropic
import httpx
import pytest
from anthropic.types import TextBlock, ToolUseBlock

from dragonhoard.models.catalog import Element, Rarity
from dragonhoard.models.dragon import Dragon
from dragonhoard.models.failure import GenerationFailedError
from dragonhoard.services.generator import (
    DRAGON_TOOL,
    OFFSPRING_TOOL,
    AnthropicDragonGenerator,
    build_breed_prompt,
    build_chest_prompt,
)


def _tool_block(name: str, payload: dict) -> MagicMock:
    block = MagicMock(spec=ToolUseBlock)
    block.name = name
    block.input = payload
    return block


def _response(*blocks: object) -> MagicMock:
    response = MagicMock()
    response.content = list(blocks)
    response.usage.input_tokens = 120
    response.usage.output_tokens = 80
    return response


@pytest.fixture
def mock_client() -> MagicMock:
    client = MagicMock()
    client.messages.create = AsyncMock()
    return client


@pytest.fixture
def generator(mock_client: MagicMock) -> AnthropicDragonGenerator:
    with patch(
        "dragonhoard.services.generator.anthropic.AsyncAnthropic",
        return_value=mock_client,
    ):
        return AnthropicDragonGenerator(api_key="test-key", model="test-model", max_tokens=512)


@pytest.fixture
def parents() -> tuple[Dragon, Dragon]:
    return (
        Dragon(
            id="a", name="Cinder", description="Ash.", rarity=Rarity.IRON, element=Element.FIRE
        ),
        Dragon(id="b", name="Tide", description="Salt.", rarity=Rarity.IRON, element=Element.WATER),
    )


class TestPrompts:
    def test_chest_prompt_mentions_element_and_rarity(self) -> None:
        prompt = build_chest_prompt(Rarity.SILVER, Element.VOID)

        assert "Void" in prompt
        assert "3 star" in prompt

    def test_breed_prompt_lists_parents_and_elements(self, parents) -> None:
        prompt = build_breed_prompt(Rarity.SILVER, *parents)

        assert "Cinder" in prompt and "Tide" in prompt
        assert "rarity 3" in prompt
        for element in Element:
            assert element.value in prompt


class TestGenerate:
    async def test_parses_tool_payload(self, generator, mock_client) -> None:
        """A valid tool call becomes DragonContent."""
        mock_client.messages.create.return_value = _response(
            _tool_block(
                "record_dragon",
                {"name": "Ashwing", "description": "Born of embers.", "tags": ["Fire", "Wings"]},
            )
        )

        content = await generator.generate(Rarity.WOODEN, Element.FIRE)

        assert content.name == "Ashwing"
        assert content.tags == ("Fire", "Wings")

    async def test_forces_tool_choice(self, generator, mock_client) -> None:
        """The request forces the dragon tool and uses the configured model."""
        mock_client.messages.create.return_value = _response(
            _tool_block("record_dragon", {"name": "A", "description": "B", "tags": []})
        )

        await generator.generate(Rarity.WOODEN, Element.EARTH)

        kwargs = mock_client.messages.create.call_args.kwargs
        assert kwargs["model"] == "test-model"
        assert kwargs["max_tokens"] == 512
        assert kwargs["tools"] == [DRAGON_TOOL]
        assert kwargs["tool_choice"] == {"type": "tool", "name": "record_dragon"}

    async def test_connection_error_becomes_generation_failure(
        self, generator, mock_client
    ) -> None:
        mock_client.messages.create.side_effect = anthropic.APIConnectionError(
            request=httpx.Request("POST", "https://api.anthropic.com/v1/messages")
        )

        with pytest.raises(GenerationFailedError) as exc_info:
            await generator.generate(Rarity.WOODEN, Element.FIRE)

        assert exc_info.value.status_code == 502

    async def test_missing_tool_block_fails(self, generator, mock_client) -> None:
        """Plain text without a tool call is not a payload."""
        text = MagicMock(spec=TextBlock)
        text.text = "Here is your dragon!"
        mock_client.messages.create.return_value = _response(text)

        with pytest.raises(GenerationFailedError, match="summoning failed"):
            await generator.generate(Rarity.WOODEN, Element.FIRE)

    async def test_empty_name_fails(self, generator, mock_client) -> None:
        mock_client.messages.create.return_value = _response(
            _tool_block("record_dragon", {"name": "", "description": "B", "tags": []})
        )

        with pytest.raises(GenerationFailedError):
            await generator.generate(Rarity.WOODEN, Element.FIRE)


class TestGenerateOffspring:
    async def test_parses_offspring(self, generator, mock_client, parents) -> None:
        mock_client.messages.create.return_value = _response(
            _tool_block(
                "record_offspring",
                {
                    "name": "Steamcoil",
                    "description": "Fire met water.",
                    "tags": ["Mist"],
                    "element": "Energy",
                },
            )
        )

        content = await generator.generate_offspring(Rarity.SILVER, *parents)

        assert content.element == Element.ENERGY
        kwargs = mock_client.messages.create.call_args.kwargs
        assert kwargs["tools"] == [OFFSPRING_TOOL]

    async def test_unknown_element_fails(self, generator, mock_client, parents) -> None:
        """An element outside the fifteen is rejected."""
        mock_client.messages.create.return_value = _response(
            _tool_block(
                "record_offspring",
                {"name": "X", "description": "Y", "tags": [], "element": "Plasma"},
            )
        )

        with pytest.raises(GenerationFailedError):
            await generator.generate_offspring(Rarity.SILVER, *parents)

    async def test_wrong_tool_name_ignored(self, generator, mock_client, parents) -> None:
        mock_client.messages.create.return_value = _response(
            _tool_block("record_dragon", {"name": "X", "description": "Y", "tags": []})
        )

        with pytest.raises(GenerationFailedError):
            await generator.generate_offspring(Rarity.SILVER, *parents)
