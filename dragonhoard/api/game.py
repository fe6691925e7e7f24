"""
Game API endpoints.

Chest opening, breeding, selling and breeding selection for a
logged-in player. Every route runs against the player's live session
and requires the X-Session-Token header issued at login.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from dragonhoard.api.dependencies import get_game_session, get_generator
from dragonhoard.models.catalog import Element, element_tier, get_chest
from dragonhoard.models.dragon import Dragon
from dragonhoard.models.failure import FailureKind, KnownError
from dragonhoard.services.game_session import GameSession
from dragonhoard.services.generator import DragonGenerator
from dragonhoard.services.valuation import dragon_score, dragon_value

router = APIRouter(prefix="/game", tags=["game"])


class UnknownChestError(KnownError):
    """Raised for a chest id that is not in the catalog."""

    def __init__(self, chest_id: str):
        self.chest_id = chest_id
        super().__init__(
            kind=FailureKind.NOT_FOUND,
            message="There is no such chest on the market.",
            detail=f"Unknown chest id: {chest_id}",
            suggestion="See GET /chests for the available chests.",
            status_code=404,
        )


class DragonResponse(BaseModel):
    """A dragon with its derived value and score."""

    id: str
    name: str
    description: str
    rarity: int
    element: Element
    element_tier: int
    tags: list[str] = Field(default_factory=list)
    is_new: bool = False
    value: int = Field(..., description="Gold credited if sold")
    score: int = Field(..., description="Contribution to the collection score")


class GameStateResponse(BaseModel):
    """Full state of a player's session."""

    username: str
    currency: int
    experience: int
    level: int
    level_progress: float = Field(..., ge=0.0, lt=1.0)
    score: int
    collection: list[DragonResponse] = Field(default_factory=list)
    selected_ids: list[str] = Field(default_factory=list)
    can_breed: bool = False
    busy: bool = False


class ChestOpenResponse(BaseModel):
    """Result of opening a chest."""

    dragon: DragonResponse
    state: GameStateResponse


class BreedResponse(BaseModel):
    """Result of breeding two dragons."""

    offspring: DragonResponse
    state: GameStateResponse


class SellResponse(BaseModel):
    """Result of selling a dragon."""

    dragon_id: str
    value: int
    state: GameStateResponse


class SelectionResponse(BaseModel):
    """Breeding selection after a change."""

    selected_ids: list[str] = Field(default_factory=list)
    can_breed: bool = False


def dragon_response(dragon: Dragon) -> DragonResponse:
    """Render a dragon with its value and score."""
    return DragonResponse(
        id=dragon.id,
        name=dragon.name,
        description=dragon.description,
        rarity=int(dragon.rarity),
        element=dragon.element,
        element_tier=element_tier(dragon.element),
        tags=list(dragon.tags),
        is_new=dragon.is_new,
        value=dragon_value(dragon),
        score=dragon_score(dragon),
    )


def state_response(game: GameSession) -> GameStateResponse:
    """Render a session's state."""
    return GameStateResponse(
        username=game.username,
        currency=game.ledger.currency,
        experience=game.ledger.experience,
        level=game.ledger.level,
        level_progress=game.ledger.level_progress,
        score=game.score(),
        collection=[dragon_response(dragon) for dragon in game.collection],
        selected_ids=list(game.collection.selected_ids),
        can_breed=game.collection.can_breed,
        busy=game.busy,
    )


@router.get("/{username}", response_model=GameStateResponse)
async def get_game_state(
    game: Annotated[GameSession, Depends(get_game_session)],
) -> GameStateResponse:
    """Get the live state of a logged-in player."""
    return state_response(game)


@router.post("/{username}/chests/{chest_id}/open", response_model=ChestOpenResponse)
async def open_chest(
    chest_id: str,
    game: Annotated[GameSession, Depends(get_game_session)],
    generator: Annotated[DragonGenerator, Depends(get_generator)],
) -> ChestOpenResponse:
    """
    Buy and open a chest.

    The cost is spent as soon as the chest opens. If the summoning fails
    the gold is not returned.
    """
    offer = get_chest(chest_id)
    if offer is None:
        raise UnknownChestError(chest_id)

    dragon = await game.open_chest(offer, generator)
    return ChestOpenResponse(dragon=dragon_response(dragon), state=state_response(game))


@router.post("/{username}/breed", response_model=BreedResponse)
async def breed(
    game: Annotated[GameSession, Depends(get_game_session)],
    generator: Annotated[DragonGenerator, Depends(get_generator)],
) -> BreedResponse:
    """
    Breed the two selected dragons.

    Both parents are consumed only if the offspring is created.
    """
    offspring = await game.breed(generator)
    return BreedResponse(offspring=dragon_response(offspring), state=state_response(game))


@router.post("/{username}/dragons/{dragon_id}/sell", response_model=SellResponse)
async def sell_dragon(
    dragon_id: str,
    game: Annotated[GameSession, Depends(get_game_session)],
) -> SellResponse:
    """Sell a dragon for gold."""
    value = await game.sell(dragon_id)
    return SellResponse(dragon_id=dragon_id, value=value, state=state_response(game))


@router.post("/{username}/selection/{dragon_id}", response_model=SelectionResponse)
async def toggle_selection(
    dragon_id: str,
    game: Annotated[GameSession, Depends(get_game_session)],
) -> SelectionResponse:
    """
    Toggle a dragon in the breeding selection.

    Pairing two golden dragons is refused and leaves the first selected.
    """
    selected = game.toggle_select(dragon_id)
    return SelectionResponse(selected_ids=selected, can_breed=game.collection.can_breed)


@router.delete("/{username}/selection", response_model=SelectionResponse)
async def clear_selection(
    game: Annotated[GameSession, Depends(get_game_session)],
) -> SelectionResponse:
    """Cancel the breeding selection."""
    game.clear_selection()
    return SelectionResponse(selected_ids=[], can_breed=False)
