"""Chest catalog endpoint."""

from fastapi import APIRouter
from pydantic import BaseModel, Field

from dragonhoard.models.catalog import CHESTS, DROP_RATES

router = APIRouter(tags=["catalog"])


class ChestResponse(BaseModel):
    """A chest on the market."""

    chest_id: str
    name: str
    rarity: int
    description: str
    cost: int
    xp: int
    drop_rates: dict[int, float] = Field(
        default_factory=dict,
        description="Probability of each element tier",
    )


@router.get("/chests", response_model=list[ChestResponse])
async def list_chests() -> list[ChestResponse]:
    """List the chests available for purchase, cheapest first."""
    return [
        ChestResponse(
            chest_id=chest.chest_id,
            name=chest.name,
            rarity=int(chest.rarity),
            description=chest.description,
            cost=chest.cost,
            xp=chest.xp,
            drop_rates=dict(DROP_RATES[chest.rarity]),
        )
        for chest in CHESTS
    ]
