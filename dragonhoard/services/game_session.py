"""
Game session: one player's live game state.

Holds the ledger, the lair and the breeding selection for a logged-in
account, and runs every mutating action against them.

INVARIANTS:
- At most one action runs at a time. Anything arriving while a chest or
  breeding is in flight is rejected with SessionBusyError, not queued.
- Every committed change is persisted right after the commit, in commit
  order. Persistence is best effort and never undoes a commit.
- A chest's cost is spent when the chest is opened, before generation.
  It is not refunded if generation fails.
- Breeding is all-or-nothing: on failure no parent is consumed and no
  XP is granted.
- Results are revealed no sooner than the presentation floor, even when
  the generator answers faster.
"""

import asyncio
import logging
import random
import secrets
from collections.abc import AsyncIterator, Awaitable
from contextlib import asynccontextmanager
from typing import Protocol, TypeVar

from sqlalchemy.exc import SQLAlchemyError

from dragonhoard.config import settings
from dragonhoard.models.account import AccountState
from dragonhoard.models.catalog import BREEDING_XP, ChestOffer
from dragonhoard.models.collection import MAX_PAIR_MESSAGE, DragonCollection, InvalidSelectionError
from dragonhoard.models.dragon import Dragon
from dragonhoard.models.failure import GenerationFailedError, SessionBusyError
from dragonhoard.models.progression import ProgressionLedger
from dragonhoard.services.breeding import resolve_offspring
from dragonhoard.services.generator import DragonGenerator
from dragonhoard.services.tier_resolver import resolve_element
from dragonhoard.services.valuation import collection_score, dragon_value

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ProgressStore(Protocol):
    """Where committed progress is saved."""

    async def persist(
        self,
        username: str,
        currency: int,
        experience: int,
        collection: list[Dragon],
    ) -> None: ...


class GameSession:
    """
    Live game state of one account.

    Created from a loaded AccountState at login and discarded at logout.
    Discarding a session never touches stored progress. `token` is the
    secret the client presents on every game action.
    """

    def __init__(
        self,
        state: AccountState,
        store: ProgressStore,
        presentation_floor: float | None = None,
        reveal_delay: float | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.username = state.username
        self.ledger = ProgressionLedger(currency=state.currency, experience=state.experience)
        self.collection = DragonCollection(dragons=list(state.collection))
        self.presentation_floor = (
            settings.presentation_floor_seconds if presentation_floor is None else presentation_floor
        )
        self.reveal_delay = settings.reveal_delay_seconds if reveal_delay is None else reveal_delay
        self.token = secrets.token_urlsafe(24)
        self._store = store
        self._rng = rng
        self._busy = False

    # --- State ---

    @property
    def busy(self) -> bool:
        """True while a chest or breeding flow is in progress."""
        return self._busy

    def score(self) -> int:
        """Collection score of the lair."""
        return collection_score(self.collection)

    def to_state(self) -> AccountState:
        """Snapshot of the persistable progress."""
        return AccountState(
            username=self.username,
            currency=self.ledger.currency,
            experience=self.ledger.experience,
            collection=list(self.collection.dragons),
        )

    # --- Flow control ---

    def _ensure_idle(self, action: str) -> None:
        if self._busy:
            logger.info("ACTION_REJECTED_BUSY", extra={"username": self.username, "action": action})
            raise SessionBusyError(action)

    @asynccontextmanager
    async def _exclusive(self, action: str) -> AsyncIterator[None]:
        """Run an action with the session marked busy."""
        self._ensure_idle(action)
        self._busy = True
        try:
            yield
        finally:
            self._busy = False

    async def _reveal(self, work: Awaitable[T]) -> T:
        """Await `work`, waiting at least the presentation floor, then the reveal delay."""
        floor = asyncio.ensure_future(asyncio.sleep(self.presentation_floor))
        try:
            result = await work
        except BaseException:
            floor.cancel()
            raise
        await floor
        if self.reveal_delay > 0:
            await asyncio.sleep(self.reveal_delay)
        return result

    async def _persist(self) -> None:
        """Save the current progress. Failures are logged, the commit stands."""
        try:
            await self._store.persist(
                self.username,
                self.ledger.currency,
                self.ledger.experience,
                list(self.collection.dragons),
            )
        except (SQLAlchemyError, OSError):
            logger.exception("PERSIST_FAILED", extra={"username": self.username})

    # --- Actions ---

    async def open_chest(self, offer: ChestOffer, generator: DragonGenerator) -> Dragon:
        """
        Buy and open a chest.

        Returns:
            The new dragon, already added to the front of the lair.

        Raises:
            SessionBusyError: If another action is in flight
            InsufficientFundsError: If the chest is unaffordable (nothing changes)
            GenerationFailedError: If generation fails (the cost stays spent)
        """
        async with self._exclusive("open_chest"):
            self.ledger.spend(offer.cost)
            await self._persist()

            element = resolve_element(offer.rarity, self._rng)
            logger.info(
                "CHEST_OPENED",
                extra={
                    "username": self.username,
                    "chest": offer.chest_id,
                    "element": element.value,
                },
            )

            try:
                content = await self._reveal(generator.generate(offer.rarity, element))
            except GenerationFailedError:
                logger.warning(
                    "CHEST_GENERATION_FAILED",
                    extra={"username": self.username, "chest": offer.chest_id, "cost": offer.cost},
                )
                raise

            dragon = Dragon.create(
                name=content.name,
                description=content.description,
                rarity=offer.rarity,
                element=element,
                tags=content.tags,
            )
            self.collection.add(dragon)
            self.ledger.grant_xp(offer.xp)
            await self._persist()
            return dragon

    async def breed(self, generator: DragonGenerator) -> Dragon:
        """
        Breed the two selected dragons.

        Returns:
            The offspring, added to the front of the lair. Both parents are gone.

        Raises:
            SessionBusyError: If another action is in flight
            InvalidSelectionError: If the selection is not a breedable pair
            GenerationFailedError: If generation fails (nothing changes)
        """
        async with self._exclusive("breed"):
            if len(self.collection.selected_ids) != 2:
                raise InvalidSelectionError("Select two dragons to breed.")
            if not self.collection.can_breed:
                raise InvalidSelectionError(MAX_PAIR_MESSAGE)

            parent_a, parent_b = self.collection.selected_dragons()
            resolved = await self._reveal(resolve_offspring(parent_a, parent_b, generator))

            offspring = resolved.to_dragon()
            self.collection.replace_parents(offspring, parent_a.id, parent_b.id)
            self.ledger.grant_xp(BREEDING_XP)
            logger.info(
                "BREED_COMMITTED",
                extra={
                    "username": self.username,
                    "rarity": int(offspring.rarity),
                    "element": offspring.element.value,
                },
            )
            await self._persist()
            return offspring

    async def sell(self, dragon_id: str) -> int:
        """
        Sell a dragon for its value.

        Returns:
            The gold credited.

        Raises:
            SessionBusyError: If another action is in flight
            DragonNotFoundError: If the dragon is not in the lair
        """
        async with self._exclusive("sell"):
            dragon = self.collection.remove(dragon_id)
            value = dragon_value(dragon)
            self.ledger.credit(value)
            await self._persist()
            return value

    def toggle_select(self, dragon_id: str) -> list[str]:
        """Toggle a dragon in the breeding selection. See DragonCollection.toggle_select."""
        self._ensure_idle("select")
        return self.collection.toggle_select(dragon_id)

    def clear_selection(self) -> None:
        """Cancel the breeding selection."""
        self._ensure_idle("clear_selection")
        self.collection.clear_selection()
