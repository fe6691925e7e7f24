"""
Progression ledger.

Tracks a player's gold and experience and derives level from experience.

INVARIANTS:
- Currency never goes negative
- A spend either debits the full amount or nothing
- Experience only increases
"""

from dataclasses import dataclass

from dragonhoard.models.catalog import XP_PER_LEVEL
from dragonhoard.models.failure import FailureKind, KnownError


class InsufficientFundsError(KnownError):
    """Raised when a spend exceeds the available gold. Nothing is debited."""

    def __init__(self, required: int, available: int):
        self.required = required
        self.available = available
        super().__init__(
            kind=FailureKind.INSUFFICIENT_FUNDS,
            message="Not enough gold!",
            detail=f"Required {required}, available {available}",
            suggestion="Sell a dragon or open a cheaper chest.",
            status_code=400,
        )


@dataclass
class ProgressionLedger:
    """Gold and experience for one account."""

    currency: int = 0
    experience: int = 0

    def can_afford(self, amount: int) -> bool:
        """True if `amount` gold can be spent."""
        return self.currency >= amount

    def spend(self, amount: int) -> None:
        """
        Debit gold.

        Raises:
            InsufficientFundsError: If currency < amount (currency unchanged)
            ValueError: If amount is negative
        """
        if amount < 0:
            raise ValueError(f"Cannot spend a negative amount: {amount}")
        if not self.can_afford(amount):
            raise InsufficientFundsError(required=amount, available=self.currency)
        self.currency -= amount

    def credit(self, amount: int) -> None:
        """Add gold."""
        if amount < 0:
            raise ValueError(f"Cannot credit a negative amount: {amount}")
        self.currency += amount

    def grant_xp(self, amount: int) -> None:
        """Add experience."""
        if amount < 0:
            raise ValueError(f"Cannot grant negative experience: {amount}")
        self.experience += amount

    @property
    def level(self) -> int:
        """Player level. Starts at 1, one level per 1000 XP, no cap."""
        return self.experience // XP_PER_LEVEL + 1

    @property
    def level_progress(self) -> float:
        """Fraction of the current level completed, in [0, 1)."""
        return (self.experience % XP_PER_LEVEL) / XP_PER_LEVEL
