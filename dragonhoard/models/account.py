from dataclasses import dataclass, field
from datetime import datetime

from dragonhoard.models.dragon import Dragon


@dataclass
class AccountState:
    """
    Persisted progress of one account.

    Attributes:
        username: Unique account name
        currency: Gold, never negative
        experience: Total XP earned
        collection: Dragons in most-recent-first order
        created_at: Registration time, if known
    """

    username: str
    currency: int
    experience: int
    collection: list[Dragon] = field(default_factory=list)
    created_at: datetime | None = None
