"""
Database CRUD operations.

Provides async functions for registering, authenticating, updating and
ranking accounts.
"""

import hashlib
import hmac
import logging
import secrets

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from dragonhoard.models.account import AccountState
from dragonhoard.models.catalog import STARTING_CURRENCY
from dragonhoard.models.db import AccountDB
from dragonhoard.models.dragon import Dragon
from dragonhoard.models.failure import FailureKind, KnownError

logger = logging.getLogger(__name__)

PBKDF2_ITERATIONS = 100_000


class AccountNotFoundError(KnownError):
    """Raised when logging in to an account that does not exist."""

    def __init__(self, username: str):
        self.username = username
        super().__init__(
            kind=FailureKind.NOT_FOUND,
            message="User not found.",
            detail=f"No account named {username!r}",
            suggestion="Check the name or register a new account.",
            status_code=404,
        )


class BadCredentialsError(KnownError):
    """Raised when the password does not match."""

    def __init__(self) -> None:
        super().__init__(
            kind=FailureKind.BAD_CREDENTIALS,
            message="Wrong password.",
            status_code=401,
        )


class AccountExistsError(KnownError):
    """Raised when registering a username that is already taken."""

    def __init__(self, username: str):
        self.username = username
        super().__init__(
            kind=FailureKind.ALREADY_EXISTS,
            message="That username is already taken.",
            detail=f"Account {username!r} exists",
            suggestion="Pick another name or log in.",
            status_code=409,
        )


# --- Password hashing ---


def hash_password(password: str, salt: str) -> str:
    """PBKDF2-HMAC-SHA256 of a password with a hex salt."""
    digest = hashlib.pbkdf2_hmac(
        "sha256", password.encode("utf-8"), bytes.fromhex(salt), PBKDF2_ITERATIONS
    )
    return digest.hex()


def verify_password(account: AccountDB, password: str) -> bool:
    """Check a password against the stored hash."""
    candidate = hash_password(password, account.password_salt)
    return hmac.compare_digest(candidate, account.password_hash)


# --- Account Operations ---


async def get_account(session: AsyncSession, username: str) -> AccountDB | None:
    """
    Get an account by username.

    Returns None if no account exists.
    """
    result = await session.execute(select(AccountDB).where(AccountDB.username == username))
    return result.scalar_one_or_none()


async def create_account(session: AsyncSession, username: str, password: str) -> AccountDB:
    """
    Register a new account with starting gold and an empty lair.

    Raises:
        AccountExistsError: If the username is taken
    """
    if await get_account(session, username) is not None:
        raise AccountExistsError(username)

    salt = secrets.token_hex(16)
    account = AccountDB(
        username=username,
        password_salt=salt,
        password_hash=hash_password(password, salt),
        currency=STARTING_CURRENCY,
        experience=0,
        collection=[],
    )
    session.add(account)
    await session.flush()
    # Load server-side defaults such as created_at
    await session.refresh(account)
    return account


async def authenticate(session: AsyncSession, username: str, password: str) -> AccountDB:
    """
    Load an account after checking its password.

    Raises:
        AccountNotFoundError: If no account exists
        BadCredentialsError: If the password does not match
    """
    account = await get_account(session, username)
    if account is None:
        raise AccountNotFoundError(username)
    if not verify_password(account, password):
        raise BadCredentialsError()
    return account


async def update_progress(
    session: AsyncSession,
    username: str,
    currency: int,
    experience: int,
    collection: list[Dragon],
) -> AccountDB | None:
    """
    Overwrite an account's gold, XP and lair.

    Returns None (and writes nothing) if the account does not exist.
    """
    account = await get_account(session, username)
    if account is None:
        return None

    account.currency = currency
    account.experience = experience
    account.collection = [dragon.to_dict() for dragon in collection]
    await session.flush()
    return account


async def list_accounts_by_experience(session: AsyncSession, limit: int = 50) -> list[AccountDB]:
    """Accounts ordered by experience, highest first. Ties keep registration order."""
    result = await session.execute(
        select(AccountDB).order_by(AccountDB.experience.desc(), AccountDB.id.asc()).limit(limit)
    )
    return list(result.scalars().all())


def account_to_state(account: AccountDB) -> AccountState:
    """
    Convert a database account to a domain model.

    Stored dragons that no longer parse are skipped with a warning.
    """
    dragons: list[Dragon] = []
    for raw in account.collection or []:
        try:
            dragons.append(Dragon.from_dict(raw))
        except (KeyError, TypeError, ValueError):
            logger.warning(
                "SKIPPED_CORRUPT_DRAGON",
                extra={"username": account.username, "raw": raw},
            )

    return AccountState(
        username=account.username,
        currency=account.currency,
        experience=account.experience,
        collection=dragons,
        created_at=account.created_at,
    )
