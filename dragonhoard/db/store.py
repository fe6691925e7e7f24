"""
Account store.

Wraps the account operations behind load / create / persist / list_ranked.
Each call opens its own session and commits before returning, so a chest
debit is stored even when the generation that follows fails.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from dragonhoard.db.operations import (
    account_to_state,
    authenticate,
    create_account,
    list_accounts_by_experience,
    update_progress,
)
from dragonhoard.models.account import AccountState
from dragonhoard.models.dragon import Dragon

logger = logging.getLogger(__name__)


class AccountStore:
    """Account persistence keyed by username."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def load(self, username: str, password: str) -> AccountState:
        """
        Load an account's progress.

        Raises:
            AccountNotFoundError: If no account exists
            BadCredentialsError: If the password does not match
        """
        async with self._session_factory() as session:
            account = await authenticate(session, username, password)
            return account_to_state(account)

    async def create(self, username: str, password: str) -> AccountState:
        """
        Register an account with default progress.

        Raises:
            AccountExistsError: If the username is taken
        """
        async with self._session_factory() as session:
            account = await create_account(session, username, password)
            await session.commit()
            logger.info("ACCOUNT_CREATED", extra={"username": username})
            return account_to_state(account)

    async def persist(
        self,
        username: str,
        currency: int,
        experience: int,
        collection: list[Dragon],
    ) -> None:
        """Save progress. Unknown usernames are logged and ignored."""
        async with self._session_factory() as session:
            account = await update_progress(session, username, currency, experience, collection)
            if account is None:
                logger.warning("PERSIST_UNKNOWN_ACCOUNT", extra={"username": username})
                return
            await session.commit()

    async def list_ranked(self, limit: int) -> list[AccountState]:
        """Accounts by experience, highest first."""
        async with self._session_factory() as session:
            accounts = await list_accounts_by_experience(session, limit)
            return [account_to_state(account) for account in accounts]
