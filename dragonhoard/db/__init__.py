from dragonhoard.db.database import get_session, get_session_factory, init_db
from dragonhoard.db.operations import (
    AccountExistsError,
    AccountNotFoundError,
    BadCredentialsError,
    account_to_state,
    authenticate,
    create_account,
    get_account,
    list_accounts_by_experience,
    update_progress,
)
from dragonhoard.db.store import AccountStore

__all__ = [
    "AccountExistsError",
    "AccountNotFoundError",
    "AccountStore",
    "BadCredentialsError",
    "account_to_state",
    "authenticate",
    "create_account",
    "get_account",
    "get_session",
    "get_session_factory",
    "init_db",
    "list_accounts_by_experience",
    "update_progress",
]
