# src/ai_todos/accounts/service.py

from __future__ import annotations

import logging
from typing import Any

from ..core.ports import TaskRepo
from ..errors import ConfigurationMissing, Unauthenticated
from .store import AccountNotFound, AccountStore

logger = logging.getLogger(__name__)


def bearer_token(authorization: str | None) -> str:
    """Extract the token from an `Authorization: Bearer ...` header value ("" if absent)."""
    parts = (authorization or "").split(None, 1)
    if not parts:
        return ""
    if parts[0].lower() == "bearer":
        return parts[1].strip() if len(parts) > 1 else ""
    return parts[0] if len(parts) == 1 else ""


def delete_account(
    accounts: AccountStore,
    tasks: TaskRepo,
    *,
    token: str | None,
    admin_token: str | None,
) -> dict[str, Any]:
    """
    Permanently delete the caller's account and all of their todos.

    Runs only when the process holds the admin credential and the account
    store accepts it. Calling it twice with the same token fails with
    Unauthenticated on the second call: the token disappears with the user.
    """
    if not admin_token:
        raise ConfigurationMissing("AI_TODOS_ADMIN_TOKEN")
    # Checked up front so a rejected credential never removes todos.
    accounts.verify_admin(admin_token)
    if not token:
        raise Unauthenticated("Missing Bearer token")

    user_id = accounts.resolve_token(token)
    if not user_id:
        raise Unauthenticated("Invalid session / user not found")

    removed = tasks.delete_for_owner(user_id)
    try:
        accounts.delete_user(user_id, admin_token=admin_token)
    except AccountNotFound:
        # Lost a race with a concurrent delete of the same account.
        raise Unauthenticated("Invalid session / user not found") from None

    logger.info("Account deleted user=%s todos_removed=%d", user_id, removed)
    return {"ok": True, "deleted_user_id": user_id}
