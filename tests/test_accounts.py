# tests/test_accounts.py

from __future__ import annotations

import pytest

from ai_todos.accounts.service import bearer_token, delete_account
from ai_todos.accounts.store import AccountNotFound, AccountStore
from ai_todos.errors import ConfigurationMissing, Unauthenticated


@pytest.mark.parametrize(
    ("header", "expected"),
    [(None, ""), ("", ""), ("Bearer abc", "abc"), ("bearer  abc ", "abc"), ("abc", "abc"), ("Bearer ", "")],
)
def test_bearer_token(header, expected) -> None:
    assert bearer_token(header) == expected


def test_tokens_resolve_to_user(state, user) -> None:
    user_id, token = user
    assert state.accounts.resolve_token(token) == user_id
    assert state.accounts.resolve_token("nope") is None
    assert state.accounts.resolve_token("") is None


def test_issue_token_for_unknown_user(state) -> None:
    with pytest.raises(AccountNotFound):
        state.accounts.issue_token("ghost")


def test_delete_account_removes_user_tokens_and_todos(state, user) -> None:
    user_id, token = user
    state.task_store.add_task(user_id, "Mine")
    other = state.accounts.create_user("bob@example.com")
    state.task_store.add_task(other, "Bob's")

    out = delete_account(state.accounts, state.task_store, token=token, admin_token="admin-secret")

    assert out == {"ok": True, "deleted_user_id": user_id}
    assert state.accounts.user_exists(user_id) is False
    assert state.accounts.resolve_token(token) is None
    assert state.task_store.list_for_owner(user_id) == []
    assert len(state.task_store.list_for_owner(other)) == 1


def test_delete_account_twice_fails_cleanly(state, user) -> None:
    _, token = user
    delete_account(state.accounts, state.task_store, token=token, admin_token="admin-secret")

    with pytest.raises(Unauthenticated):
        delete_account(state.accounts, state.task_store, token=token, admin_token="admin-secret")


def test_delete_account_needs_privileged_credential(state, user) -> None:
    user_id, token = user
    with pytest.raises(ConfigurationMissing):
        delete_account(state.accounts, state.task_store, token=token, admin_token=None)
    assert state.accounts.user_exists(user_id) is True


def test_delete_account_without_token(state) -> None:
    with pytest.raises(Unauthenticated):
        delete_account(state.accounts, state.task_store, token="", admin_token="admin-secret")


def test_delete_account_with_wrong_admin_credential_keeps_everything(state, user) -> None:
    user_id, token = user
    state.task_store.add_task(user_id, "Mine")

    with pytest.raises(Unauthenticated):
        delete_account(state.accounts, state.task_store, token=token, admin_token="guess")

    assert state.accounts.user_exists(user_id) is True
    assert state.accounts.resolve_token(token) == user_id
    assert len(state.task_store.list_for_owner(user_id)) == 1


def test_store_refuses_user_deletion_without_matching_credential(state, user) -> None:
    user_id, _ = user
    with pytest.raises(Unauthenticated):
        state.accounts.delete_user(user_id, admin_token="wrong")
    with pytest.raises(Unauthenticated):
        state.accounts.delete_user(user_id, admin_token=None)
    assert state.accounts.user_exists(user_id) is True

    state.accounts.delete_user(user_id, admin_token="admin-secret")
    assert state.accounts.user_exists(user_id) is False


def test_store_without_configured_credential_cannot_delete(tmp_path) -> None:
    accounts = AccountStore(tmp_path / "accounts.sqlite3")
    user_id = accounts.create_user("carol@example.com")

    with pytest.raises(ConfigurationMissing):
        accounts.delete_user(user_id, admin_token="admin-secret")
    assert accounts.user_exists(user_id) is True
