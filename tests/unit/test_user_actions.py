"""Tests for UserActions with in-memory ports."""

import pytest

from storefront.application.actions import UserActions
from tests.fakes import ADMIN, USER, FakeUserRepo, RecordingCache, record


@pytest.fixture
def repo() -> FakeUserRepo:
    return FakeUserRepo(
        [
            record(id=ADMIN.id, email=ADMIN.email, name="Admin", role="admin", avatar=None),
            record(id="u2", email="ann@example.com", name="Ann", role="user", avatar=None),
            record(id="u3", email="bob@example.com", name="Bob", role="user", avatar=None),
        ]
    )


@pytest.fixture
def cache() -> RecordingCache:
    return RecordingCache()


@pytest.fixture
def actions(repo, cache) -> UserActions:
    return UserActions(repo, cache)


async def test_non_admin_cannot_manage_users(actions: UserActions) -> None:
    result = await actions.update_user(USER, "u2", {"name": "Hacked"})
    assert result.error == "You don't have permission to manage users"


async def test_create_user_passes_plain_password_to_repository(
    actions: UserActions, repo: FakeUserRepo, cache: RecordingCache
) -> None:
    result = await actions.create_user(
        ADMIN, {"name": "Cy", "email": "cy@example.com", "password": "password123", "role": "admin"}
    )

    assert result.data.role == "admin"
    assert repo.passwords[result.data.id] == "password123"
    assert cache.invalidated == ["users"]


async def test_update_normalizes_email_and_sets_password(
    actions: UserActions, repo: FakeUserRepo, cache: RecordingCache
) -> None:
    result = await actions.update_user(
        ADMIN, "u2", {"email": "Ann.New@Example.com", "password": "new-password"}
    )

    assert result.data.email == "ann.new@example.com"
    assert repo.passwords["u2"] == "new-password"
    assert cache.invalidated == ["users", "user-u2"]


async def test_update_rejects_email_of_another_user(actions: UserActions) -> None:
    result = await actions.update_user(ADMIN, "u2", {"email": "bob@example.com"})
    assert result.error == "A user with this email already exists"


async def test_update_unknown_user(actions: UserActions) -> None:
    assert (await actions.update_user(ADMIN, "nope", {"name": "X"})).error == "User not found"


async def test_bulk_role_change(actions: UserActions, repo: FakeUserRepo) -> None:
    result = await actions.update_users(ADMIN, {"ids": ["u2", "u3"], "role": "admin"})
    assert [u.role for u in result.data] == ["admin", "admin"]
    assert (await actions.update_users(ADMIN, {"ids": ["u2"]})).data == []


async def test_admin_cannot_delete_self(actions: UserActions, repo: FakeUserRepo) -> None:
    result = await actions.delete_user(ADMIN, ADMIN.id)
    assert result.error == "You cannot delete your own account"
    assert ADMIN.id in repo.rows


async def test_bulk_delete_including_self_deletes_nothing(
    actions: UserActions, repo: FakeUserRepo
) -> None:
    result = await actions.delete_users(ADMIN, {"ids": ["u2", ADMIN.id]})
    assert result.error == "You cannot delete your own account"
    assert set(repo.rows) == {ADMIN.id, "u2", "u3"}


async def test_delete_user(actions: UserActions, repo: FakeUserRepo) -> None:
    assert (await actions.delete_user(ADMIN, "u3")).data.id == "u3"
    assert (await actions.delete_users(ADMIN, {"ids": ["u2"]})).data[0].id == "u2"
    assert set(repo.rows) == {ADMIN.id}
