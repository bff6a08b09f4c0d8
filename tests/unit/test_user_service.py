import pytest
from bson import ObjectId
from fastapi import HTTPException
from pymongo.errors import DuplicateKeyError

from moviehub.core.security import verify_password
from moviehub.repositories.user_repository import UserRepository
from moviehub.schemas.auth import SignupDetailsUpdate
from moviehub.schemas.user import Preferences, ProfileUpdate
from moviehub.services.user_service import UserService


@pytest.fixture
def user_repo(fake_db):
    return UserRepository(fake_db)


@pytest.fixture
def service(user_repo):
    return UserService(user_repo)


async def _create(user_repo, username="alice"):
    user = await user_repo.create_user("Alice", f"{username}@example.com", username, "hash")
    return str(user["_id"])


@pytest.mark.asyncio
async def test_profile_never_exposes_password(user_repo, service):
    user_id = await _create(user_repo)

    profile = await service.get_profile(user_id)

    assert "password" not in profile
    assert profile["id"] == user_id
    assert profile["preferences"] == {"genres": [], "actors": []}


@pytest.mark.asyncio
async def test_update_signup_details_requires_a_field(user_repo, service):
    user_id = await _create(user_repo)

    with pytest.raises(HTTPException) as exc:
        await service.update_signup_details(user_id, SignupDetailsUpdate())
    assert exc.value.status_code == 400


@pytest.mark.asyncio
async def test_update_signup_details_rejects_taken_username(user_repo, service):
    user_id = await _create(user_repo, "alice")
    await _create(user_repo, "bob")

    with pytest.raises(HTTPException) as exc:
        await service.update_signup_details(user_id, SignupDetailsUpdate(username="bob"))
    assert exc.value.detail == "Username already exists"


@pytest.mark.asyncio
async def test_update_signup_details_username_taken_concurrently(user_repo, service, monkeypatch):
    user_id = await _create(user_repo, "alice")

    async def taken(*args, **kwargs):
        raise DuplicateKeyError("E11000 duplicate key error")

    monkeypatch.setattr(user_repo, "update_fields", taken)

    with pytest.raises(HTTPException) as exc:
        await service.update_signup_details(user_id, SignupDetailsUpdate(username="bob"))
    assert exc.value.status_code == 400
    assert exc.value.detail == "Email or username already exists"


@pytest.mark.asyncio
async def test_update_signup_details_hashes_new_password(user_repo, service):
    user_id = await _create(user_repo)

    updated = await service.update_signup_details(user_id, SignupDetailsUpdate(name="Al", password="n3w@pass"))

    assert updated["name"] == "Al"
    assert "password" not in updated
    stored = await user_repo.get_by_id(ObjectId(user_id))
    assert verify_password("n3w@pass", stored["password"])


@pytest.mark.asyncio
async def test_set_and_update_preferences(user_repo, service):
    user_id = await _create(user_repo)

    await service.set_preferences(user_id, Preferences(genres=["Horror"], actors=[]))
    updated = await service.update_profile(user_id, ProfileUpdate(name="Alice B."))

    assert updated["name"] == "Alice B."
    assert updated["preferences"]["genres"] == ["Horror"]


@pytest.mark.asyncio
async def test_update_profile_without_fields(user_repo, service):
    user_id = await _create(user_repo)

    with pytest.raises(HTTPException) as exc:
        await service.update_profile(user_id, ProfileUpdate())
    assert exc.value.detail == "No fields to update"


@pytest.mark.asyncio
async def test_wishlist_add_and_remove(user_repo, service):
    user_id = await _create(user_repo)
    movie_id = str(ObjectId())

    assert await service.add_to_wishlist(user_id, movie_id) == [movie_id]
    with pytest.raises(HTTPException) as exc:
        await service.add_to_wishlist(user_id, movie_id)
    assert exc.value.detail == "Movie already in wishlist"

    assert await service.update_wishlist(user_id, movie_id, "remove") == []
    with pytest.raises(HTTPException) as exc:
        await service.remove_from_wishlist(user_id, movie_id)
    assert exc.value.detail == "Movie not found in wishlist"


@pytest.mark.asyncio
async def test_delete_profile(user_repo, service):
    user_id = await _create(user_repo)

    await service.delete_profile(user_id)

    with pytest.raises(HTTPException) as exc:
        await service.get_profile(user_id)
    assert exc.value.status_code == 404
