import pytest
import pytest_asyncio
from unittest.mock import AsyncMock
from bson import ObjectId
from fastapi import HTTPException

from moviehub.core.pagination import get_cursor_pagination_params
from moviehub.repositories.custom_list_repository import CustomListRepository
from moviehub.repositories.movie_repository import MovieRepository
from moviehub.repositories.user_repository import UserRepository
from moviehub.schemas.common import ShareTargets
from moviehub.schemas.custom_list import CustomListCreate, CustomListUpdate, ListMovieChange
from moviehub.services.custom_list_service import CustomListService
from moviehub.services.notification_service import Notifier


@pytest.fixture
def notifier():
    return AsyncMock(spec=Notifier)


@pytest.fixture
def service(fake_db, notifier):
    return CustomListService(
        CustomListRepository(fake_db), MovieRepository(fake_db), notifier, "https://movies.example.com/"
    )


@pytest_asyncio.fixture
async def owner(fake_db):
    user = await UserRepository(fake_db).create_user("Owner", "owner@example.com", "owner", "hash")
    return str(user["_id"])


@pytest_asyncio.fixture
async def movie_id(fake_db):
    movie = await MovieRepository(fake_db).insert({"title": "Heat", "genre": ["Crime"]})
    return str(movie["_id"])


@pytest.mark.asyncio
async def test_public_list_gets_shareable_link(service, owner):
    created = await service.create_list(owner, CustomListCreate(name="Favourites"))

    assert created["shareableLink"] == f"https://movies.example.com/custom-list/{created['id']}"
    assert created["creator"] == owner


@pytest.mark.asyncio
async def test_private_list_has_no_link_until_made_public(service, owner):
    created = await service.create_list(owner, CustomListCreate(name="Secret", isPublic=False))
    assert "shareableLink" not in created

    updated = await service.update_list(created["id"], owner, CustomListUpdate(isPublic=True))
    assert updated["shareableLink"].endswith(created["id"])


@pytest.mark.asyncio
async def test_only_creator_can_modify(service, owner, movie_id):
    created = await service.create_list(owner, CustomListCreate(name="Mine"))
    stranger = str(ObjectId())

    with pytest.raises(HTTPException) as exc:
        await service.update_list(created["id"], stranger, CustomListUpdate(name="Hijacked"))
    assert exc.value.status_code == 403

    with pytest.raises(HTTPException) as exc:
        await service.add_movie(stranger, ListMovieChange(listId=created["id"], movieId=movie_id))
    assert exc.value.status_code == 403

    with pytest.raises(HTTPException) as exc:
        await service.delete_list(created["id"], stranger)
    assert exc.value.status_code == 403


@pytest.mark.asyncio
async def test_add_and_remove_movie(service, owner, movie_id):
    created = await service.create_list(owner, CustomListCreate(name="Crime"))
    change = ListMovieChange(listId=created["id"], movieId=movie_id)

    assert (await service.add_movie(owner, change))["movies"] == [movie_id]
    with pytest.raises(HTTPException) as exc:
        await service.add_movie(owner, change)
    assert exc.value.detail == "Movie already in the list"

    assert (await service.remove_movie(owner, change))["movies"] == []
    with pytest.raises(HTTPException) as exc:
        await service.remove_movie(owner, change)
    assert exc.value.detail == "Movie not found in the list"


@pytest.mark.asyncio
async def test_add_unknown_movie(service, owner):
    created = await service.create_list(owner, CustomListCreate(name="Crime"))

    with pytest.raises(HTTPException) as exc:
        await service.add_movie(owner, ListMovieChange(listId=created["id"], movieId=str(ObjectId())))
    assert exc.value.status_code == 404


@pytest.mark.asyncio
async def test_follow_and_unfollow(service, owner):
    created = await service.create_list(owner, CustomListCreate(name="Crime"))
    fan = str(ObjectId())

    assert (await service.follow(fan, created["id"]))["followers"] == [fan]
    with pytest.raises(HTTPException):
        await service.follow(fan, created["id"])

    assert (await service.unfollow(fan, created["id"]))["followers"] == []
    with pytest.raises(HTTPException) as exc:
        await service.unfollow(fan, created["id"])
    assert exc.value.detail == "You are not following this list"


@pytest.mark.asyncio
async def test_listing_populates_references(service, owner, movie_id):
    await service.create_list(owner, CustomListCreate(name="Crime", movies=[movie_id]))

    result = await service.list_lists(get_cursor_pagination_params(None, None))

    custom_list = result["customLists"][0]
    assert custom_list["creator"] == {"id": owner, "username": "owner"}
    assert custom_list["movies"] == [{"id": movie_id, "title": "Heat", "genre": ["Crime"]}]
    assert result["nextCursor"] is None


@pytest.mark.asyncio
async def test_share_public_list(service, notifier, owner, movie_id):
    created = await service.create_list(owner, CustomListCreate(name="Crime", movies=[movie_id]))

    result = await service.share(created["id"], ShareTargets(email="friend@example.com", sms="+15550100"))

    assert result["channels"] == ["email", "sms"]
    to, subject, body = notifier.send_email.await_args.args
    assert to == "friend@example.com"
    assert subject == "Check out Crime"
    assert "1. Heat - Crime" in body
    notifier.send_whatsapp.assert_not_called()


@pytest.mark.asyncio
async def test_private_list_cannot_be_shared(service, notifier, owner):
    created = await service.create_list(owner, CustomListCreate(name="Secret", isPublic=False))

    with pytest.raises(HTTPException) as exc:
        await service.share(created["id"], ShareTargets(email="friend@example.com"))
    assert exc.value.status_code == 400
    notifier.send_email.assert_not_called()
