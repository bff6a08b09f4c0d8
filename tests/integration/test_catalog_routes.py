
import pytest
from httpx import AsyncClient

from moviehub.repositories.movie_repository import MovieRepository
from moviehub.repositories.user_repository import UserRepository


async def _seed_movies(fake_db, count):
    repo = MovieRepository(fake_db)
    return [
        str((await repo.insert({"title": f"Movie {i}", "genre": ["Drama"], "popularity": i}))["_id"])
        for i in range(count)
    ]


@pytest.mark.asyncio
async def test_junk_limit_falls_back_to_default(client: AsyncClient, fake_db):
    await _seed_movies(fake_db, 12)

    response = await client.get("/api/recommendations/trending", params={"limit": "lots"})

    assert response.status_code == 200
    assert len(response.json()["trendingMovies"]) == 10


@pytest.mark.asyncio
async def test_oversized_limit_is_clamped(client: AsyncClient, fake_db):
    await _seed_movies(fake_db, 3)

    response = await client.get("/api/recommendations/trending", params={"limit": "99999999999999999999"})

    assert response.status_code == 200
    assert len(response.json()["trendingMovies"]) == 3


@pytest.mark.asyncio
async def test_search_pages_cover_every_match_once(client: AsyncClient, fake_db, user_headers):
    ids = await _seed_movies(fake_db, 5)

    seen, cursor = [], None
    while True:
        params = {"genre": "Drama", "limit": "2"}
        if cursor:
            params["cursor"] = cursor
        page = (await client.get("/api/search", params=params, headers=user_headers)).json()
        seen.extend(m["id"] for m in page["movies"])
        cursor = page["nextCursor"]
        if cursor is None:
            break

    assert seen == ids


@pytest.mark.asyncio
async def test_personalized_recommendations_over_http(client: AsyncClient, fake_db, auth_headers):
    users = UserRepository(fake_db)
    user = await users.create_user("Fan", "fan@example.com", "fan", "hash")
    await users.update_fields(user["_id"], {"preferences": {"genres": ["Horror"], "actors": []}})
    movies = MovieRepository(fake_db)
    hereditary = await movies.insert({"title": "Hereditary", "genre": ["Horror"]})
    await movies.insert({"title": "Superbad", "genre": ["Comedy"]})

    response = await client.get("/api/recommendations", headers=auth_headers(user["_id"]))

    assert response.status_code == 200
    body = response.json()
    assert [m["title"] for m in body["personalizedRecommendations"]] == ["Hereditary"]
    assert [m["id"] for m in body["recommendations"]] == [str(hereditary["_id"])]
    assert body["nextCursor"] is None


@pytest.mark.asyncio
async def test_custom_list_shareable_link_is_public(client: AsyncClient, fake_db, auth_headers):
    owner = await UserRepository(fake_db).create_user("Owner", "owner@example.com", "owner", "hash")
    headers = auth_headers(owner["_id"])

    created = await client.post("/api/custom-lists", json={"name": "Weekend"}, headers=headers)
    assert created.status_code == 201
    list_id = created.json()["data"]["id"]

    public = await client.get(f"/api/custom-lists/{list_id}")
    assert public.status_code == 200
    assert public.json()["creator"]["username"] == "owner"

    shared = await client.post(f"/api/custom-lists/share/{list_id}", json={"sms": "+15550100"}, headers=headers)
    assert shared.json()["channels"] == ["sms"]


@pytest.mark.asyncio
async def test_unknown_custom_list(client: AsyncClient):
    response = await client.get("/api/custom-lists/5f1d7c2e9b1e8a3d4c5b6a79")
    assert response.status_code == 404
    assert response.json()["error"] == "Custom list not found"
