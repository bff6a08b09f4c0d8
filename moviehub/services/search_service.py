import re
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from fastapi import HTTPException, status

from ..core.documents import serialize_many
from ..core.pagination import PageWindow, merge_filters, next_cursor
from ..repositories.movie_repository import MovieRepository
from ..schemas.search import SearchParams

TRENDING_MIN_POPULARITY = 50
TRENDING_WINDOW = timedelta(days=30)
TOP_BY_GENRE_LIMIT = 10


def _contains(text: str) -> Dict[str, Any]:
    # user input is matched literally, never as a pattern
    return {"$regex": re.escape(text), "$options": "i"}


def _split(value: str) -> List[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


def _range(minimum: Optional[float], maximum: Optional[float]) -> Optional[Dict[str, Any]]:
    bounds: Dict[str, Any] = {}
    if minimum is not None:
        bounds["$gte"] = minimum
    if maximum is not None:
        bounds["$lte"] = maximum
    return bounds or None


def _year_span(first_year: int, last_year: int) -> Dict[str, datetime]:
    return {
        "$gte": datetime(first_year, 1, 1),
        "$lte": datetime(last_year, 12, 31, 23, 59, 59),
    }


def build_search_filter(params: SearchParams, now: Optional[datetime] = None) -> Dict[str, Any]:
    """
    Translate search parameters into a Mongo filter.

    Every criterion becomes its own fragment and the fragments are ANDed, so
    two criteria on the same field (e.g. ``popularityMin`` and ``trending``)
    both apply.
    """
    fragments: List[Dict[str, Any]] = []

    if params.search:
        pattern = _contains(params.search)
        fragments.append({"$or": [
            {"title": pattern},
            {"genre": pattern},
            {"director.name": pattern},
            {"cast.name": pattern},
        ]})

    if params.genre:
        fragments.append({"genre": {"$in": _split(params.genre)}})

    for field, minimum, maximum in (
        ("averageRating", params.ratingMin, params.ratingMax),
        ("popularity", params.popularityMin, params.popularityMax),
        ("runtime", params.runtimeMin, params.runtimeMax),
        ("boxOffice.totalEarnings", params.boxOfficeMin, params.boxOfficeMax),
    ):
        bounds = _range(minimum, maximum)
        if bounds:
            fragments.append({field: bounds})

    if params.releaseYear is not None:
        fragments.append({"releaseDate": _year_span(params.releaseYear, params.releaseYear)})
    elif params.releaseDecade is not None:
        fragments.append({"releaseDate": _year_span(params.releaseDecade, params.releaseDecade + 9)})

    for field, text in (
        ("parentalGuidance.rating", params.parentalRating),
        ("cast.name", params.actor),
        ("countryOfOrigin", params.countryOfOrigin),
        ("language", params.language),
    ):
        if text:
            fragments.append({field: _contains(text)})

    for field, values in (
        ("keywords", params.keywords),
        ("streamingPlatforms", params.streamingPlatform),
        ("filmingLocations", params.filmingLocation),
        ("filmmakingTechniques", params.filmmakingTechnique),
    ):
        if values:
            fragments.append({field: {"$in": _split(values)}})

    if params.awards:
        fragments.append({"awardsAndNominations": {"$elemMatch": {"award": {"$in": _split(params.awards)}}}})

    if params.trending:
        now = now or datetime.now(timezone.utc)
        fragments.append({"popularity": {"$gte": TRENDING_MIN_POPULARITY}})
        fragments.append({"releaseDate": {"$gte": now - TRENDING_WINDOW}})

    return merge_filters(*fragments)


class SearchService:
    def __init__(self, movie_repo: MovieRepository):
        self.movie_repo = movie_repo

    async def search(self, params: SearchParams, window: PageWindow) -> Dict[str, Any]:
        query = merge_filters(window.query, build_search_filter(params))
        movies = await self.movie_repo.find_page(query, window.limit)
        return {"movies": serialize_many(movies), "nextCursor": next_cursor(movies, window.limit)}

    async def top_by_genre(self, genre: Optional[str]) -> Dict[str, Any]:
        genres = _split(genre or "")
        if not genres:
            raise HTTPException(status_code=400, detail="Genre is required for filtering.")
        movies = await self.movie_repo.find_ranked({"genre": {"$in": genres}}, TOP_BY_GENRE_LIMIT, "averageRating")
        return {"genre": genre, "movies": serialize_many(movies)}

    async def top_of_month(self, limit: int) -> Dict[str, Any]:
        movies = await self.movie_repo.find_page(
            {},
            limit,
            sort=[("averageRating", -1), ("popularity", -1), ("boxOffice.worldwideGross", -1), ("_id", 1)],
        )
        if not movies:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No top movies found.")
        return {"movies": serialize_many(movies)}
