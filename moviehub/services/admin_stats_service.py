from typing import Any, Dict, List, Optional

from fastapi import HTTPException

from ..core.documents import serialize_many
from ..core.pagination import PageWindow, next_cursor
from ..repositories.movie_repository import MovieRepository


def _stats(message: str, data: List[Dict[str, Any]], cursor: Optional[str]) -> Dict[str, Any]:
    return {"message": message, "data": serialize_many(data), "nextCursor": cursor}


class AdminStatsService:
    """
    Catalog statistics for administrators.

    Find-based views honour the cursor window. Aggregated views (group counts,
    computed scores) are not ordered by identity, so they only apply ``limit``
    and never return a cursor.
    """

    def __init__(self, movie_repo: MovieRepository):
        self.movie_repo = movie_repo

    async def _ranked(self, message: str, window: PageWindow, query: Dict[str, Any], field: str, direction: int = -1):
        movies = await self.movie_repo.find_ranked_page(window, query, field, direction)
        return _stats(message, movies, next_cursor(movies, window.limit))

    async def popular_movies(self, window: PageWindow) -> Dict[str, Any]:
        return await self._ranked("Most popular movies retrieved", window, {}, "popularity")

    async def top_rated_by_genre(self, genre: Optional[str], window: PageWindow) -> Dict[str, Any]:
        if not genre:
            raise HTTPException(status_code=400, detail="Genre is required.")
        return await self._ranked(
            f"Top-rated movies in the '{genre}' genre retrieved", window, {"genre": genre}, "averageRating"
        )

    async def movies_by_year(self, start_year: Optional[int], end_year: Optional[int], window: PageWindow):
        if start_year is None or end_year is None:
            raise HTTPException(status_code=400, detail="Start year and end year are required.")
        return await self._ranked(
            f"Movies released between {start_year} and {end_year} retrieved",
            window,
            {"releaseYear": {"$gte": start_year, "$lte": end_year}},
            "releaseYear",
            direction=1,
        )

    async def top_box_office(self, window: PageWindow) -> Dict[str, Any]:
        return await self._ranked("Top box office movies retrieved", window, {}, "boxOffice.worldwideGross")

    async def movies_by_director(self, director: Optional[str], window: PageWindow) -> Dict[str, Any]:
        if not director:
            raise HTTPException(status_code=400, detail="Director name is required.")
        return await self._ranked(
            f"Movies directed by '{director}' retrieved", window, {"director.name": director}, "releaseYear"
        )

    async def trending_genres(self, window: PageWindow) -> Dict[str, Any]:
        return _stats("Trending genres retrieved", await self.movie_repo.count_by_genre(window.limit), None)

    async def most_searched_actors(self, window: PageWindow) -> Dict[str, Any]:
        return _stats("Most searched actors retrieved", await self.movie_repo.count_by_actor(window.limit), None)

    async def user_engagement(self, window: PageWindow) -> Dict[str, Any]:
        return _stats(
            "User engagement patterns retrieved", await self.movie_repo.rank_by_critic_totals(window.limit), None
        )

    async def most_discussed(self, window: PageWindow) -> Dict[str, Any]:
        return _stats("Most discussed movies retrieved", await self.movie_repo.rank_by_news_count(window.limit), None)
