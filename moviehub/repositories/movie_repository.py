from typing import Any, Dict, List, Optional

from ..core.pagination import PageWindow, merge_filters, ranked_after
from .base_repository import BaseRepository


class MovieRepository(BaseRepository):
    collection_name = "movies"

    async def get_by_title(self, title: str) -> Optional[Dict]:
        return await self.collection.find_one({"title": title})

    async def find_ranked(
        self,
        query: Dict[str, Any],
        limit: int,
        field: str,
        direction: int = -1,
        projection: Optional[Dict[str, int]] = None,
    ) -> List[Dict]:
        """Movies ordered by a ranking field, ``_id`` breaking ties so pages are stable."""
        return await self.find_page(query, limit, sort=[(field, direction), ("_id", 1)], projection=projection)

    async def find_ranked_page(
        self,
        window: PageWindow,
        query: Optional[Dict[str, Any]],
        field: str,
        direction: int = -1,
    ) -> List[Dict]:
        """A ranked page resuming after the cursor movie; an unknown cursor yields an empty page."""
        after = None
        if window.cursor is not None:
            last = await self.collection.find_one({"_id": window.cursor})
            if last is None:
                return []
            after = ranked_after(last, field, direction)
        return await self.find_ranked(merge_filters(after, query), window.limit, field, direction)

    async def set_average_rating(self, movie_id: Any, average: float) -> Optional[Dict]:
        return await self.update_fields(movie_id, {"averageRating": average})

    async def count_by_genre(self, limit: int) -> List[Dict]:
        pipeline = [
            {"$unwind": "$genre"},
            {"$group": {"_id": "$genre", "count": {"$sum": 1}}},
            {"$sort": {"count": -1, "_id": 1}},
            {"$limit": limit},
        ]
        return await self.aggregate(pipeline, limit)

    async def count_by_actor(self, limit: int) -> List[Dict]:
        pipeline = [
            {"$unwind": "$cast"},
            {"$group": {"_id": "$cast.name", "count": {"$sum": 1}}},
            {"$sort": {"count": -1, "_id": 1}},
            {"$limit": limit},
        ]
        return await self.aggregate(pipeline, limit)

    async def rank_by_critic_totals(self, limit: int) -> List[Dict]:
        pipeline = [
            {
                "$project": {
                    "title": 1,
                    "totalRatings": {
                        "$sum": [
                            "$ratings.IMDb",
                            "$ratings.RottenTomatoes",
                            "$ratings.Metacritic",
                        ]
                    },
                }
            },
            {"$sort": {"totalRatings": -1, "_id": 1}},
            {"$limit": limit},
        ]
        return await self.aggregate(pipeline, limit)

    async def rank_by_news_count(self, limit: int) -> List[Dict]:
        pipeline = [
            {"$project": {"title": 1, "newsCount": {"$size": {"$ifNull": ["$newsAndArticles", []]}}}},
            {"$sort": {"newsCount": -1, "_id": 1}},
            {"$limit": limit},
        ]
        return await self.aggregate(pipeline, limit)
