import uuid
from typing import Any, Dict, Iterable, List, Optional

from .base_repository import BaseRepository

REVIEWER_PROJECTION = {"username": 1}
MOVIE_SUMMARY_PROJECTION = {"title": 1, "synopsis": 1, "averageRating": 1, "movieCoverPhoto": 1}


class RatingReviewRepository(BaseRepository):
    collection_name = "rating_reviews"

    async def get_for_user_and_movie(self, movie_id: Any, user_id: Any) -> Optional[Dict]:
        return await self.collection.find_one({"movie": movie_id, "user": user_id})

    async def create_review(self, movie_id: Any, user_id: Any, rating: int, review: Optional[str]) -> Dict:
        return await self.insert({
            "reviewId": str(uuid.uuid4()),
            "movie": movie_id,
            "user": user_id,
            "rating": rating,
            "review": review,
        })

    async def rated_movie_ids(self, user_id: Any) -> List[Any]:
        return await self.collection.distinct("movie", {"user": user_id})

    async def movie_ids_rated_by(self, user_ids: Iterable[Any]) -> List[Any]:
        user_ids = list(user_ids)
        if not user_ids:
            return []
        return await self.collection.distinct("movie", {"user": {"$in": user_ids}})

    async def average_rating(self, movie_id: Any) -> float:
        result = await self.aggregate([
            {"$match": {"movie": movie_id}},
            {"$group": {"_id": None, "averageRating": {"$avg": "$rating"}}},
        ], 1)
        return result[0]["averageRating"] if result else 0

    async def with_references(self, reviews: List[Dict]) -> List[Dict]:
        await self.populate(reviews, "user", "users", REVIEWER_PROJECTION)
        await self.populate(reviews, "movie", "movies", MOVIE_SUMMARY_PROJECTION)
        return reviews


class ReviewLikeRepository(BaseRepository):
    collection_name = "likes"

    async def get_for_user(self, review_id: Any, user_id: Any) -> Optional[Dict]:
        return await self.collection.find_one({"review": review_id, "user": user_id})

    async def count_for_review(self, review_id: Any) -> int:
        return await self.count({"review": review_id})


class ReviewCommentRepository(BaseRepository):
    collection_name = "comments"

    async def count_for_review(self, review_id: Any) -> int:
        return await self.count({"review": review_id})

    async def find_for_review(self, review_id: Any) -> List[Dict]:
        comments = await self.find_all({"review": review_id})
        return await self.populate(comments, "user", "users", REVIEWER_PROJECTION)
