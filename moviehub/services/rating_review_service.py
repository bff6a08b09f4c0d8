import logging
from typing import Any, Dict, Optional

from fastapi import HTTPException, status
from pymongo.errors import DuplicateKeyError

from ..core.documents import parse_object_id, serialize_document, serialize_many
from ..core.pagination import PageWindow, merge_filters, next_cursor
from ..repositories.movie_repository import MovieRepository
from ..repositories.rating_review_repository import (
    RatingReviewRepository,
    ReviewCommentRepository,
    ReviewLikeRepository,
)
from ..schemas.rating_review import CommentIn, LikeIn, RatingReviewIn

logger = logging.getLogger(__name__)


def _movie_summary(movie: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "title": movie.get("title"),
        "synopsis": movie.get("synopsis"),
        "averageRating": movie.get("averageRating"),
        "movieCoverPhoto": movie.get("movieCoverPhoto"),
    }


class RatingReviewService:
    def __init__(
        self,
        review_repo: RatingReviewRepository,
        movie_repo: MovieRepository,
        like_repo: ReviewLikeRepository,
        comment_repo: ReviewCommentRepository,
    ):
        self.review_repo = review_repo
        self.movie_repo = movie_repo
        self.like_repo = like_repo
        self.comment_repo = comment_repo

    async def _refresh_average(self, movie_id: Any) -> Optional[Dict[str, Any]]:
        average = await self.review_repo.average_rating(movie_id)
        return await self.movie_repo.set_average_rating(movie_id, round(average, 2))

    async def _require_review(self, review_id: str) -> Dict[str, Any]:
        review = await self.review_repo.get_by_id(parse_object_id(review_id, "reviewId"))
        if not review:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Review not found")
        return review

    async def add_review(self, user_id: str, payload: RatingReviewIn) -> Dict[str, Any]:
        movie_id = parse_object_id(payload.movieId, "movieId")
        user_oid = parse_object_id(user_id, "user id")

        if not await self.movie_repo.get_by_id(movie_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Movie not found")
        if await self.review_repo.get_for_user_and_movie(movie_id, user_oid):
            raise HTTPException(status_code=400, detail="You have already reviewed this movie.")

        try:
            review = await self.review_repo.create_review(movie_id, user_oid, payload.rating, payload.review)
        except DuplicateKeyError:
            raise HTTPException(status_code=400, detail="You have already reviewed this movie.")
        movie = await self._refresh_average(movie_id)
        logger.info("Review added", extra={"user_id": user_id, "detail": str(movie_id)})

        return {
            "message": "Review added successfully",
            "ratingReview": serialize_document(review),
            "movie": _movie_summary(movie or {}),
        }

    async def update_review(self, user_id: str, payload: RatingReviewIn) -> Dict[str, Any]:
        movie_id = parse_object_id(payload.movieId, "movieId")
        review = await self.review_repo.get_for_user_and_movie(movie_id, parse_object_id(user_id, "user id"))
        if not review:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Review not found.")

        fields: Dict[str, Any] = {"rating": payload.rating}
        if payload.review:
            fields["review"] = payload.review
        updated = await self.review_repo.update_fields(review["_id"], fields)

        movie = await self._refresh_average(movie_id)
        if not movie:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Movie not found")

        return {
            "message": "Review updated successfully",
            "ratingReview": serialize_document(updated),
            "movie": _movie_summary(movie),
        }

    async def list_reviews(self, window: PageWindow, movie_id: Optional[str] = None) -> Dict[str, Any]:
        movie_filter = {"movie": parse_object_id(movie_id, "movieId")} if movie_id else None
        reviews = await self.review_repo.find_page(merge_filters(window.query, movie_filter), window.limit)
        cursor = next_cursor(reviews, window.limit)
        await self.review_repo.with_references(reviews)
        return {"ratingReviews": serialize_many(reviews), "nextCursor": cursor}

    async def get_highlights(self, window: PageWindow, movie_id: Optional[str] = None) -> Dict[str, Any]:
        """Best rated reviews that were both liked and commented on."""
        query = {"movie": parse_object_id(movie_id, "movieId")} if movie_id else {}
        reviews = await self.review_repo.find_page(query, window.limit, sort=[("rating", -1), ("_id", 1)])
        await self.review_repo.with_references(reviews)

        highlights = []
        for review in reviews:
            like_count = await self.like_repo.count_for_review(review["_id"])
            comments = await self.comment_repo.find_for_review(review["_id"])
            if like_count and comments:
                highlights.append({
                    **review,
                    "likeCount": like_count,
                    "commentCount": len(comments),
                    "comments": comments,
                })
        return {"reviewHighlights": serialize_many(highlights)}

    async def add_like(self, user_id: str, payload: LikeIn) -> Dict[str, Any]:
        review = await self._require_review(payload.reviewId)
        user_oid = parse_object_id(user_id, "user id")
        if await self.like_repo.get_for_user(review["_id"], user_oid):
            raise HTTPException(status_code=400, detail="You have already liked this review.")

        try:
            await self.like_repo.insert({"review": review["_id"], "user": user_oid})
        except DuplicateKeyError:
            raise HTTPException(status_code=400, detail="You have already liked this review.")
        like_count = await self.like_repo.count_for_review(review["_id"])
        return {"message": "Like added successfully", "likeCount": like_count}

    async def add_comment(self, user_id: str, payload: CommentIn) -> Dict[str, Any]:
        review = await self._require_review(payload.reviewId)
        await self.comment_repo.insert({
            "review": review["_id"],
            "user": parse_object_id(user_id, "user id"),
            "comment": payload.comment,
        })
        comment_count = await self.comment_repo.count_for_review(review["_id"])
        return {"message": "Comment added successfully", "commentCount": comment_count}
