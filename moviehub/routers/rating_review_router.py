from typing import Optional

from fastapi import APIRouter, Depends, status

from ..core.pagination import PageWindow
from ..dependencies import CurrentUser, get_current_user, get_db, page_window
from ..repositories.movie_repository import MovieRepository
from ..repositories.rating_review_repository import (
    RatingReviewRepository,
    ReviewCommentRepository,
    ReviewLikeRepository,
)
from ..schemas.rating_review import CommentIn, LikeIn, RatingReviewIn
from ..services.rating_review_service import RatingReviewService

router = APIRouter(tags=["Ratings & Reviews"])


async def get_rating_review_service(db=Depends(get_db)) -> RatingReviewService:
    return RatingReviewService(
        RatingReviewRepository(db),
        MovieRepository(db),
        ReviewLikeRepository(db),
        ReviewCommentRepository(db),
    )


@router.post("/api/rating-reviews", status_code=status.HTTP_201_CREATED)
async def add_rating_review(
    payload: RatingReviewIn,
    current_user: CurrentUser = Depends(get_current_user),
    service: RatingReviewService = Depends(get_rating_review_service),
):
    return await service.add_review(current_user.id, payload)


@router.put("/api/rating-reviews")
async def update_rating_review(
    payload: RatingReviewIn,
    current_user: CurrentUser = Depends(get_current_user),
    service: RatingReviewService = Depends(get_rating_review_service),
):
    return await service.update_review(current_user.id, payload)


@router.get("/api/rating-reviews")
async def list_rating_reviews(
    movieId: Optional[str] = None,
    window: PageWindow = Depends(page_window),
    current_user: CurrentUser = Depends(get_current_user),
    service: RatingReviewService = Depends(get_rating_review_service),
):
    return await service.list_reviews(window, movieId)


@router.get("/api/rating-reviews/highlights")
async def review_highlights(
    movieId: Optional[str] = None,
    window: PageWindow = Depends(page_window),
    current_user: CurrentUser = Depends(get_current_user),
    service: RatingReviewService = Depends(get_rating_review_service),
):
    """Top rated reviews that have been liked and commented on"""
    return await service.get_highlights(window, movieId)


@router.post("/api/likes", status_code=status.HTTP_201_CREATED)
async def like_review(
    payload: LikeIn,
    current_user: CurrentUser = Depends(get_current_user),
    service: RatingReviewService = Depends(get_rating_review_service),
):
    return await service.add_like(current_user.id, payload)


@router.post("/api/comments", status_code=status.HTTP_201_CREATED)
async def comment_on_review(
    payload: CommentIn,
    current_user: CurrentUser = Depends(get_current_user),
    service: RatingReviewService = Depends(get_rating_review_service),
):
    return await service.add_comment(current_user.id, payload)
