from fastapi import APIRouter, Depends, Request

from ..config import settings
from ..core.pagination import PageWindow
from ..dependencies import CurrentUser, get_current_user, get_db, page_window
from ..limiter import limiter
from ..repositories.movie_repository import MovieRepository
from ..repositories.rating_review_repository import RatingReviewRepository
from ..repositories.user_repository import UserRepository
from ..schemas.recommendation import (
    RecommendationResponse,
    SimilarResponse,
    TopRatedResponse,
    TrendingResponse,
)
from ..services.recommendation_service import PreferenceSet, RecommendationService

router = APIRouter(tags=["Recommendations"])


async def get_recommendation_service(db=Depends(get_db)) -> RecommendationService:
    return RecommendationService(
        MovieRepository(db),
        RatingReviewRepository(db),
        UserRepository(db),
        default_preferences=PreferenceSet(
            genres=list(settings.DEFAULT_PREFERENCE_GENRES),
            actors=list(settings.DEFAULT_PREFERENCE_ACTORS),
        ),
        popularity_band=settings.SIMILAR_POPULARITY_BAND,
    )


@router.get("/api/recommendations", response_model=RecommendationResponse)
@limiter.limit("20/minute")  # Stricter limit for recommendations
async def get_recommendations(
    request: Request,  # Required for limiter
    window: PageWindow = Depends(page_window),
    current_user: CurrentUser = Depends(get_current_user),
    service: RecommendationService = Depends(get_recommendation_service),
):
    """
    Get personalized movie recommendations for the authenticated user
    """
    return await service.get_recommendations(current_user.id, window)


@router.get("/api/recommendations/trending", response_model=TrendingResponse)
async def get_trending(
    window: PageWindow = Depends(page_window),
    service: RecommendationService = Depends(get_recommendation_service),
):
    return await service.get_trending(window)


@router.get("/api/recommendations/top-rated", response_model=TopRatedResponse)
async def get_top_rated(
    window: PageWindow = Depends(page_window),
    service: RecommendationService = Depends(get_recommendation_service),
):
    return await service.get_top_rated(window)


@router.get("/api/recommendations/similar/{movie_id}", response_model=SimilarResponse)
async def get_similar(
    movie_id: str,
    window: PageWindow = Depends(page_window),
    service: RecommendationService = Depends(get_recommendation_service),
):
    """Movies sharing a genre, the director or a similar popularity"""
    return await service.get_similar(movie_id, window)
