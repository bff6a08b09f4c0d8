from typing import Optional

from fastapi import APIRouter, Depends

from ..core.pagination import PageWindow
from ..dependencies import get_db, page_window, require_admin
from ..repositories.movie_repository import MovieRepository
from ..services.admin_stats_service import AdminStatsService

# Every statistics route is admin only
router = APIRouter(prefix="/api/admin-stats", tags=["Admin Stats"], dependencies=[Depends(require_admin)])


async def get_admin_stats_service(db=Depends(get_db)) -> AdminStatsService:
    return AdminStatsService(MovieRepository(db))


@router.get("/popular-movies")
async def popular_movies(
    window: PageWindow = Depends(page_window),
    service: AdminStatsService = Depends(get_admin_stats_service),
):
    return await service.popular_movies(window)


@router.get("/trending-genres")
async def trending_genres(
    window: PageWindow = Depends(page_window),
    service: AdminStatsService = Depends(get_admin_stats_service),
):
    return await service.trending_genres(window)


@router.get("/most-searched-actors")
async def most_searched_actors(
    window: PageWindow = Depends(page_window),
    service: AdminStatsService = Depends(get_admin_stats_service),
):
    return await service.most_searched_actors(window)


@router.get("/user-engagement")
async def user_engagement(
    window: PageWindow = Depends(page_window),
    service: AdminStatsService = Depends(get_admin_stats_service),
):
    return await service.user_engagement(window)


@router.get("/top-rated-movies")
async def top_rated_movies(
    genre: Optional[str] = None,
    window: PageWindow = Depends(page_window),
    service: AdminStatsService = Depends(get_admin_stats_service),
):
    return await service.top_rated_by_genre(genre, window)


@router.get("/movies-by-year")
async def movies_by_year(
    startYear: Optional[int] = None,
    endYear: Optional[int] = None,
    window: PageWindow = Depends(page_window),
    service: AdminStatsService = Depends(get_admin_stats_service),
):
    return await service.movies_by_year(startYear, endYear, window)


@router.get("/top-box-office")
async def top_box_office(
    window: PageWindow = Depends(page_window),
    service: AdminStatsService = Depends(get_admin_stats_service),
):
    return await service.top_box_office(window)


@router.get("/movies-by-director")
async def movies_by_director(
    director: Optional[str] = None,
    window: PageWindow = Depends(page_window),
    service: AdminStatsService = Depends(get_admin_stats_service),
):
    return await service.movies_by_director(director, window)


@router.get("/most-discussed")
async def most_discussed(
    window: PageWindow = Depends(page_window),
    service: AdminStatsService = Depends(get_admin_stats_service),
):
    return await service.most_discussed(window)
