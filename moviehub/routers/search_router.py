from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query

from ..config import settings
from ..core.pagination import PageWindow, parse_limit
from ..dependencies import CurrentUser, get_current_user, get_db, page_window
from ..repositories.movie_repository import MovieRepository
from ..schemas.search import SearchParams
from ..services.search_service import SearchService

router = APIRouter(tags=["Search"])


async def get_search_service(db=Depends(get_db)) -> SearchService:
    return SearchService(MovieRepository(db))


@router.get("/api/search")
async def search_movies(
    params: Annotated[SearchParams, Query()],
    window: PageWindow = Depends(page_window),
    current_user: CurrentUser = Depends(get_current_user),
    service: SearchService = Depends(get_search_service),
):
    """Free text search plus filters over the catalog"""
    return await service.search(params, window)


@router.get("/api/search/top-by-genre")
async def top_by_genre(
    genre: Optional[str] = None,
    current_user: CurrentUser = Depends(get_current_user),
    service: SearchService = Depends(get_search_service),
):
    return await service.top_by_genre(genre)


@router.get("/api/search/top-of-month")
async def top_of_month(
    limit: Optional[str] = None,
    current_user: CurrentUser = Depends(get_current_user),
    service: SearchService = Depends(get_search_service),
):
    return await service.top_of_month(parse_limit(limit, settings.DEFAULT_PAGE_LIMIT, settings.MAX_PAGE_LIMIT))
