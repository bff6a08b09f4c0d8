from fastapi import APIRouter, Depends, status

from ..core.pagination import PageWindow
from ..dependencies import CurrentUser, get_current_user, get_db, page_window, require_admin
from ..repositories.movie_repository import MovieRepository
from ..schemas.movie import BoxOfficeUpdate, MovieCreate, MovieUpdate, NewsUpdate
from ..services.movie_service import MovieService

router = APIRouter(tags=["Movies"])


async def get_movie_service(db=Depends(get_db)) -> MovieService:
    return MovieService(MovieRepository(db))


@router.get("/api/movies")
async def list_movies(
    window: PageWindow = Depends(page_window),
    admin: CurrentUser = Depends(require_admin),
    service: MovieService = Depends(get_movie_service),
):
    """Browse the catalog (admin)"""
    return await service.list_movies(window)


@router.post("/api/movies", status_code=status.HTTP_201_CREATED)
async def add_movie(
    movie: MovieCreate,
    admin: CurrentUser = Depends(require_admin),
    service: MovieService = Depends(get_movie_service),
):
    return {"message": "Movie added successfully", "movie": await service.add_movie(movie)}


@router.put("/api/movies/{movie_id}")
async def update_movie(
    movie_id: str,
    changes: MovieUpdate,
    admin: CurrentUser = Depends(require_admin),
    service: MovieService = Depends(get_movie_service),
):
    return {"message": "Movie updated successfully", "movie": await service.update_movie(movie_id, changes)}


@router.delete("/api/movies/{movie_id}")
async def delete_movie(
    movie_id: str,
    admin: CurrentUser = Depends(require_admin),
    service: MovieService = Depends(get_movie_service),
):
    await service.delete_movie(movie_id)
    return {"message": "Movie deleted successfully"}


@router.get("/api/box-office-awards", tags=["Box Office"])
async def get_box_office(
    window: PageWindow = Depends(page_window),
    current_user: CurrentUser = Depends(get_current_user),
    service: MovieService = Depends(get_movie_service),
):
    return await service.get_box_office(window)


@router.put("/api/box-office-awards", tags=["Box Office"])
async def update_box_office(
    update: BoxOfficeUpdate,
    admin: CurrentUser = Depends(require_admin),
    service: MovieService = Depends(get_movie_service),
):
    movie = await service.update_box_office(update)
    return {"message": "Box office and awards updated successfully", "movie": movie}


@router.get("/api/news-and-updates", tags=["News"])
async def get_news(
    window: PageWindow = Depends(page_window),
    current_user: CurrentUser = Depends(get_current_user),
    service: MovieService = Depends(get_movie_service),
):
    return await service.get_news(window)


@router.put("/api/news-and-updates", tags=["News"])
async def update_news(
    update: NewsUpdate,
    admin: CurrentUser = Depends(require_admin),
    service: MovieService = Depends(get_movie_service),
):
    movie = await service.update_news(update)
    return {"message": "News and updates saved successfully", "movie": movie}
