import logging
from typing import Any, Dict

from fastapi import HTTPException, status

from ..core.documents import parse_object_id, serialize_document, serialize_many
from ..core.pagination import PageWindow, next_cursor
from ..repositories.movie_repository import MovieRepository
from ..schemas.movie import BoxOfficeUpdate, MovieCreate, MovieUpdate, NewsUpdate

logger = logging.getLogger(__name__)

BOX_OFFICE_PROJECTION = {
    "title": 1, "genre": 1, "director": 1, "cast": 1, "boxOffice": 1, "awardsAndNominations": 1,
}
NEWS_PROJECTION = {"title": 1, "genre": 1, "newsAndArticles": 1, "cast": 1, "sequels": 1}


def _person_summary(person: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "name": person.get("name"),
        "biography": person.get("biography"),
        "awards": person.get("awards", []),
    }


class MovieService:
    def __init__(self, movie_repo: MovieRepository):
        self.movie_repo = movie_repo

    async def _require(self, movie_id: str) -> Dict[str, Any]:
        movie = await self.movie_repo.get_by_id(parse_object_id(movie_id, "movieId"))
        if not movie:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Movie not found")
        return movie

    async def list_movies(self, window: PageWindow) -> Dict[str, Any]:
        movies = await self.movie_repo.find_page(window.query, window.limit)
        return {"movies": serialize_many(movies), "nextCursor": next_cursor(movies, window.limit)}

    async def add_movie(self, movie: MovieCreate) -> Dict[str, Any]:
        if await self.movie_repo.get_by_title(movie.title):
            raise HTTPException(status_code=400, detail="Movie already exists in the database")

        created = await self.movie_repo.insert(movie.model_dump())
        logger.info("Movie added", extra={"detail": created["title"]})
        return serialize_document(created)

    async def update_movie(self, movie_id: str, changes: MovieUpdate) -> Dict[str, Any]:
        fields = changes.model_dump(exclude_unset=True)
        updated = await self.movie_repo.update_fields(parse_object_id(movie_id, "movieId"), fields)
        if not updated:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Movie not found")
        return serialize_document(updated)

    async def delete_movie(self, movie_id: str) -> None:
        if not await self.movie_repo.delete(parse_object_id(movie_id, "movieId")):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Movie not found")
        logger.info("Movie deleted", extra={"detail": movie_id})

    async def get_box_office(self, window: PageWindow) -> Dict[str, Any]:
        movies = await self.movie_repo.find_page(window.query, window.limit, projection=BOX_OFFICE_PROJECTION)
        data = [
            {
                "id": str(movie["_id"]),
                "title": movie.get("title"),
                "genre": movie.get("genre", []),
                "director": _person_summary(movie.get("director") or {}),
                "cast": [_person_summary(actor) for actor in movie.get("cast", [])],
                "boxOffice": movie.get("boxOffice"),
                "awardsAndNominations": movie.get("awardsAndNominations", []),
            }
            for movie in movies
        ]
        return {
            "data": serialize_many(data),
            "pagination": {"nextCursor": next_cursor(movies, window.limit), "limit": window.limit},
        }

    async def update_box_office(self, update: BoxOfficeUpdate) -> Dict[str, Any]:
        movie = await self._require(update.movieId)
        fields = update.model_dump(exclude={"movieId"}, exclude_none=True)
        updated = await self.movie_repo.update_fields(movie["_id"], fields)
        return serialize_document(updated)

    async def get_news(self, window: PageWindow) -> Dict[str, Any]:
        movies = await self.movie_repo.find_page(window.query, window.limit, projection=NEWS_PROJECTION)
        data = [
            {
                "id": str(movie["_id"]),
                "title": movie.get("title"),
                "genre": movie.get("genre", []),
                "newsAndArticles": movie.get("newsAndArticles", []),
                "cast": [_person_summary(actor) for actor in movie.get("cast", [])],
                "sequels": movie.get("sequels", []),
            }
            for movie in movies
        ]
        return {
            "data": serialize_many(data),
            "pagination": {"nextCursor": next_cursor(movies, window.limit), "limit": window.limit},
        }

    async def update_news(self, update: NewsUpdate) -> Dict[str, Any]:
        movie = await self._require(update.movieId)
        fields = update.model_dump(exclude={"movieId"}, exclude_none=True)
        updated = await self.movie_repo.update_fields(movie["_id"], fields)
        return serialize_document(updated)
