import logging
from typing import Any, Dict

from fastapi import HTTPException, status

from ..core.documents import parse_object_id, serialize_document, serialize_many
from ..core.pagination import PageWindow, next_cursor
from ..repositories.trailer_repository import TrailerRepository
from ..schemas.trailer import TrailerCreate, TrailerShare, TrailerUpdate
from .notification_service import Notifier, dispatch_share

logger = logging.getLogger(__name__)

DEFAULT_SHARE_MESSAGE = "Check out this amazing trailer!"


class TrailerService:
    def __init__(self, trailer_repo: TrailerRepository, notifier: Notifier, public_base_url: str):
        self.trailer_repo = trailer_repo
        self.notifier = notifier
        self.public_base_url = public_base_url.rstrip("/")

    async def _require(self, trailer_id: str) -> Dict[str, Any]:
        trailer = await self.trailer_repo.get_by_id(parse_object_id(trailer_id, "trailerId"))
        if not trailer:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Trailer not found")
        return trailer

    async def create_trailer(self, payload: TrailerCreate) -> Dict[str, Any]:
        movie_id = parse_object_id(payload.movieId, "movieId") if payload.movieId else None
        if await self.trailer_repo.get_by_movie_and_url(movie_id, payload.trailerUrl):
            raise HTTPException(status_code=400, detail="This trailer already exists for the specified movie.")

        document = payload.model_dump()
        document["movieId"] = movie_id
        created = await self.trailer_repo.insert(document)
        logger.info("Trailer created", extra={"detail": created["trailerName"]})
        return serialize_document(created)

    async def list_trailers(self, window: PageWindow) -> Dict[str, Any]:
        trailers = await self.trailer_repo.find_page(window.query, window.limit)
        cursor = next_cursor(trailers, window.limit)
        await self.trailer_repo.with_movie(trailers)
        return {"trailers": serialize_many(trailers), "nextCursor": cursor}

    async def get_trailer(self, trailer_id: str) -> Dict[str, Any]:
        trailer = await self._require(trailer_id)
        await self.trailer_repo.with_movie([trailer])
        return serialize_document(trailer)

    async def update_trailer(self, trailer_id: str, changes: TrailerUpdate) -> Dict[str, Any]:
        trailer = await self._require(trailer_id)
        updated = await self.trailer_repo.update_fields(trailer["_id"], changes.model_dump(exclude_none=True))
        return serialize_document(updated)

    async def delete_trailer(self, trailer_id: str) -> None:
        trailer = await self._require(trailer_id)
        await self.trailer_repo.delete(trailer["_id"])
        logger.info("Trailer deleted", extra={"detail": trailer_id})

    async def share(self, payload: TrailerShare) -> Dict[str, Any]:
        trailer = await self._require(payload.trailerId)
        await self.trailer_repo.with_movie([trailer])

        movie = trailer.get("movieId") or {}
        release_date = trailer.get("releaseDate")
        body = "\n".join([
            payload.message or DEFAULT_SHARE_MESSAGE,
            f"Trailer Name: {trailer['trailerName']}",
            f"Movie Title: {movie.get('title', 'a trailer')}",
            f"Type: {trailer.get('trailerType')}",
            f"Release Date: {release_date.date().isoformat() if release_date else 'Not specified'}",
            f"Duration: {trailer.get('duration')} seconds",
            f"Description: {trailer.get('description')}",
            f"Language: {trailer.get('language') or 'Not specified'}",
            f"Trailer URL: {trailer['trailerUrl']}",
            f"More Details: {self.public_base_url}/api/trailers/{trailer['_id']}",
        ])

        channels = await dispatch_share(self.notifier, payload, f"Check out {trailer['trailerName']}", body)
        return {"message": "Trailer shared", "channels": channels}
