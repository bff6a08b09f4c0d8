import logging
from typing import Any, Dict

from bson import ObjectId
from fastapi import HTTPException, status

from ..core.documents import contains_id, parse_object_id, serialize_document, serialize_many
from ..core.pagination import PageWindow, next_cursor
from ..repositories.custom_list_repository import CustomListRepository
from ..repositories.movie_repository import MovieRepository
from ..schemas.common import ShareTargets
from ..schemas.custom_list import CustomListCreate, CustomListUpdate, ListMovieChange
from .notification_service import Notifier, dispatch_share

logger = logging.getLogger(__name__)

DEFAULT_SHARE_MESSAGE = "Check out this amazing custom list!"


class CustomListService:
    def __init__(
        self,
        list_repo: CustomListRepository,
        movie_repo: MovieRepository,
        notifier: Notifier,
        public_base_url: str,
    ):
        self.list_repo = list_repo
        self.movie_repo = movie_repo
        self.notifier = notifier
        self.public_base_url = public_base_url.rstrip("/")

    def shareable_link(self, list_id: Any) -> str:
        return f"{self.public_base_url}/custom-list/{list_id}"

    async def _require(self, list_id: str) -> Dict[str, Any]:
        custom_list = await self.list_repo.get_by_id(parse_object_id(list_id, "listId"))
        if not custom_list:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Custom list not found")
        return custom_list

    async def _require_owned(self, list_id: str, user_id: str) -> Dict[str, Any]:
        custom_list = await self._require(list_id)
        if str(custom_list.get("creator")) != str(user_id):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Only the creator can modify this list",
            )
        return custom_list

    async def create_list(self, user_id: str, payload: CustomListCreate) -> Dict[str, Any]:
        list_id = ObjectId()
        document: Dict[str, Any] = {
            "_id": list_id,
            "name": payload.name,
            "description": payload.description,
            "isPublic": payload.isPublic,
            "creator": parse_object_id(user_id, "user id"),
            "movies": [parse_object_id(movie_id, "movieId") for movie_id in payload.movies],
            "followers": [],
        }
        if payload.isPublic:
            document["shareableLink"] = self.shareable_link(list_id)

        created = await self.list_repo.insert(document)
        logger.info("Custom list created", extra={"user_id": user_id, "detail": str(list_id)})
        return serialize_document(created)

    async def list_lists(self, window: PageWindow) -> Dict[str, Any]:
        lists = await self.list_repo.find_page(window.query, window.limit)
        cursor = next_cursor(lists, window.limit)
        await self.list_repo.with_references(lists)
        return {"customLists": serialize_many(lists), "nextCursor": cursor}

    async def get_list(self, list_id: str) -> Dict[str, Any]:
        custom_list = await self._require(list_id)
        await self.list_repo.with_references([custom_list], include_followers=False)
        return serialize_document(custom_list)

    async def update_list(self, list_id: str, user_id: str, changes: CustomListUpdate) -> Dict[str, Any]:
        custom_list = await self._require_owned(list_id, user_id)
        fields = changes.model_dump(exclude_none=True)
        is_public = fields.get("isPublic", custom_list.get("isPublic", True))
        if is_public and not custom_list.get("shareableLink"):
            fields["shareableLink"] = self.shareable_link(custom_list["_id"])
        return serialize_document(await self.list_repo.update_fields(custom_list["_id"], fields))

    async def delete_list(self, list_id: str, user_id: str) -> None:
        custom_list = await self._require_owned(list_id, user_id)
        await self.list_repo.delete(custom_list["_id"])
        logger.info("Custom list deleted", extra={"user_id": user_id, "detail": list_id})

    async def add_movie(self, user_id: str, change: ListMovieChange) -> Dict[str, Any]:
        custom_list = await self._require_owned(change.listId, user_id)
        movie_id = parse_object_id(change.movieId, "movieId")
        if not await self.movie_repo.get_by_id(movie_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Movie not found")
        if contains_id(custom_list.get("movies"), movie_id):
            raise HTTPException(status_code=400, detail="Movie already in the list")
        return serialize_document(await self.list_repo.add_to_set(custom_list["_id"], "movies", movie_id))

    async def remove_movie(self, user_id: str, change: ListMovieChange) -> Dict[str, Any]:
        custom_list = await self._require_owned(change.listId, user_id)
        movie_id = parse_object_id(change.movieId, "movieId")
        if not contains_id(custom_list.get("movies"), movie_id):
            raise HTTPException(status_code=400, detail="Movie not found in the list")
        return serialize_document(await self.list_repo.pull(custom_list["_id"], "movies", movie_id))

    async def follow(self, user_id: str, list_id: str) -> Dict[str, Any]:
        custom_list = await self._require(list_id)
        user_oid = parse_object_id(user_id, "user id")
        if contains_id(custom_list.get("followers"), user_oid):
            raise HTTPException(status_code=400, detail="You are already following this list")
        return serialize_document(await self.list_repo.add_to_set(custom_list["_id"], "followers", user_oid))

    async def unfollow(self, user_id: str, list_id: str) -> Dict[str, Any]:
        custom_list = await self._require(list_id)
        user_oid = parse_object_id(user_id, "user id")
        if not contains_id(custom_list.get("followers"), user_oid):
            raise HTTPException(status_code=400, detail="You are not following this list")
        return serialize_document(await self.list_repo.pull(custom_list["_id"], "followers", user_oid))

    async def share(self, list_id: str, targets: ShareTargets) -> Dict[str, Any]:
        custom_list = await self._require(list_id)
        if not custom_list.get("isPublic", True):
            raise HTTPException(status_code=400, detail="Cannot share a private custom list")
        await self.list_repo.with_references([custom_list], include_followers=False)

        creator = custom_list.get("creator") or {}
        lines = [
            targets.message or DEFAULT_SHARE_MESSAGE,
            f"List Name: {custom_list['name']}",
            f"Created By: {creator.get('username', 'unknown')}",
            f"Description: {custom_list.get('description') or ''}",
            "Movies:",
        ]
        for position, movie in enumerate(custom_list.get("movies", []), start=1):
            lines.append(f"{position}. {movie.get('title')} - {', '.join(movie.get('genre', []))}")
        lines.append(f"Shareable Link: {self.shareable_link(custom_list['_id'])}")

        channels = await dispatch_share(
            self.notifier, targets, f"Check out {custom_list['name']}", "\n".join(lines)
        )
        return {"message": "Custom list shared", "channels": channels}
