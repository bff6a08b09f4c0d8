import logging
from typing import Any, Dict

from fastapi import HTTPException, status
from pymongo.errors import DuplicateKeyError

from ..core.documents import contains_id, parse_object_id, serialize_document
from ..core.security import get_password_hash
from ..repositories.user_repository import UserRepository
from ..schemas.auth import SignupDetailsUpdate
from ..schemas.user import Preferences, ProfileUpdate

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, user_repo: UserRepository):
        self.user_repo = user_repo

    async def _load(self, user_id: str) -> Dict[str, Any]:
        user = await self.user_repo.get_public(parse_object_id(user_id, "user id"))
        if not user:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
        return user

    async def _save(self, user_id: Any, fields: Dict[str, Any]) -> Dict[str, Any]:
        updated = await self.user_repo.update_fields(user_id, fields)
        if not updated:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
        updated.pop("password", None)
        return serialize_document(updated)

    async def get_profile(self, user_id: str) -> Dict[str, Any]:
        return serialize_document(await self._load(user_id))

    async def update_signup_details(self, user_id: str, details: SignupDetailsUpdate) -> Dict[str, Any]:
        if not any([details.name, details.email, details.username, details.password]):
            raise HTTPException(status_code=400, detail="At least one field must be updated")

        user = await self._load(user_id)
        fields: Dict[str, Any] = {}

        if details.email and details.email != user["email"]:
            if await self.user_repo.get_by_email(details.email):
                raise HTTPException(status_code=400, detail="Email already exists")
            fields["email"] = details.email

        if details.username and details.username != user["username"]:
            if await self.user_repo.get_by_username(details.username):
                raise HTTPException(status_code=400, detail="Username already exists")
            fields["username"] = details.username

        if details.password:
            fields["password"] = get_password_hash(details.password)
        if details.name:
            fields["name"] = details.name

        try:
            return await self._save(user["_id"], fields)
        except DuplicateKeyError:
            raise HTTPException(status_code=400, detail="Email or username already exists")

    async def set_preferences(self, user_id: str, preferences: Preferences) -> Dict[str, Any]:
        user = await self._load(user_id)
        return await self._save(user["_id"], {"preferences": preferences.model_dump()})

    async def update_profile(self, user_id: str, profile: ProfileUpdate) -> Dict[str, Any]:
        if profile.name is None and profile.preferences is None:
            raise HTTPException(status_code=400, detail="No fields to update")

        user = await self._load(user_id)
        fields: Dict[str, Any] = {}
        if profile.name:
            fields["name"] = profile.name
        if profile.preferences is not None:
            fields["preferences"] = profile.preferences.model_dump()
        return await self._save(user["_id"], fields)

    async def delete_profile(self, user_id: str) -> None:
        deleted = await self.user_repo.delete(parse_object_id(user_id, "user id"))
        if not deleted:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
        logger.info("User deleted", extra={"user_id": user_id})

    # Wishlist
    async def get_wishlist(self, user_id: str) -> list:
        user = await self._load(user_id)
        return serialize_document(user.get("wishlist", []))

    async def add_to_wishlist(self, user_id: str, movie_id: str) -> list:
        movie_oid = parse_object_id(movie_id, "movieId")
        user = await self._load(user_id)
        if contains_id(user.get("wishlist"), movie_oid):
            raise HTTPException(status_code=400, detail="Movie already in wishlist")
        updated = await self.user_repo.add_to_set(user["_id"], "wishlist", movie_oid)
        return serialize_document((updated or {}).get("wishlist", []))

    async def remove_from_wishlist(self, user_id: str, movie_id: str) -> list:
        movie_oid = parse_object_id(movie_id, "movieId")
        user = await self._load(user_id)
        if not contains_id(user.get("wishlist"), movie_oid):
            raise HTTPException(status_code=400, detail="Movie not found in wishlist")
        updated = await self.user_repo.pull(user["_id"], "wishlist", movie_oid)
        return serialize_document((updated or {}).get("wishlist", []))

    async def update_wishlist(self, user_id: str, movie_id: str, action: str) -> list:
        if action == "add":
            return await self.add_to_wishlist(user_id, movie_id)
        return await self.remove_from_wishlist(user_id, movie_id)
