from typing import Any, Dict, List, Optional

from .base_repository import BaseRepository

# Never hand the password hash back to callers
PUBLIC_PROJECTION = {"password": 0}


class UserRepository(BaseRepository):
    collection_name = "users"

    async def get_public(self, user_id: Any) -> Optional[Dict]:
        return await self.get_by_id(user_id, PUBLIC_PROJECTION)

    async def get_by_email(self, email: str) -> Optional[Dict]:
        return await self.collection.find_one({"email": email})

    async def get_by_username(self, username: str) -> Optional[Dict]:
        return await self.collection.find_one({"username": username})

    async def get_by_email_or_username(self, value: str) -> Optional[Dict]:
        return await self.collection.find_one({"$or": [{"email": value}, {"username": value}]})

    async def exists_with_email_or_username(self, email: str, username: str) -> bool:
        found = await self.collection.find_one({"$or": [{"email": email}, {"username": username}]}, {"_id": 1})
        return found is not None

    async def create_user(
        self,
        name: str,
        email: str,
        username: str,
        hashed_password: str,
        is_admin: bool = False,
    ) -> Dict:
        return await self.insert({
            "name": name,
            "email": email,
            "username": username,
            "password": hashed_password,
            "isAdmin": is_admin,
            "preferences": {"genres": [], "actors": []},
            "wishlist": [],
        })

    async def find_peer_ids(self, genres: List[str], exclude_user_id: Any) -> List[Any]:
        """Other users sharing at least one preferred genre."""
        if not genres:
            return []
        cursor = self.collection.find(
            {"preferences.genres": {"$in": list(genres)}, "_id": {"$ne": exclude_user_id}},
            {"_id": 1},
        )
        return [doc["_id"] for doc in await cursor.to_list(length=None)]
