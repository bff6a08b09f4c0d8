from typing import Dict, List

from .base_repository import BaseRepository

LIST_MOVIE_PROJECTION = {"title": 1, "genre": 1}
USERNAME_PROJECTION = {"username": 1}


class CustomListRepository(BaseRepository):
    collection_name = "custom_lists"

    async def with_references(self, lists: List[Dict], include_followers: bool = True) -> List[Dict]:
        await self.populate(lists, "movies", "movies", LIST_MOVIE_PROJECTION)
        await self.populate(lists, "creator", "users", USERNAME_PROJECTION)
        if include_followers:
            await self.populate(lists, "followers", "users", USERNAME_PROJECTION)
        return lists
