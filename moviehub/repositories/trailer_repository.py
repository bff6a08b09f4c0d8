from typing import Any, Dict, List, Optional

from .base_repository import BaseRepository

TRAILER_MOVIE_PROJECTION = {"title": 1, "genre": 1, "releaseDate": 1}


class TrailerRepository(BaseRepository):
    collection_name = "trailers"

    async def get_by_movie_and_url(self, movie_id: Optional[Any], trailer_url: str) -> Optional[Dict]:
        return await self.collection.find_one({"movieId": movie_id, "trailerUrl": trailer_url})

    async def with_movie(self, trailers: List[Dict]) -> List[Dict]:
        return await self.populate(trailers, "movieId", "movies", TRAILER_MOVIE_PROJECTION)
