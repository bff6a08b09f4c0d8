import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from fastapi import HTTPException, status

from ..core.documents import parse_object_id, serialize_many
from ..core.pagination import PageWindow, merge_filters, next_cursor
from ..repositories.movie_repository import MovieRepository
from ..repositories.rating_review_repository import RatingReviewRepository
from ..repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PreferenceSet:
    genres: List[str] = field(default_factory=list)
    actors: List[str] = field(default_factory=list)


def effective_preferences(user: Optional[Dict[str, Any]], default: PreferenceSet) -> PreferenceSet:
    """The user's own preferences, or ``default`` when no genre was ever picked."""
    preferences = (user or {}).get("preferences") or {}
    genres = preferences.get("genres") or []
    if not genres:
        return default
    return PreferenceSet(genres=list(genres), actors=list(preferences.get("actors") or []))


def union_by_identity(*groups: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Deduplicate on ``_id`` (not on value), ordered by identity."""
    seen: Dict[str, Dict[str, Any]] = {}
    for group in groups:
        for movie in group:
            seen.setdefault(str(movie["_id"]), movie)
    return sorted(seen.values(), key=lambda m: str(m["_id"]))


class RecommendationService:
    def __init__(
        self,
        movie_repo: MovieRepository,
        review_repo: RatingReviewRepository,
        user_repo: UserRepository,
        default_preferences: PreferenceSet,
        popularity_band: float = 10,
    ):
        self.movie_repo = movie_repo
        self.review_repo = review_repo
        self.user_repo = user_repo
        self.default_preferences = default_preferences
        self.popularity_band = popularity_band

    async def get_recommendations(self, user_id: Any, window: PageWindow) -> Dict[str, Any]:
        """
        Personalized movie recommendations.

        Strategy:
        1. Genre match and actor match against the user's (or default) preferences
        2. Movies rated by peers (users sharing a preferred genre), minus the ones already rated
        3. Deduplicated union of 1 and 2 as an unranked candidate pool
        4. Separately paginated list: preferred genres, not yet rated
        """
        user_id = parse_object_id(user_id, "user id")
        user = await self.user_repo.get_public(user_id)
        if user is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

        preferences = effective_preferences(user, self.default_preferences)
        genre_filter = {"genre": {"$in": preferences.genres}}

        genre_match = await self.movie_repo.find_page(merge_filters(window.query, genre_filter), window.limit)

        actor_match: List[Dict] = []
        if preferences.actors:
            actor_filter = {"cast.name": {"$in": preferences.actors}}
            actor_match = await self.movie_repo.find_page(merge_filters(window.query, actor_filter), window.limit)

        rated_ids = list(await self.review_repo.rated_movie_ids(user_id))
        rated = {str(movie_id) for movie_id in rated_ids}

        peer_ids = await self.user_repo.find_peer_ids(preferences.genres, user_id)
        peer_movie_ids = await self.review_repo.movie_ids_rated_by(peer_ids)
        peer_candidates = await self.movie_repo.find_by_ids(
            [movie_id for movie_id in peer_movie_ids if str(movie_id) not in rated]
        )

        recommendations = union_by_identity(genre_match, actor_match, peer_candidates)

        personalized_filter: Dict[str, Any] = dict(genre_filter)
        if rated_ids:
            personalized_filter["_id"] = {"$nin": rated_ids}
        personalized = await self.movie_repo.find_page(
            merge_filters(window.query, personalized_filter), window.limit
        )

        logger.info(
            "Recommendations computed",
            extra={
                "user_id": str(user_id),
                "detail": {
                    "genre_match": len(genre_match),
                    "actor_match": len(actor_match),
                    "peers": len(peer_ids),
                    "peer_candidates": len(peer_candidates),
                    "personalized": len(personalized),
                },
            },
        )

        return {
            "recommendations": serialize_many(recommendations),
            "personalizedRecommendations": serialize_many(personalized),
            "nextCursor": next_cursor(personalized, window.limit),
        }

    async def get_trending(self, window: PageWindow) -> Dict[str, Any]:
        movies = await self.movie_repo.find_ranked_page(window, None, "popularity")
        return {"trendingMovies": serialize_many(movies), "nextCursor": next_cursor(movies, window.limit)}

    async def get_top_rated(self, window: PageWindow) -> Dict[str, Any]:
        movies = await self.movie_repo.find_ranked_page(window, None, "averageRating")
        return {"topRatedMovies": serialize_many(movies), "nextCursor": next_cursor(movies, window.limit)}

    async def get_similar(self, movie_id: str, window: PageWindow) -> Dict[str, Any]:
        """Movies sharing a genre, the director, or a popularity within the band around the reference."""
        movie_oid = parse_object_id(movie_id, "movieId")
        movie = await self.movie_repo.get_by_id(movie_oid)
        if movie is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Movie not found")

        clauses: List[Dict[str, Any]] = []
        if movie.get("genre"):
            clauses.append({"genre": {"$in": movie["genre"]}})
        director = (movie.get("director") or {}).get("name")
        if director:
            clauses.append({"director.name": director})
        popularity = movie.get("popularity")
        if popularity is not None:
            clauses.append({
                "popularity": {
                    "$gte": popularity - self.popularity_band,
                    "$lte": popularity + self.popularity_band,
                }
            })

        if not clauses:
            return {"similarMovies": [], "nextCursor": None}

        query = merge_filters({"$or": clauses}, {"_id": {"$ne": movie_oid}})
        similar = await self.movie_repo.find_ranked_page(window, query, "popularity")
        return {"similarMovies": serialize_many(similar), "nextCursor": next_cursor(similar, window.limit)}
