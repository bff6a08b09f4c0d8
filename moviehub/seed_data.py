import asyncio
import logging
import os
from datetime import datetime

from motor.motor_asyncio import AsyncIOMotorClient

from .config import settings
from .core.security import get_password_hash
from .dependencies import ensure_indexes
from .logging_config import setup_logging
from .repositories.movie_repository import MovieRepository
from .repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

ADMIN_NAME = os.getenv("ADMIN_NAME", "Admin User")
ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@example.com")
ADMIN_USERNAME = os.getenv("ADMIN_USERNAME", "admin")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "admin@123")


def _person(name, **extra):
    return {"name": name, "filmography": [], "awards": [], "photos": [], **extra}


# Sample catalog
MOVIES = [
    {
        "title": "Inception",
        "genre": ["Sci-Fi", "Action", "Thriller"],
        "director": _person("Christopher Nolan", biography="British-American filmmaker."),
        "cast": [_person("Leonardo DiCaprio"), _person("Tom Hardy"), _person("Elliot Page")],
        "releaseDate": datetime(2010, 7, 16),
        "releaseYear": 2010,
        "releaseDecade": "2010s",
        "countryOfOrigin": "USA",
        "language": "English",
        "runtime": 148,
        "synopsis": "A thief who steals corporate secrets through dream-sharing technology is given the "
                    "inverse task of planting an idea into the mind of a C.E.O.",
        "popularity": 92,
        "ratings": {"IMDb": 8.8, "RottenTomatoes": 87, "Metacritic": 74},
        "keywords": ["dream", "heist", "subconscious"],
        "boxOffice": {"worldwideGross": 836_800_000, "totalEarnings": 836_800_000, "budget": 160_000_000},
        "awardsAndNominations": [
            {"award": "Academy Award", "category": "Best Cinematography", "result": "Won", "year": 2011},
        ],
        "streamingPlatforms": ["Netflix"],
        "filmmakingTechniques": ["IMAX"],
    },
    {
        "title": "The Revenant",
        "genre": ["Drama", "Adventure"],
        "director": _person("Alejandro G. Inarritu"),
        "cast": [_person("Leonardo DiCaprio"), _person("Tom Hardy")],
        "releaseDate": datetime(2015, 12, 25),
        "releaseYear": 2015,
        "releaseDecade": "2010s",
        "countryOfOrigin": "USA",
        "language": "English",
        "runtime": 156,
        "synopsis": "A frontiersman on a fur trading expedition fights for survival after being mauled by a bear.",
        "popularity": 78,
        "ratings": {"IMDb": 8.0, "RottenTomatoes": 78, "Metacritic": 76},
        "boxOffice": {"worldwideGross": 533_000_000, "totalEarnings": 533_000_000},
    },
    {
        "title": "The Shawshank Redemption",
        "genre": ["Drama", "Crime"],
        "director": _person("Frank Darabont"),
        "cast": [_person("Tim Robbins"), _person("Morgan Freeman")],
        "releaseDate": datetime(1994, 9, 23),
        "releaseYear": 1994,
        "releaseDecade": "1990s",
        "countryOfOrigin": "USA",
        "language": "English",
        "runtime": 142,
        "synopsis": "Two imprisoned men bond over a number of years, finding solace and eventual redemption.",
        "popularity": 88,
        "ratings": {"IMDb": 9.3, "RottenTomatoes": 91, "Metacritic": 82},
        "boxOffice": {"worldwideGross": 73_300_000, "totalEarnings": 73_300_000},
    },
    {
        "title": "Superbad",
        "genre": ["Comedy"],
        "director": _person("Greg Mottola"),
        "cast": [_person("Jonah Hill"), _person("Michael Cera")],
        "releaseDate": datetime(2007, 8, 17),
        "releaseYear": 2007,
        "releaseDecade": "2000s",
        "countryOfOrigin": "USA",
        "language": "English",
        "runtime": 113,
        "synopsis": "Two co-dependent high school seniors are forced to deal with separation anxiety.",
        "popularity": 61,
        "ratings": {"IMDb": 7.6, "RottenTomatoes": 88, "Metacritic": 76},
    },
    {
        "title": "Hereditary",
        "genre": ["Horror", "Drama"],
        "director": _person("Ari Aster"),
        "cast": [_person("Toni Collette"), _person("Alex Wolff")],
        "releaseDate": datetime(2018, 6, 8),
        "releaseYear": 2018,
        "releaseDecade": "2010s",
        "countryOfOrigin": "USA",
        "language": "English",
        "runtime": 127,
        "synopsis": "A grieving family is haunted by tragic and disturbing occurrences.",
        "popularity": 70,
        "ratings": {"IMDb": 7.3, "RottenTomatoes": 90, "Metacritic": 87},
    },
]


async def seed_data():
    logger.info("Starting data seeding", extra={"path": settings.MONGO_DB_NAME})

    client = AsyncIOMotorClient(settings.MONGO_URI, serverSelectionTimeoutMS=5000)
    try:
        db = client[settings.MONGO_DB_NAME]
        await ensure_indexes(db)

        users = UserRepository(db)
        if await users.exists_with_email_or_username(ADMIN_EMAIL, ADMIN_USERNAME):
            logger.info("Admin user already exists", extra={"detail": ADMIN_USERNAME})
        else:
            admin = await users.create_user(
                ADMIN_NAME, ADMIN_EMAIL, ADMIN_USERNAME, get_password_hash(ADMIN_PASSWORD), is_admin=True
            )
            logger.info("Admin user created", extra={"user_id": str(admin["_id"])})

        movies = MovieRepository(db)
        inserted = 0
        for movie in MOVIES:
            if await movies.get_by_title(movie["title"]):
                continue
            await movies.insert(dict(movie))
            inserted += 1
        logger.info("Movies seeded", extra={"detail": {"inserted": inserted, "total": len(MOVIES)}})
    finally:
        client.close()


if __name__ == "__main__":
    setup_logging(settings.LOG_LEVEL)
    asyncio.run(seed_data())
