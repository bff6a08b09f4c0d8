from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    MONGO_URI: str = "mongodb://localhost:27017"
    MONGO_DB_NAME: str = "moviehub"

    JWT_SECRET_KEY: str = "change-me-in-production"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # Cursor pagination
    DEFAULT_PAGE_LIMIT: int = 10
    MAX_PAGE_LIMIT: Optional[int] = None

    # Fallback used when a user has not picked any genres yet
    DEFAULT_PREFERENCE_GENRES: List[str] = ["Action", "Drama", "Comedy"]
    DEFAULT_PREFERENCE_ACTORS: List[str] = ["Leonardo DiCaprio", "Tom Hardy", "Morgan Freeman"]
    SIMILAR_POPULARITY_BAND: float = 10

    RATE_LIMIT_STORAGE_URI: str = "memory://"
    RATE_LIMIT_DEFAULT: str = "100/minute"

    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]
    PUBLIC_BASE_URL: str = "http://localhost:5000"
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
