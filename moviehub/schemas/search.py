from typing import Optional

from pydantic import BaseModel, ConfigDict


class SearchParams(BaseModel):
    """Free text search plus catalog filters, all optional. Comma separated values mean "any of"."""
    model_config = ConfigDict(extra="ignore")

    search: Optional[str] = None
    genre: Optional[str] = None
    ratingMin: Optional[float] = None
    ratingMax: Optional[float] = None
    popularityMin: Optional[int] = None
    popularityMax: Optional[int] = None
    releaseYear: Optional[int] = None
    releaseDecade: Optional[int] = None
    runtimeMin: Optional[int] = None
    runtimeMax: Optional[int] = None
    parentalRating: Optional[str] = None
    actor: Optional[str] = None
    keywords: Optional[str] = None
    countryOfOrigin: Optional[str] = None
    language: Optional[str] = None
    boxOfficeMin: Optional[float] = None
    boxOfficeMax: Optional[float] = None
    awards: Optional[str] = None
    streamingPlatform: Optional[str] = None
    filmingLocation: Optional[str] = None
    filmmakingTechnique: Optional[str] = None
    trending: bool = False
