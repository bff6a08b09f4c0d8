from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .common import NonBlankStr


class Person(BaseModel):
    """Director or cast member."""
    name: str
    biography: Optional[str] = None
    filmography: List[str] = Field(default_factory=list)
    awards: List[str] = Field(default_factory=list)
    photos: List[str] = Field(default_factory=list)


class ParentalGuidance(BaseModel):
    rating: Optional[str] = None
    description: Optional[str] = None
    examples: List[str] = Field(default_factory=list)


class CriticRatings(BaseModel):
    IMDb: Optional[float] = None
    RottenTomatoes: Optional[float] = None
    Metacritic: Optional[float] = None
    AudienceScore: Optional[float] = None


class Article(BaseModel):
    title: str
    date: Optional[datetime] = None
    summary: Optional[str] = None
    link: Optional[str] = None


class BoxOffice(BaseModel):
    openingWeekendEarnings: Optional[float] = None
    totalEarnings: Optional[float] = None
    domesticRevenue: Optional[float] = None
    internationalRevenue: Optional[float] = None
    budget: Optional[float] = None
    worldwideGross: Optional[float] = None


class Award(BaseModel):
    award: str
    category: Optional[str] = None
    result: Optional[str] = None
    year: Optional[int] = None


class Sequel(BaseModel):
    title: str
    releaseYear: Optional[int] = None
    synopsis: Optional[str] = None


class MovieBase(BaseModel):
    # Catalog documents carry many optional descriptive fields (trivia, goofs,
    # soundtrack, relatedMovies, ...); unknown keys are kept as-is.
    model_config = ConfigDict(extra="allow")

    genre: List[str] = Field(default_factory=list)
    director: Optional[Person] = None
    cast: List[Person] = Field(default_factory=list)
    releaseDate: Optional[datetime] = None
    releaseYear: Optional[int] = None
    releaseDecade: Optional[str] = None
    countryOfOrigin: Optional[str] = None
    language: Optional[str] = None
    runtime: Optional[int] = None
    synopsis: Optional[str] = None
    averageRating: Optional[float] = None
    movieCoverPhoto: Optional[str] = None
    parentalGuidance: Optional[ParentalGuidance] = None
    popularity: Optional[float] = None
    ratings: Optional[CriticRatings] = None
    keywords: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    newsAndArticles: List[Article] = Field(default_factory=list)
    boxOffice: Optional[BoxOffice] = None
    awardsAndNominations: List[Award] = Field(default_factory=list)
    streamingPlatforms: List[str] = Field(default_factory=list)
    sequels: List[Sequel] = Field(default_factory=list)
    prequels: List[Sequel] = Field(default_factory=list)
    filmingLocations: List[str] = Field(default_factory=list)
    filmmakingTechniques: List[str] = Field(default_factory=list)


class MovieCreate(MovieBase):
    title: NonBlankStr


class MovieUpdate(MovieBase):
    title: Optional[NonBlankStr] = None


class BoxOfficeUpdate(BaseModel):
    movieId: str
    boxOffice: BoxOffice
    awardsAndNominations: List[Award]
    director: Optional[Person] = None
    cast: Optional[List[Person]] = None


class NewsUpdate(BaseModel):
    movieId: str
    newsAndArticles: List[Article]
    sequels: Optional[List[Sequel]] = None
    cast: Optional[List[Person]] = None
