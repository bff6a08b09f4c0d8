from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from .common import NonBlankStr, ShareTargets

TrailerType = Literal["Official", "Teaser", "Behind the Scenes", "Fan Made"]


class TrailerCreate(BaseModel):
    movieId: Optional[str] = None
    trailerName: NonBlankStr
    trailerUrl: NonBlankStr
    trailerType: TrailerType
    releaseDate: datetime
    duration: int = Field(..., gt=0, description="Duration in seconds")
    description: NonBlankStr
    language: Optional[str] = None
    regionRestrictions: List[str] = Field(default_factory=list)
    isPublic: bool = True


class TrailerUpdate(BaseModel):
    trailerName: Optional[NonBlankStr] = None
    trailerUrl: Optional[NonBlankStr] = None
    trailerType: Optional[TrailerType] = None
    releaseDate: Optional[datetime] = None
    duration: Optional[int] = Field(None, gt=0)
    description: Optional[NonBlankStr] = None
    language: Optional[str] = None
    regionRestrictions: Optional[List[str]] = None
    isPublic: Optional[bool] = None


class TrailerShare(ShareTargets):
    trailerId: str
