from typing import List, Optional

from pydantic import BaseModel, Field

from .common import NonBlankStr


class Preferences(BaseModel):
    genres: List[str] = Field(default_factory=list)
    actors: List[str] = Field(default_factory=list)


class ProfileCreate(BaseModel):
    preferences: Preferences


class ProfileUpdate(BaseModel):
    name: Optional[NonBlankStr] = None
    preferences: Optional[Preferences] = None


class WishlistItem(BaseModel):
    movieId: str


class WishlistUpdate(BaseModel):
    movieId: str
    action: str = Field(..., pattern="^(add|remove)$")
