from typing import List, Optional

from pydantic import BaseModel, Field

from .common import NonBlankStr


class CustomListCreate(BaseModel):
    name: NonBlankStr
    description: Optional[str] = None
    isPublic: bool = True
    movies: List[str] = Field(default_factory=list)


class CustomListUpdate(BaseModel):
    name: Optional[NonBlankStr] = None
    description: Optional[str] = None
    isPublic: Optional[bool] = None


class ListMovieChange(BaseModel):
    listId: str
    movieId: str


class ListFollow(BaseModel):
    listId: str
