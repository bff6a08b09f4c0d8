from typing import List

from pydantic import BaseModel, Field

from .common import NonBlankStr


class BoardIn(BaseModel):
    title: NonBlankStr
    description: NonBlankStr
    tags: List[str] = Field(default_factory=list)


class PostCreate(BaseModel):
    content: NonBlankStr
    discussionBoardId: str


class PostUpdate(BaseModel):
    content: NonBlankStr


class PostCommentCreate(BaseModel):
    postId: str
    content: NonBlankStr


class PostLikeRequest(BaseModel):
    postId: str
