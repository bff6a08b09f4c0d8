from typing import Optional

from pydantic import BaseModel, Field

from .common import NonBlankStr


class RatingReviewIn(BaseModel):
    movieId: str
    rating: int = Field(..., ge=1, le=5)
    review: Optional[str] = None


class LikeIn(BaseModel):
    reviewId: str


class CommentIn(BaseModel):
    reviewId: str
    comment: NonBlankStr
