from pydantic import BaseModel
from typing import List, Optional, Dict, Any


class RecommendationResponse(BaseModel):
    """Candidate pool plus the independently paginated personalized list"""
    recommendations: List[Dict[str, Any]]
    personalizedRecommendations: List[Dict[str, Any]]
    nextCursor: Optional[str] = None


class TrendingResponse(BaseModel):
    trendingMovies: List[Dict[str, Any]]
    nextCursor: Optional[str] = None


class TopRatedResponse(BaseModel):
    topRatedMovies: List[Dict[str, Any]]
    nextCursor: Optional[str] = None


class SimilarResponse(BaseModel):
    similarMovies: List[Dict[str, Any]]
    nextCursor: Optional[str] = None
