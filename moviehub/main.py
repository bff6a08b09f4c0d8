"""
=============================================================================
MovieHub API - Movie recommendation and discussion platform
=============================================================================
Features:
  - Personalized, trending, top-rated and similar-title recommendations
  - Cursor pagination on every list endpoint
  - Ratings & reviews, custom lists, trailers, discussion boards
  - Admin catalog management and statistics
=============================================================================
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from pymongo.errors import PyMongoError
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import settings
from .dependencies import close_resources, init_resources
from .exceptions import (
    global_exception_handler,
    http_exception_handler,
    store_exception_handler,
    validation_exception_handler,
)
from .limiter import limiter
from .logging_config import setup_logging
from .middleware import RequestTrackingMiddleware
from .routers import (
    admin_stats_router,
    custom_list_router,
    discussion_router,
    movie_router,
    rating_review_router,
    recommendation_router,
    search_router,
    trailer_router,
    user_router,
)

API_VERSION = "1.0.0"

logger = logging.getLogger(__name__)


# =============================================================================
# STARTUP & SHUTDOWN
# =============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.LOG_LEVEL)
    await init_resources()
    logger.info("All connections initialized")
    yield
    await close_resources()
    logger.info("All connections closed")


# =============================================================================
# FASTAPI APP
# =============================================================================
app = FastAPI(
    title="MovieHub API",
    description="Movie recommendations, reviews, custom lists and discussion boards",
    version=API_VERSION,
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(PyMongoError, store_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)

app.add_middleware(RequestTrackingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

for module in (
    user_router,
    movie_router,
    rating_review_router,
    recommendation_router,
    search_router,
    custom_list_router,
    trailer_router,
    discussion_router,
    admin_stats_router,
):
    app.include_router(module.router)


# =============================================================================
# API ENDPOINTS
# =============================================================================
@app.get("/")
async def root():
    return {"message": "Movie Recommendation System API is running..."}


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": API_VERSION,
    }
