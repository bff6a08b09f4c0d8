import logging
from typing import Optional

from fastapi import Depends, HTTPException, Query, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pydantic import BaseModel

from .config import settings
from .core.pagination import PageWindow, get_cursor_pagination_params
from .core.security import decode_access_token
from .services.notification_service import LoggingNotifier, Notifier

logger = logging.getLogger(__name__)


# Global state for connections
class AppState:
    mongo_client: Optional[AsyncIOMotorClient] = None
    db: Optional[AsyncIOMotorDatabase] = None


state = AppState()


async def init_resources():
    """Initialize the document store client and indexes"""
    state.mongo_client = AsyncIOMotorClient(settings.MONGO_URI, serverSelectionTimeoutMS=5000)
    state.db = state.mongo_client[settings.MONGO_DB_NAME]
    await ensure_indexes(state.db)
    logger.info("Document store connected", extra={"path": settings.MONGO_DB_NAME})


async def close_resources():
    """Close all resources"""
    if state.mongo_client:
        state.mongo_client.close()
        state.mongo_client = None
        state.db = None


async def ensure_indexes(db: AsyncIOMotorDatabase):
    await db["users"].create_index("email", unique=True)
    await db["users"].create_index("username", unique=True)
    await db["users"].create_index("preferences.genres")
    await db["movies"].create_index("genre")
    await db["movies"].create_index("cast.name")
    await db["movies"].create_index("popularity")
    # One review and one like per user; the services map a violation to a 400
    await db["rating_reviews"].create_index([("movie", 1), ("user", 1)], unique=True)
    await db["likes"].create_index([("review", 1), ("user", 1)], unique=True)
    await db["posts"].create_index("postId", unique=True)
    await db["post_likes"].create_index([("post", 1), ("user", 1)], unique=True)
    await db["post_comments"].create_index("post")


# Dependencies
async def get_db() -> AsyncIOMotorDatabase:
    return state.db


async def page_window(
    limit: Optional[str] = Query(None, description="Page size, defaults to 10"),
    cursor: Optional[str] = Query(None, description="Identity of the last item of the previous page"),
) -> PageWindow:
    # limit is read as a string so that junk values fall back to the default instead of a 422
    return get_cursor_pagination_params(
        limit,
        cursor,
        default_limit=settings.DEFAULT_PAGE_LIMIT,
        max_limit=settings.MAX_PAGE_LIMIT,
    )


# Auth Dependencies
class CurrentUser(BaseModel):
    id: str
    is_admin: bool = False


oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/users/login")


async def get_current_user(token: str = Depends(oauth2_scheme)) -> CurrentUser:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = decode_access_token(token)
        user_id: str = payload.get("sub")
        if user_id is None:
            raise credentials_exception
    except JWTError:
        raise credentials_exception

    return CurrentUser(id=user_id, is_admin=bool(payload.get("is_admin", False)))


async def require_admin(current_user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    if not current_user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied. Admin only.",
        )
    return current_user


def get_notifier() -> Notifier:
    return LoggingNotifier()
