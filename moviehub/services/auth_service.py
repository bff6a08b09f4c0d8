import logging

from fastapi import HTTPException, status
from pymongo.errors import DuplicateKeyError

from ..repositories.user_repository import UserRepository
from ..schemas.auth import UserCreate, UserLogin, Token, UserSummary
from ..core.security import verify_password, get_password_hash, create_access_token

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, user_repo: UserRepository):
        self.user_repo = user_repo

    async def register_user(self, user_data: UserCreate) -> str:
        if await self.user_repo.exists_with_email_or_username(user_data.email, user_data.username):
            raise HTTPException(status_code=400, detail="Email or username already exists")

        hashed_password = get_password_hash(user_data.password)
        try:
            user = await self.user_repo.create_user(
                user_data.name, user_data.email, user_data.username, hashed_password
            )
        except DuplicateKeyError:
            # A concurrent registration took the email or username after the check above
            raise HTTPException(status_code=400, detail="Email or username already exists")
        logger.info("User registered", extra={"user_id": str(user["_id"])})
        return str(user["_id"])

    async def authenticate_user(self, login_data: UserLogin) -> Token:
        user = await self.user_repo.get_by_email_or_username(login_data.emailOrUsername)
        if not user:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
        if not verify_password(login_data.password, user["password"]):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid credentials")

        access_token = create_access_token(
            data={"sub": str(user["_id"]), "is_admin": bool(user.get("isAdmin", False))}
        )
        return Token(
            token=access_token,
            user=UserSummary(
                id=str(user["_id"]),
                name=user["name"],
                email=user["email"],
                username=user["username"],
            ),
        )
