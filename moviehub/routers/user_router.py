from fastapi import APIRouter, Depends, Request, status

from ..dependencies import CurrentUser, get_current_user, get_db
from ..limiter import limiter
from ..repositories.user_repository import UserRepository
from ..schemas.auth import SignupDetailsUpdate, Token, UserCreate, UserLogin
from ..schemas.user import ProfileCreate, ProfileUpdate, WishlistItem, WishlistUpdate
from ..services.auth_service import AuthService
from ..services.user_service import UserService

router = APIRouter(tags=["Users"])


async def get_auth_service(db=Depends(get_db)) -> AuthService:
    return AuthService(UserRepository(db))


async def get_user_service(db=Depends(get_db)) -> UserService:
    return UserService(UserRepository(db))


@router.post("/api/users/register", status_code=status.HTTP_201_CREATED)
@limiter.limit("5/minute")
async def register(
    user_data: UserCreate,
    request: Request,
    service: AuthService = Depends(get_auth_service),
):
    """Register a new user"""
    user_id = await service.register_user(user_data)
    return {"id": user_id, "username": user_data.username, "message": "User registered successfully"}


@router.post("/api/users/login", response_model=Token)
@limiter.limit("10/minute")
async def login(
    login_data: UserLogin,
    request: Request,
    service: AuthService = Depends(get_auth_service),
):
    """Login with email or username to get a JWT"""
    return await service.authenticate_user(login_data)


@router.put("/api/users/update-signup-details")
async def update_signup_details(
    details: SignupDetailsUpdate,
    current_user: CurrentUser = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    user = await service.update_signup_details(current_user.id, details)
    return {"message": "Signup details updated successfully", "user": user}


@router.get("/api/users/profile")
async def get_profile(
    current_user: CurrentUser = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    return await service.get_profile(current_user.id)


@router.post("/api/users/create-profile", status_code=status.HTTP_201_CREATED)
async def create_profile(
    profile: ProfileCreate,
    current_user: CurrentUser = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    user = await service.set_preferences(current_user.id, profile.preferences)
    return {"message": "Profile created successfully", "user": user}


@router.put("/api/users/profile")
async def update_profile(
    profile: ProfileUpdate,
    current_user: CurrentUser = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    user = await service.update_profile(current_user.id, profile)
    return {"message": "Profile updated successfully", "user": user}


@router.delete("/api/users/profile")
async def delete_profile(
    current_user: CurrentUser = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    await service.delete_profile(current_user.id)
    return {"message": "User profile deleted successfully"}


@router.get("/api/users/wishlist")
async def get_wishlist(
    current_user: CurrentUser = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    return {"wishlist": await service.get_wishlist(current_user.id)}


@router.post("/api/users/wishlist")
async def add_to_wishlist(
    item: WishlistItem,
    current_user: CurrentUser = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    wishlist = await service.add_to_wishlist(current_user.id, item.movieId)
    return {"message": "Movie added to wishlist", "wishlist": wishlist}


@router.post("/api/users/wishlist/remove")
async def remove_from_wishlist(
    item: WishlistItem,
    current_user: CurrentUser = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    wishlist = await service.remove_from_wishlist(current_user.id, item.movieId)
    return {"message": "Movie removed from wishlist", "wishlist": wishlist}


@router.post("/api/users/wishlist/update")
async def update_wishlist(
    update: WishlistUpdate,
    current_user: CurrentUser = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    wishlist = await service.update_wishlist(current_user.id, update.movieId, update.action)
    return {"message": "Wishlist updated", "wishlist": wishlist}
