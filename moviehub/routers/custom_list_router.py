from fastapi import APIRouter, Depends, status

from ..config import settings
from ..core.pagination import PageWindow
from ..dependencies import CurrentUser, get_current_user, get_db, get_notifier, page_window
from ..repositories.custom_list_repository import CustomListRepository
from ..repositories.movie_repository import MovieRepository
from ..schemas.common import ShareTargets
from ..schemas.custom_list import CustomListCreate, CustomListUpdate, ListFollow, ListMovieChange
from ..services.custom_list_service import CustomListService
from ..services.notification_service import Notifier

router = APIRouter(tags=["Custom Lists"])


async def get_custom_list_service(
    db=Depends(get_db),
    notifier: Notifier = Depends(get_notifier),
) -> CustomListService:
    return CustomListService(CustomListRepository(db), MovieRepository(db), notifier, settings.PUBLIC_BASE_URL)


@router.post("/api/custom-lists", status_code=status.HTTP_201_CREATED)
async def create_custom_list(
    payload: CustomListCreate,
    current_user: CurrentUser = Depends(get_current_user),
    service: CustomListService = Depends(get_custom_list_service),
):
    data = await service.create_list(current_user.id, payload)
    return {"message": "Custom list created successfully", "data": data}


@router.get("/api/custom-lists")
async def list_custom_lists(
    window: PageWindow = Depends(page_window),
    current_user: CurrentUser = Depends(get_current_user),
    service: CustomListService = Depends(get_custom_list_service),
):
    return await service.list_lists(window)


@router.put("/api/custom-lists/follow")
async def follow_custom_list(
    payload: ListFollow,
    current_user: CurrentUser = Depends(get_current_user),
    service: CustomListService = Depends(get_custom_list_service),
):
    return {"message": "Followed custom list", "data": await service.follow(current_user.id, payload.listId)}


@router.put("/api/custom-lists/unfollow")
async def unfollow_custom_list(
    payload: ListFollow,
    current_user: CurrentUser = Depends(get_current_user),
    service: CustomListService = Depends(get_custom_list_service),
):
    return {"message": "Unfollowed custom list", "data": await service.unfollow(current_user.id, payload.listId)}


@router.put("/api/custom-lists/add-movie")
async def add_movie_to_list(
    change: ListMovieChange,
    current_user: CurrentUser = Depends(get_current_user),
    service: CustomListService = Depends(get_custom_list_service),
):
    return {"message": "Movie added to list", "data": await service.add_movie(current_user.id, change)}


@router.put("/api/custom-lists/remove-movie")
async def remove_movie_from_list(
    change: ListMovieChange,
    current_user: CurrentUser = Depends(get_current_user),
    service: CustomListService = Depends(get_custom_list_service),
):
    return {"message": "Movie removed from list", "data": await service.remove_movie(current_user.id, change)}


@router.put("/api/custom-lists/{list_id}")
async def update_custom_list(
    list_id: str,
    changes: CustomListUpdate,
    current_user: CurrentUser = Depends(get_current_user),
    service: CustomListService = Depends(get_custom_list_service),
):
    return {"message": "Custom list updated", "data": await service.update_list(list_id, current_user.id, changes)}


@router.delete("/api/custom-lists/{list_id}")
async def delete_custom_list(
    list_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    service: CustomListService = Depends(get_custom_list_service),
):
    await service.delete_list(list_id, current_user.id)
    return {"message": "Custom list deleted"}


@router.post("/api/custom-lists/share/{list_id}")
async def share_custom_list(
    list_id: str,
    targets: ShareTargets,
    current_user: CurrentUser = Depends(get_current_user),
    service: CustomListService = Depends(get_custom_list_service),
):
    return await service.share(list_id, targets)


@router.get("/api/custom-lists/{list_id}")
async def get_custom_list(
    list_id: str,
    service: CustomListService = Depends(get_custom_list_service),
):
    """Public view used by shareable links"""
    return await service.get_list(list_id)
