from fastapi import APIRouter, Depends, status

from ..config import settings
from ..core.pagination import PageWindow
from ..dependencies import CurrentUser, get_db, get_notifier, page_window, require_admin
from ..repositories.trailer_repository import TrailerRepository
from ..schemas.trailer import TrailerCreate, TrailerShare, TrailerUpdate
from ..services.notification_service import Notifier
from ..services.trailer_service import TrailerService

router = APIRouter(tags=["Trailers"])


async def get_trailer_service(
    db=Depends(get_db),
    notifier: Notifier = Depends(get_notifier),
) -> TrailerService:
    return TrailerService(TrailerRepository(db), notifier, settings.PUBLIC_BASE_URL)


@router.post("/api/trailers", status_code=status.HTTP_201_CREATED)
async def create_trailer(
    payload: TrailerCreate,
    admin: CurrentUser = Depends(require_admin),
    service: TrailerService = Depends(get_trailer_service),
):
    return {"message": "Trailer created successfully", "data": await service.create_trailer(payload)}


@router.get("/api/trailers")
async def list_trailers(
    window: PageWindow = Depends(page_window),
    service: TrailerService = Depends(get_trailer_service),
):
    return await service.list_trailers(window)


@router.post("/api/trailers/share")
async def share_trailer(
    payload: TrailerShare,
    service: TrailerService = Depends(get_trailer_service),
):
    return await service.share(payload)


@router.get("/api/trailers/{trailer_id}")
async def get_trailer(
    trailer_id: str,
    service: TrailerService = Depends(get_trailer_service),
):
    return {"trailer": await service.get_trailer(trailer_id)}


@router.put("/api/trailers/{trailer_id}")
async def update_trailer(
    trailer_id: str,
    changes: TrailerUpdate,
    admin: CurrentUser = Depends(require_admin),
    service: TrailerService = Depends(get_trailer_service),
):
    return {"message": "Trailer updated successfully", "data": await service.update_trailer(trailer_id, changes)}


@router.delete("/api/trailers/{trailer_id}")
async def delete_trailer(
    trailer_id: str,
    admin: CurrentUser = Depends(require_admin),
    service: TrailerService = Depends(get_trailer_service),
):
    await service.delete_trailer(trailer_id)
    return {"message": "Trailer deleted successfully"}
