from fastapi import APIRouter, Depends, status

from ..core.pagination import PageWindow
from ..dependencies import CurrentUser, get_current_user, get_db, page_window, require_admin
from ..repositories.discussion_repository import (
    DiscussionBoardRepository,
    PostCommentRepository,
    PostLikeRepository,
    PostRepository,
)
from ..schemas.discussion import BoardIn, PostCommentCreate, PostCreate, PostLikeRequest, PostUpdate
from ..services.discussion_service import DiscussionBoardService, PostService

router = APIRouter()


async def get_board_service(db=Depends(get_db)) -> DiscussionBoardService:
    return DiscussionBoardService(
        DiscussionBoardRepository(db),
        PostRepository(db),
        PostCommentRepository(db),
        PostLikeRepository(db),
    )


async def get_post_service(db=Depends(get_db)) -> PostService:
    return PostService(
        PostRepository(db),
        DiscussionBoardRepository(db),
        PostCommentRepository(db),
        PostLikeRepository(db),
    )


# Discussion boards
@router.post("/api/discussion-boards", status_code=status.HTTP_201_CREATED, tags=["Discussion Boards"])
async def create_board(
    payload: BoardIn,
    admin: CurrentUser = Depends(require_admin),
    service: DiscussionBoardService = Depends(get_board_service),
):
    return {"message": "Discussion board created successfully", "data": await service.create_board(payload)}


@router.get("/api/discussion-boards", tags=["Discussion Boards"])
async def list_boards(
    window: PageWindow = Depends(page_window),
    current_user: CurrentUser = Depends(get_current_user),
    service: DiscussionBoardService = Depends(get_board_service),
):
    return await service.list_boards(window)


@router.get("/api/discussion-boards/{board_id}", tags=["Discussion Boards"])
async def get_board(
    board_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    service: DiscussionBoardService = Depends(get_board_service),
):
    return await service.get_board(board_id)


@router.post("/api/discussion-boards/{board_id}/join", tags=["Discussion Boards"])
async def join_board(
    board_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    service: DiscussionBoardService = Depends(get_board_service),
):
    await service.join(board_id, current_user.id)
    return {"message": "Successfully joined the discussion board"}


@router.post("/api/discussion-boards/{board_id}/unfollow", tags=["Discussion Boards"])
async def unfollow_board(
    board_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    service: DiscussionBoardService = Depends(get_board_service),
):
    await service.leave(board_id, current_user.id)
    return {"message": "Successfully unfollowed the discussion board"}


@router.put("/api/discussion-boards/{board_id}", tags=["Discussion Boards"])
async def update_board(
    board_id: str,
    payload: BoardIn,
    admin: CurrentUser = Depends(require_admin),
    service: DiscussionBoardService = Depends(get_board_service),
):
    return {"message": "Discussion board updated successfully", "data": await service.update_board(board_id, payload)}


@router.delete("/api/discussion-boards/{board_id}", tags=["Discussion Boards"])
async def delete_board(
    board_id: str,
    admin: CurrentUser = Depends(require_admin),
    service: DiscussionBoardService = Depends(get_board_service),
):
    await service.delete_board(board_id)
    return {"message": "Discussion board deleted successfully"}


# Posts
@router.post("/api/posts", status_code=status.HTTP_201_CREATED, tags=["Posts"])
async def create_post(
    payload: PostCreate,
    current_user: CurrentUser = Depends(get_current_user),
    service: PostService = Depends(get_post_service),
):
    return {"message": "Post created successfully", "data": await service.create_post(current_user.id, payload)}


@router.post("/api/posts/comment", status_code=status.HTTP_201_CREATED, tags=["Posts"])
async def comment_on_post(
    payload: PostCommentCreate,
    current_user: CurrentUser = Depends(get_current_user),
    service: PostService = Depends(get_post_service),
):
    return {"message": "Comment added successfully", "data": await service.add_comment(current_user.id, payload)}


@router.post("/api/posts/like", status_code=status.HTTP_201_CREATED, tags=["Posts"])
async def like_post(
    payload: PostLikeRequest,
    current_user: CurrentUser = Depends(get_current_user),
    service: PostService = Depends(get_post_service),
):
    return await service.like(current_user.id, payload.postId)


@router.delete("/api/posts/like", tags=["Posts"])
async def unlike_post(
    payload: PostLikeRequest,
    current_user: CurrentUser = Depends(get_current_user),
    service: PostService = Depends(get_post_service),
):
    return await service.unlike(current_user.id, payload.postId)


@router.get("/api/posts/discussion-board/{board_id}", tags=["Posts"])
async def list_board_posts(
    board_id: str,
    window: PageWindow = Depends(page_window),
    current_user: CurrentUser = Depends(get_current_user),
    service: PostService = Depends(get_post_service),
):
    return await service.list_for_board(board_id, window)


@router.get("/api/posts/{post_id}", tags=["Posts"])
async def get_post(
    post_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    service: PostService = Depends(get_post_service),
):
    return await service.get_post(post_id)


@router.get("/api/posts/{post_id}/comments", tags=["Posts"])
async def list_post_comments(
    post_id: str,
    window: PageWindow = Depends(page_window),
    current_user: CurrentUser = Depends(get_current_user),
    service: PostService = Depends(get_post_service),
):
    return await service.list_comments(post_id, window)


@router.put("/api/posts/{post_id}", tags=["Posts"])
async def update_post(
    post_id: str,
    payload: PostUpdate,
    current_user: CurrentUser = Depends(get_current_user),
    service: PostService = Depends(get_post_service),
):
    return {"message": "Post updated successfully", "data": await service.update_post(post_id, current_user.id, payload)}


@router.delete("/api/posts/{post_id}", tags=["Posts"])
async def delete_post(
    post_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    service: PostService = Depends(get_post_service),
):
    await service.delete_post(post_id, current_user.id)
    return {"message": "Post deleted successfully."}
