import logging
from typing import Any, Dict

from fastapi import HTTPException, status
from pymongo.errors import DuplicateKeyError

from ..core.documents import contains_id, parse_object_id, serialize_document, serialize_many
from ..core.pagination import PageWindow, merge_filters, next_cursor
from ..repositories.discussion_repository import (
    DiscussionBoardRepository,
    PostCommentRepository,
    PostLikeRepository,
    PostRepository,
)
from ..schemas.discussion import BoardIn, PostCommentCreate, PostCreate, PostUpdate

logger = logging.getLogger(__name__)


class DiscussionBoardService:
    def __init__(
        self,
        board_repo: DiscussionBoardRepository,
        post_repo: PostRepository,
        comment_repo: PostCommentRepository,
        like_repo: PostLikeRepository,
    ):
        self.board_repo = board_repo
        self.post_repo = post_repo
        self.comment_repo = comment_repo
        self.like_repo = like_repo

    async def _require(self, board_id: str) -> Dict[str, Any]:
        board = await self.board_repo.get_by_id(parse_object_id(board_id, "discussion board id"))
        if not board:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Discussion board not found")
        return board

    async def create_board(self, payload: BoardIn) -> Dict[str, Any]:
        board = await self.board_repo.insert({**payload.model_dump(), "participants": []})
        logger.info("Discussion board created", extra={"detail": board["title"]})
        return serialize_document(board)

    async def list_boards(self, window: PageWindow) -> Dict[str, Any]:
        boards = await self.board_repo.find_page(window.query, window.limit)
        cursor = next_cursor(boards, window.limit)
        await self.board_repo.with_participants(boards)
        return {"boards": serialize_many(boards), "nextCursor": cursor}

    async def get_board(self, board_id: str) -> Dict[str, Any]:
        board = await self._require(board_id)
        await self.board_repo.with_participants([board])
        board["posts"] = await self.post_repo.find_for_board(board["_id"])
        return serialize_document(board)

    async def update_board(self, board_id: str, payload: BoardIn) -> Dict[str, Any]:
        updated = await self.board_repo.update_fields(
            parse_object_id(board_id, "discussion board id"), payload.model_dump()
        )
        if not updated:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Discussion board not found")
        return serialize_document(updated)

    async def delete_board(self, board_id: str) -> None:
        board = await self._require(board_id)
        post_ids = await self.post_repo.ids_for_board(board["_id"])
        if post_ids:
            await self.comment_repo.delete_for_posts(post_ids)
            await self.like_repo.delete_for_posts(post_ids)
        removed = await self.post_repo.delete_for_board(board["_id"])
        await self.board_repo.delete(board["_id"])
        logger.info("Discussion board deleted", extra={"detail": {"board": board_id, "posts": removed}})

    async def join(self, board_id: str, user_id: str) -> None:
        board = await self._require(board_id)
        user_oid = parse_object_id(user_id, "user id")
        if contains_id(board.get("participants"), user_oid):
            raise HTTPException(status_code=400, detail="User already joined this board")
        await self.board_repo.add_to_set(board["_id"], "participants", user_oid)

    async def leave(self, board_id: str, user_id: str) -> None:
        board = await self._require(board_id)
        user_oid = parse_object_id(user_id, "user id")
        if not contains_id(board.get("participants"), user_oid):
            raise HTTPException(status_code=400, detail="User is not a participant of this board")
        await self.board_repo.pull(board["_id"], "participants", user_oid)


class PostService:
    def __init__(
        self,
        post_repo: PostRepository,
        board_repo: DiscussionBoardRepository,
        comment_repo: PostCommentRepository,
        like_repo: PostLikeRepository,
    ):
        self.post_repo = post_repo
        self.board_repo = board_repo
        self.comment_repo = comment_repo
        self.like_repo = like_repo

    async def _require(self, post_id: str) -> Dict[str, Any]:
        post = await self.post_repo.get_by_post_id(post_id)
        if not post:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found.")
        return post

    async def _require_own(self, post_id: str, user_id: str, action: str) -> Dict[str, Any]:
        post = await self._require(post_id)
        if str(post["author"]) != str(user_id):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"You can only {action} your own posts.",
            )
        return post

    async def create_post(self, user_id: str, payload: PostCreate) -> Dict[str, Any]:
        board = await self.board_repo.get_by_id(parse_object_id(payload.discussionBoardId, "discussionBoardId"))
        if not board:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Discussion board not found.")

        user_oid = parse_object_id(user_id, "user id")
        if not contains_id(board.get("participants"), user_oid):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You must be following the discussion board to create a post.",
            )

        post = await self.post_repo.create_post(payload.content, user_oid, board["_id"])
        logger.info("Post created", extra={"user_id": user_id, "detail": post["postId"]})
        return serialize_document(post)

    async def update_post(self, post_id: str, user_id: str, payload: PostUpdate) -> Dict[str, Any]:
        post = await self._require_own(post_id, user_id, "update")
        updated = await self.post_repo.update_fields(post["_id"], {"content": payload.content})
        return serialize_document(updated)

    async def delete_post(self, post_id: str, user_id: str) -> None:
        post = await self._require_own(post_id, user_id, "delete")
        await self.comment_repo.delete_for_posts([post["_id"]])
        await self.like_repo.delete_for_posts([post["_id"]])
        await self.post_repo.delete(post["_id"])
        logger.info("Post deleted", extra={"user_id": user_id, "detail": post_id})

    async def list_for_board(self, board_id: str, window: PageWindow) -> Dict[str, Any]:
        board_filter = {"discussionBoard": parse_object_id(board_id, "discussionBoardId")}
        posts = await self.post_repo.find_page(merge_filters(window.query, board_filter), window.limit)
        cursor = next_cursor(posts, window.limit)
        await self.post_repo.with_author(posts)
        return {"posts": serialize_many(posts), "nextCursor": cursor}

    async def get_post(self, post_id: str) -> Dict[str, Any]:
        post = await self._require(post_id)
        await self.post_repo.with_author([post])
        return serialize_document(post)

    async def add_comment(self, user_id: str, payload: PostCommentCreate) -> Dict[str, Any]:
        post = await self._require(payload.postId)
        comment = await self.comment_repo.insert({
            "content": payload.content,
            "author": parse_object_id(user_id, "user id"),
            "post": post["_id"],
        })
        return serialize_document(comment)

    async def list_comments(self, post_id: str, window: PageWindow) -> Dict[str, Any]:
        post = await self._require(post_id)
        comments = await self.comment_repo.find_page(merge_filters(window.query, {"post": post["_id"]}), window.limit)
        cursor = next_cursor(comments, window.limit)
        await self.comment_repo.with_author(comments)
        return {"comments": serialize_many(comments), "nextCursor": cursor}

    async def like(self, user_id: str, post_id: str) -> Dict[str, Any]:
        post = await self._require(post_id)
        user_oid = parse_object_id(user_id, "user id")
        if await self.like_repo.get_for_user(post["_id"], user_oid):
            raise HTTPException(status_code=400, detail="You already liked this post.")

        try:
            await self.like_repo.insert({"post": post["_id"], "user": user_oid})
        except DuplicateKeyError:
            raise HTTPException(status_code=400, detail="You already liked this post.")
        await self.post_repo.add_to_set(post["_id"], "likes", user_oid)
        return {"message": "Post liked successfully", "likeCount": await self.like_repo.count_for_post(post["_id"])}

    async def unlike(self, user_id: str, post_id: str) -> Dict[str, Any]:
        post = await self._require(post_id)
        user_oid = parse_object_id(user_id, "user id")
        if not await self.like_repo.delete_for_user(post["_id"], user_oid):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Like not found.")

        await self.post_repo.pull(post["_id"], "likes", user_oid)
        return {"message": "Post unliked successfully.", "likeCount": await self.like_repo.count_for_post(post["_id"])}
