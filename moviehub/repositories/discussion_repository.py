import uuid
from typing import Any, Dict, List, Optional

from .base_repository import BaseRepository, ID_ASCENDING

AUTHOR_PROJECTION = {"username": 1}


class DiscussionBoardRepository(BaseRepository):
    collection_name = "discussion_boards"

    async def with_participants(self, boards: List[Dict]) -> List[Dict]:
        return await self.populate(boards, "participants", "users", AUTHOR_PROJECTION)


class PostRepository(BaseRepository):
    collection_name = "posts"

    async def get_by_post_id(self, post_id: str) -> Optional[Dict]:
        return await self.collection.find_one({"postId": post_id})

    async def create_post(self, content: str, author_id: Any, board_id: Any) -> Dict:
        return await self.insert({
            "postId": str(uuid.uuid4()),
            "content": content,
            "author": author_id,
            "discussionBoard": board_id,
            "likes": [],
        })

    async def find_for_board(self, board_id: Any) -> List[Dict]:
        posts = await self.find_all({"discussionBoard": board_id}, sort=ID_ASCENDING)
        return await self.with_author(posts)

    async def ids_for_board(self, board_id: Any) -> List[Any]:
        cursor = self.collection.find({"discussionBoard": board_id}, {"_id": 1})
        return [doc["_id"] for doc in await cursor.to_list(length=None)]

    async def delete_for_board(self, board_id: Any) -> int:
        return await self.delete_where({"discussionBoard": board_id})

    async def with_author(self, posts: List[Dict]) -> List[Dict]:
        return await self.populate(posts, "author", "users", AUTHOR_PROJECTION)


class PostCommentRepository(BaseRepository):
    collection_name = "post_comments"

    async def delete_for_posts(self, post_ids: List[Any]) -> int:
        return await self.delete_where({"post": {"$in": list(post_ids)}})

    async def with_author(self, comments: List[Dict]) -> List[Dict]:
        return await self.populate(comments, "author", "users", AUTHOR_PROJECTION)


class PostLikeRepository(BaseRepository):
    collection_name = "post_likes"

    async def get_for_user(self, post_id: Any, user_id: Any) -> Optional[Dict]:
        return await self.collection.find_one({"post": post_id, "user": user_id})

    async def delete_for_user(self, post_id: Any, user_id: Any) -> bool:
        result = await self.collection.delete_one({"post": post_id, "user": user_id})
        return result.deleted_count == 1

    async def count_for_post(self, post_id: Any) -> int:
        return await self.count({"post": post_id})

    async def delete_for_posts(self, post_ids: List[Any]) -> int:
        return await self.delete_where({"post": {"$in": list(post_ids)}})
