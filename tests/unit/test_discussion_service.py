import pytest
import pytest_asyncio
from bson import ObjectId
from fastapi import HTTPException

from moviehub.core.pagination import get_cursor_pagination_params
from moviehub.repositories.discussion_repository import (
    DiscussionBoardRepository,
    PostCommentRepository,
    PostLikeRepository,
    PostRepository,
)
from moviehub.repositories.user_repository import UserRepository
from moviehub.schemas.discussion import BoardIn, PostCommentCreate, PostCreate, PostUpdate
from moviehub.services.discussion_service import DiscussionBoardService, PostService


@pytest.fixture
def board_service(fake_db):
    return DiscussionBoardService(
        DiscussionBoardRepository(fake_db),
        PostRepository(fake_db),
        PostCommentRepository(fake_db),
        PostLikeRepository(fake_db),
    )


@pytest.fixture
def post_service(fake_db):
    return PostService(
        PostRepository(fake_db),
        DiscussionBoardRepository(fake_db),
        PostCommentRepository(fake_db),
        PostLikeRepository(fake_db),
    )


@pytest_asyncio.fixture
async def member(fake_db):
    user = await UserRepository(fake_db).create_user("Member", "member@example.com", "member", "hash")
    return str(user["_id"])


@pytest_asyncio.fixture
async def board_id(board_service, member):
    board = await board_service.create_board(BoardIn(title="Heat", description="Michael Mann's classic"))
    await board_service.join(board["id"], member)
    return board["id"]


@pytest.mark.asyncio
async def test_join_and_leave_board(board_service, member):
    board = await board_service.create_board(BoardIn(title="Alien", description="In space", tags=["sci-fi"]))
    assert board["participants"] == []

    await board_service.join(board["id"], member)
    with pytest.raises(HTTPException) as exc:
        await board_service.join(board["id"], member)
    assert exc.value.detail == "User already joined this board"

    fetched = await board_service.get_board(board["id"])
    assert fetched["participants"] == [{"id": member, "username": "member"}]

    await board_service.leave(board["id"], member)
    with pytest.raises(HTTPException) as exc:
        await board_service.leave(board["id"], member)
    assert exc.value.status_code == 400


@pytest.mark.asyncio
async def test_unknown_board(board_service):
    with pytest.raises(HTTPException) as exc:
        await board_service.get_board(str(ObjectId()))
    assert exc.value.status_code == 404

    with pytest.raises(HTTPException) as exc:
        await board_service.update_board(str(ObjectId()), BoardIn(title="x", description="y"))
    assert exc.value.status_code == 404


@pytest.mark.asyncio
async def test_only_participants_can_post(post_service, board_id):
    outsider = str(ObjectId())

    with pytest.raises(HTTPException) as exc:
        await post_service.create_post(outsider, PostCreate(content="Hi", discussionBoardId=board_id))
    assert exc.value.status_code == 403


@pytest.mark.asyncio
async def test_post_is_addressed_by_post_id(post_service, board_id, member):
    post = await post_service.create_post(member, PostCreate(content="Best heist", discussionBoardId=board_id))

    fetched = await post_service.get_post(post["postId"])

    assert fetched["content"] == "Best heist"
    assert fetched["author"] == {"id": member, "username": "member"}


@pytest.mark.asyncio
async def test_only_the_author_edits_or_deletes(post_service, board_id, member):
    post = await post_service.create_post(member, PostCreate(content="Draft", discussionBoardId=board_id))
    stranger = str(ObjectId())

    with pytest.raises(HTTPException) as exc:
        await post_service.update_post(post["postId"], stranger, PostUpdate(content="Mine now"))
    assert exc.value.detail == "You can only update your own posts."

    with pytest.raises(HTTPException) as exc:
        await post_service.delete_post(post["postId"], stranger)
    assert exc.value.detail == "You can only delete your own posts."

    updated = await post_service.update_post(post["postId"], member, PostUpdate(content="Final"))
    assert updated["content"] == "Final"


@pytest.mark.asyncio
async def test_like_and_unlike(post_service, board_id, member):
    post = await post_service.create_post(member, PostCreate(content="Like me", discussionBoardId=board_id))

    assert (await post_service.like(member, post["postId"]))["likeCount"] == 1
    with pytest.raises(HTTPException) as exc:
        await post_service.like(member, post["postId"])
    assert exc.value.status_code == 400

    assert (await post_service.unlike(member, post["postId"]))["likeCount"] == 0
    with pytest.raises(HTTPException) as exc:
        await post_service.unlike(member, post["postId"])
    assert exc.value.status_code == 404


@pytest.mark.asyncio
async def test_board_posts_are_paged(post_service, board_id, member):
    posts = [
        await post_service.create_post(member, PostCreate(content=f"Post {i}", discussionBoardId=board_id))
        for i in range(3)
    ]

    first = await post_service.list_for_board(board_id, get_cursor_pagination_params("2", None))
    second = await post_service.list_for_board(board_id, get_cursor_pagination_params("2", first["nextCursor"]))

    assert [p["postId"] for p in first["posts"] + second["posts"]] == [p["postId"] for p in posts]
    assert second["nextCursor"] is None


@pytest.mark.asyncio
async def test_comments_on_a_post(post_service, board_id, member):
    post = await post_service.create_post(member, PostCreate(content="Thoughts?", discussionBoardId=board_id))
    await post_service.add_comment(member, PostCommentCreate(postId=post["postId"], content="Loved it"))

    result = await post_service.list_comments(post["postId"], get_cursor_pagination_params(None, None))

    assert [c["content"] for c in result["comments"]] == ["Loved it"]
    assert result["comments"][0]["author"]["username"] == "member"


@pytest.mark.asyncio
async def test_deleting_a_board_removes_its_posts(fake_db, board_service, post_service, board_id, member):
    post = await post_service.create_post(member, PostCreate(content="Bye", discussionBoardId=board_id))
    await post_service.add_comment(member, PostCommentCreate(postId=post["postId"], content="Farewell"))
    await post_service.like(member, post["postId"])

    await board_service.delete_board(board_id)

    assert await PostRepository(fake_db).get_by_post_id(post["postId"]) is None
    with pytest.raises(HTTPException):
        await board_service.get_board(board_id)
    assert fake_db["post_comments"].docs == []
    assert fake_db["post_likes"].docs == []


@pytest.mark.asyncio
async def test_deleting_a_post_removes_its_comments_and_likes(fake_db, post_service, board_id, member):
    doomed = await post_service.create_post(member, PostCreate(content="Going away", discussionBoardId=board_id))
    kept = await post_service.create_post(member, PostCreate(content="Staying", discussionBoardId=board_id))
    for post in (doomed, kept):
        await post_service.add_comment(member, PostCommentCreate(postId=post["postId"], content="Noted"))
        await post_service.like(member, post["postId"])

    await post_service.delete_post(doomed["postId"], member)

    assert [c["post"] for c in fake_db["post_comments"].docs] == [ObjectId(kept["id"])]
    assert [like["post"] for like in fake_db["post_likes"].docs] == [ObjectId(kept["id"])]
    with pytest.raises(HTTPException) as exc:
        await post_service.get_post(doomed["postId"])
    assert exc.value.status_code == 404
