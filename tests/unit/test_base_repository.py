import pytest
from bson import ObjectId

from moviehub.repositories.base_repository import BaseRepository


class NoteRepository(BaseRepository):
    collection_name = "notes"


@pytest.fixture
def repo(fake_db):
    return NoteRepository(fake_db)


@pytest.mark.asyncio
async def test_insert_stamps_timestamps(repo):
    note = await repo.insert({"text": "hi"})

    assert note["createdAt"] == note["updatedAt"]
    assert await repo.get_by_id(note["_id"]) is not None


@pytest.mark.asyncio
async def test_populate_single_reference(fake_db, repo):
    author = await NoteRepository(fake_db).insert({"name": "Ann"})
    docs = [{"author": author["_id"]}, {"author": ObjectId()}, {"author": None}]

    await repo.populate(docs, "author", "notes", {"name": 1})

    assert docs[0]["author"] == {"_id": author["_id"], "name": "Ann"}
    assert docs[1]["author"] is None
    assert docs[2]["author"] is None


@pytest.mark.asyncio
async def test_populate_list_drops_dangling_entries(repo):
    kept = await repo.insert({"name": "kept"})
    docs = [{"refs": [ObjectId(), kept["_id"]]}]

    await repo.populate(docs, "refs", "notes", {"name": 1})

    assert docs[0]["refs"] == [{"_id": kept["_id"], "name": "kept"}]


@pytest.mark.asyncio
async def test_update_missing_document_returns_none(repo):
    assert await repo.update_fields(ObjectId(), {"text": "x"}) is None
    assert await repo.delete(ObjectId()) is False
