from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument

SortSpec = Sequence[Tuple[str, int]]

ID_ASCENDING: SortSpec = [("_id", 1)]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BaseRepository:
    """Common read/write helpers over one Mongo collection."""

    collection_name: str = ""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db[self.collection_name]

    async def find_page(
        self,
        query: Dict[str, Any],
        limit: int,
        sort: Optional[SortSpec] = None,
        projection: Optional[Dict[str, int]] = None,
    ) -> List[Dict]:
        cursor = self.collection.find(query, projection).sort(list(sort or ID_ASCENDING)).limit(limit)
        return await cursor.to_list(length=limit)

    async def find_all(
        self,
        query: Dict[str, Any],
        sort: Optional[SortSpec] = None,
        projection: Optional[Dict[str, int]] = None,
    ) -> List[Dict]:
        cursor = self.collection.find(query, projection).sort(list(sort or ID_ASCENDING))
        return await cursor.to_list(length=None)

    async def get_by_id(self, doc_id: Any, projection: Optional[Dict[str, int]] = None) -> Optional[Dict]:
        return await self.collection.find_one({"_id": doc_id}, projection)

    async def find_one(self, query: Dict[str, Any], projection: Optional[Dict[str, int]] = None) -> Optional[Dict]:
        return await self.collection.find_one(query, projection)

    async def find_by_ids(self, ids: Iterable[Any], projection: Optional[Dict[str, int]] = None) -> List[Dict]:
        ids = list(ids)
        if not ids:
            return []
        return await self.find_all({"_id": {"$in": ids}}, projection=projection)

    async def count(self, query: Dict[str, Any]) -> int:
        return await self.collection.count_documents(query)

    async def insert(self, document: Dict[str, Any]) -> Dict[str, Any]:
        now = utcnow()
        document.setdefault("createdAt", now)
        document.setdefault("updatedAt", now)
        result = await self.collection.insert_one(document)
        document["_id"] = result.inserted_id
        return document

    async def update_fields(self, doc_id: Any, fields: Dict[str, Any]) -> Optional[Dict]:
        """$set the given fields and return the updated document (None when missing)."""
        return await self.collection.find_one_and_update(
            {"_id": doc_id},
            {"$set": {**fields, "updatedAt": utcnow()}},
            return_document=ReturnDocument.AFTER,
        )

    async def add_to_set(self, doc_id: Any, field: str, value: Any) -> Optional[Dict]:
        return await self.collection.find_one_and_update(
            {"_id": doc_id},
            {"$addToSet": {field: value}, "$set": {"updatedAt": utcnow()}},
            return_document=ReturnDocument.AFTER,
        )

    async def pull(self, doc_id: Any, field: str, value: Any) -> Optional[Dict]:
        return await self.collection.find_one_and_update(
            {"_id": doc_id},
            {"$pull": {field: value}, "$set": {"updatedAt": utcnow()}},
            return_document=ReturnDocument.AFTER,
        )

    async def delete(self, doc_id: Any) -> bool:
        result = await self.collection.delete_one({"_id": doc_id})
        return result.deleted_count == 1

    async def delete_where(self, query: Dict[str, Any]) -> int:
        result = await self.collection.delete_many(query)
        return result.deleted_count

    async def aggregate(self, pipeline: List[Dict[str, Any]], limit: Optional[int] = None) -> List[Dict]:
        return await self.collection.aggregate(pipeline).to_list(length=limit)

    async def populate(
        self,
        documents: List[Dict],
        field: str,
        collection: str,
        projection: Optional[Dict[str, int]] = None,
    ) -> List[Dict]:
        """
        Replace the ObjectId reference(s) stored in ``field`` with the referenced documents.

        Works for single references and arrays of references. Dangling single
        references become None, dangling array entries are dropped.
        """
        ids = set()
        for doc in documents:
            value = doc.get(field)
            if isinstance(value, list):
                ids.update(value)
            elif value is not None:
                ids.add(value)
        if not ids:
            return documents

        cursor = self.db[collection].find({"_id": {"$in": list(ids)}}, projection)
        referenced = {ref["_id"]: ref for ref in await cursor.to_list(length=None)}

        for doc in documents:
            value = doc.get(field)
            if isinstance(value, list):
                doc[field] = [referenced[v] for v in value if v in referenced]
            elif value is not None:
                doc[field] = referenced.get(value)
        return documents
