from datetime import datetime, date
from typing import Any, Optional

from bson import ObjectId
from fastapi import HTTPException, status


def serialize_document(value: Any) -> Any:
    """
    Make a Mongo document JSON friendly.

    ``_id`` becomes ``id`` at every level and ObjectIds become hex strings.
    """
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, dict):
        return {("id" if k == "_id" else k): serialize_document(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [serialize_document(v) for v in value]
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


def serialize_many(documents) -> list:
    return [serialize_document(d) for d in documents]


def parse_object_id(value: Optional[str], field_name: str = "id") -> ObjectId:
    """Validate a client supplied identifier, 400 when it is not a 24-hex ObjectId."""
    if isinstance(value, ObjectId):
        return value
    if not value or not ObjectId.is_valid(value):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid {field_name}."
        )
    return ObjectId(value)


def contains_id(ids, value) -> bool:
    target = str(value)
    return any(str(i) == target for i in ids or [])
