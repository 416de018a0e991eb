# proshift/shared/database/documents.py
"""
Collection names and helpers for moving documents between pymongo and JSON.

Each collection stores plain documents; the module schemas validate what goes
in, these helpers shape what comes out.
"""
from datetime import datetime
from typing import Any

from bson import ObjectId
from bson.errors import InvalidId
from fastapi import HTTPException, status

USERS = "users"
PARCELS = "parcels"
RIDERS = "riders"
PAYMENTS = "payments"
TRACKINGS = "trackings"


def to_object_id(value: str, label: str = "id") -> ObjectId:
    """Parse a path parameter into an ObjectId or fail with 400"""
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid {label}: {value}"
        )


def serialize_document(value: Any) -> Any:
    """Recursively convert ObjectIds to strings so the document is JSON ready"""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, dict):
        return {key: serialize_document(item) for key, item in value.items()}
    if isinstance(value, list):
        return [serialize_document(item) for item in value]
    return value



def current_time() -> datetime:
    # BSON dates have millisecond precision
    now = datetime.now()
    return now.replace(microsecond=(now.microsecond // 1000) * 1000)
