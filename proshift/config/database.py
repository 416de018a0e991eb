# proshift/config/database.py
import logging
from typing import Optional

from pymongo import ASCENDING, MongoClient
from pymongo.database import Database

from .settings import settings
from proshift.shared.database.documents import USERS, TRACKINGS

logger = logging.getLogger(__name__)

_client: Optional[MongoClient] = None


def get_client() -> MongoClient:
    """Shared MongoClient, created on first use"""
    global _client
    if _client is None:
        _client = MongoClient(
            settings.mongodb_uri,
            serverSelectionTimeoutMS=settings.mongodb_timeout_ms,
        )
    return _client


def close_client():
    global _client
    if _client is not None:
        _client.close()
        _client = None


# Database dependency
def get_db():
    """Database dependency for FastAPI"""
    yield get_client()[settings.mongodb_db_name]


def ensure_indexes(db: Database):
    """Unique keys the handlers rely on"""
    db[USERS].create_index([("email", ASCENDING)], unique=True)
    db[TRACKINGS].create_index([("trackingId", ASCENDING)], unique=True)
    logger.info("✅ Indexes verified")
