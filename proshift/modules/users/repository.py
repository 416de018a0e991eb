# proshift/modules/users/repository.py
import re
from typing import Any, Dict, List, Optional
from datetime import datetime

from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.database import Database

from proshift.shared.database.documents import USERS

class UsersRepository:
    def __init__(self, db: Database):
        self.collection = db[USERS]

    def get_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        return self.collection.find_one({"email": email})

    def create_user(self, user_data: Dict[str, Any], role: str, now: datetime) -> Dict[str, Any]:
        """Insert a new user document"""
        document = {
            "email": user_data["email"],
            "name": user_data.get("name"),
            "photo": user_data.get("photo"),
            "role": role,
            "created_at": now,
            "last_login": now
        }
        result = self.collection.insert_one(document)
        document["_id"] = result.inserted_id
        return document

    def touch_last_login(self, email: str, now: datetime) -> Optional[Dict[str, Any]]:
        return self.collection.find_one_and_update(
            {"email": email},
            {"$set": {"last_login": now}},
            return_document=ReturnDocument.AFTER
        )

    def search_by_email(self, term: str, limit: int = 10) -> List[Dict[str, Any]]:
        """Case-insensitive partial match on email"""
        pattern = re.escape(term)
        cursor = self.collection.find(
            {"email": {"$regex": pattern, "$options": "i"}},
            {"email": 1, "name": 1, "role": 1, "created_at": 1, "last_login": 1}
        ).limit(limit)
        return list(cursor)

    def set_role(self, user_id: ObjectId, role: str) -> bool:
        result = self.collection.update_one({"_id": user_id}, {"$set": {"role": role}})
        return result.matched_count > 0

    def set_role_by_email(self, email: str, role: str) -> bool:
        result = self.collection.update_one({"email": email}, {"$set": {"role": role}})
        return result.matched_count > 0
