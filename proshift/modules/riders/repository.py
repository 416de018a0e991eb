# proshift/modules/riders/repository.py
from typing import Any, Dict, List, Optional
from datetime import datetime

from bson import ObjectId
from pymongo import DESCENDING
from pymongo.database import Database

from proshift.shared.database.documents import RIDERS

class RidersRepository:
    def __init__(self, db: Database):
        self.collection = db[RIDERS]

    def create_rider(self, application: Dict[str, Any], now: datetime) -> Dict[str, Any]:
        document = {
            **application,
            "status": "Pending",
            "work_status": "available",
            "current_parcel": None,
            "created_at": now,
            "status_updated_at": now
        }
        result = self.collection.insert_one(document)
        document["_id"] = result.inserted_id
        return document

    def get_by_id(self, rider_id: ObjectId) -> Optional[Dict[str, Any]]:
        return self.collection.find_one({"_id": rider_id})

    def get_open_application(self, email: str) -> Optional[Dict[str, Any]]:
        return self.collection.find_one({"email": email, "status": {"$in": ["Pending", "Active"]}})

    def list_by_status(self, status: str, district: Optional[str] = None) -> List[Dict[str, Any]]:
        query: Dict[str, Any] = {"status": status}
        if district:
            query["district"] = district
        return list(self.collection.find(query).sort("created_at", DESCENDING))

    def list_available(self, district: Optional[str] = None) -> List[Dict[str, Any]]:
        query: Dict[str, Any] = {"status": "Active", "work_status": "available"}
        if district:
            query["district"] = district
        return list(self.collection.find(query).sort("created_at", DESCENDING))

    def set_status(self, rider_id: ObjectId, status: str, now: datetime, work_status: Optional[str] = None) -> bool:
        fields: Dict[str, Any] = {"status": status, "status_updated_at": now}
        if work_status is not None:
            fields["work_status"] = work_status
        result = self.collection.update_one({"_id": rider_id}, {"$set": fields})
        return result.matched_count > 0

    def set_work_status(self, rider_id: ObjectId, work_status: str, current_parcel: Optional[str] = None) -> bool:
        result = self.collection.update_one(
            {"_id": rider_id},
            {"$set": {"work_status": work_status, "current_parcel": current_parcel}}
        )
        return result.matched_count > 0

    def set_work_status_by_email(self, email: str, work_status: str, current_parcel: Optional[str] = None) -> bool:
        result = self.collection.update_one(
            {"email": email, "status": "Active"},
            {"$set": {"work_status": work_status, "current_parcel": current_parcel}}
        )
        return result.matched_count > 0

    def delete_rider(self, rider_id: ObjectId) -> bool:
        return self.collection.delete_one({"_id": rider_id}).deleted_count > 0
