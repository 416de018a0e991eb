# proshift/modules/tracking/repository.py
from typing import Any, Dict, Optional
from datetime import datetime

from pymongo.database import Database

from proshift.shared.database.documents import TRACKINGS

class TrackingRepository:
    def __init__(self, db: Database):
        self.collection = db[TRACKINGS]

    def create_tracking(
        self, tracking_id: str, parcel_id: str, user_email: str, entry: Dict[str, Any], now: datetime
    ) -> Dict[str, Any]:
        document = {
            "trackingId": tracking_id,
            "parcelId": parcel_id,
            "userEmail": user_email,
            "currentStatus": entry["status"],
            "history": [entry],
            "created_at": now,
            "updated_at": now
        }
        result = self.collection.insert_one(document)
        document["_id"] = result.inserted_id
        return document

    def get_by_tracking_id(self, tracking_id: str) -> Optional[Dict[str, Any]]:
        return self.collection.find_one({"trackingId": tracking_id})

    def append_entry(self, tracking_id: str, entry: Dict[str, Any]) -> bool:
        """Push to the history and move currentStatus in one document write"""
        result = self.collection.update_one(
            {"trackingId": tracking_id},
            {
                "$push": {"history": entry},
                "$set": {"currentStatus": entry["status"], "updated_at": entry["timestamp"]}
            }
        )
        return result.matched_count > 0

    def delete_by_parcel(self, parcel_id: str) -> int:
        return self.collection.delete_many({"parcelId": parcel_id}).deleted_count
