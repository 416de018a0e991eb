# proshift/modules/parcels/repository.py
from typing import Any, Dict, List, Optional
from datetime import datetime

from bson import ObjectId
from pymongo import DESCENDING
from pymongo.database import Database

from proshift.shared.database.documents import PARCELS

class ParcelsRepository:
    def __init__(self, db: Database):
        self.collection = db[PARCELS]

    def create_parcel(self, parcel_data: Dict[str, Any], tracking_id: str, now: datetime) -> Dict[str, Any]:
        document = {
            **parcel_data,
            "trackingId": tracking_id,
            "delivery_status": "pending",
            "payment_status": "unpaid",
            "cashout_status": "none",
            "creation_date": now
        }
        result = self.collection.insert_one(document)
        document["_id"] = result.inserted_id
        return document

    def get_by_id(self, parcel_id: ObjectId) -> Optional[Dict[str, Any]]:
        return self.collection.find_one({"_id": parcel_id})

    def list_parcels(
        self,
        email: Optional[str] = None,
        delivery_status: Optional[str] = None,
        payment_status: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """Parcels newest first"""
        query: Dict[str, Any] = {}
        if email:
            query["userEmail"] = email
        if delivery_status:
            query["delivery_status"] = delivery_status
        if payment_status:
            query["payment_status"] = payment_status
        return list(self.collection.find(query).sort("creation_date", DESCENDING))

    def delete_parcel(self, parcel_id: ObjectId) -> bool:
        return self.collection.delete_one({"_id": parcel_id}).deleted_count > 0

    def count_by_delivery_status(self) -> List[Dict[str, Any]]:
        pipeline = [
            {"$group": {"_id": "$delivery_status", "count": {"$sum": 1}}},
            {"$project": {"_id": 0, "status": "$_id", "count": 1}},
            {"$sort": {"status": 1}}
        ]
        return list(self.collection.aggregate(pipeline))

    def set_fields(self, parcel_id: ObjectId, fields: Dict[str, Any]) -> bool:
        result = self.collection.update_one({"_id": parcel_id}, {"$set": fields})
        return result.matched_count > 0

    def assign_rider(self, parcel_id: ObjectId, rider: Dict[str, Any], now: datetime) -> bool:
        return self.set_fields(parcel_id, {
            "delivery_status": "rider-assigned",
            "assignedRider": str(rider["_id"]),
            "assignedEmail": rider["email"],
            "assignedName": rider.get("name"),
            "assigned_at": now
        })

    def transition_cashout(self, parcel_id: ObjectId, from_status: List[Optional[str]], to_status: str, fields: Dict[str, Any]) -> bool:
        """Conditional write: only moves forward from one of the expected states"""
        query: Dict[str, Any] = {"_id": parcel_id, "cashout_status": {"$in": from_status}}
        result = self.collection.update_one(query, {"$set": {"cashout_status": to_status, **fields}})
        return result.modified_count > 0
