# proshift/modules/deliveries/repository.py
import logging
from typing import Any, Dict, List
from datetime import datetime

from pymongo import DESCENDING
from pymongo.database import Database

from proshift.shared.database.documents import PARCELS
from .earnings import OTHER_CENTER_RATE, SAME_CENTER_RATE

logger = logging.getLogger(__name__)

ACTIVE_DELIVERY_STATUSES = ["rider-assigned", "in-transit"]

class DeliveriesRepository:
    def __init__(self, db: Database):
        self.collection = db[PARCELS]

    def get_assigned_parcels(self, rider_email: str) -> List[Dict[str, Any]]:
        return list(
            self.collection.find({
                "assignedEmail": rider_email,
                "delivery_status": {"$in": ACTIVE_DELIVERY_STATUSES}
            }).sort("assigned_at", DESCENDING)
        )

    def get_completed_parcels(self, rider_email: str) -> List[Dict[str, Any]]:
        return list(
            self.collection.find({
                "assignedEmail": rider_email,
                "delivery_status": "delivered"
            }).sort("delivered_at", DESCENDING)
        )

    def get_earning_rows(self, rider_email: str) -> List[Dict[str, Any]]:
        """
        Aggregation pipeline: one row per delivered parcel with the raw
        earning, its delivery time and its cashout state.
        """
        pipeline = [
            {"$match": {"assignedEmail": rider_email, "delivery_status": "delivered"}},
            {"$project": {
                "_id": 1,
                "delivered_at": 1,
                "cashout_status": 1,
                "earning": {
                    "$multiply": [
                        "$totalCost",
                        {"$cond": {
                            "if": {"$eq": ["$sender_center", "$receiver_center"]},
                            "then": SAME_CENTER_RATE,
                            "else": OTHER_CENTER_RATE
                        }}
                    ]
                }
            }}
        ]
        rows = list(self.collection.aggregate(pipeline))
        logger.info(f"📊 Earnings pipeline for {rider_email}: {len(rows)} deliveries")
        return rows

    def get_delivery_times_since(self, rider_email: str, start: datetime) -> List[datetime]:
        cursor = self.collection.find(
            {
                "assignedEmail": rider_email,
                "delivery_status": "delivered",
                "delivered_at": {"$gte": start}
            },
            {"delivered_at": 1}
        )
        return [doc["delivered_at"] for doc in cursor if doc.get("delivered_at")]
