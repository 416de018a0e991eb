# proshift/modules/deliveries/service.py
import logging
from typing import Any, Dict, Optional
from datetime import date, datetime

from bson import ObjectId
from bson.errors import InvalidId
from fastapi import HTTPException
from pymongo.database import Database

from proshift.core.auth.dependencies import AuthorizationError
from proshift.core.auth.schemas import VerifiedIdentity
from proshift.modules.parcels.repository import ParcelsRepository
from proshift.modules.riders.repository import RidersRepository
from proshift.modules.tracking.service import TrackingService
from proshift.shared.database.documents import current_time, serialize_document, to_object_id
from .earnings import bucket_by_day, calculate_earning, report_window, summarize_earnings
from .repository import DeliveriesRepository

logger = logging.getLogger(__name__)

class DeliveriesService:
    def __init__(self, db: Database):
        self.db = db
        self.repository = DeliveriesRepository(db)
        self.parcels = ParcelsRepository(db)
        self.riders = RidersRepository(db)
        self.tracking = TrackingService(db)

    def _get_rider_parcel(self, parcel_id: str, identity: VerifiedIdentity) -> Dict[str, Any]:
        """Parcel assigned to the calling rider"""
        parcel = self.parcels.get_by_id(to_object_id(parcel_id, "parcel id"))
        if parcel is None:
            raise HTTPException(status_code=404, detail="Parcel not found")
        if parcel.get("assignedEmail") != identity.email:
            raise AuthorizationError("Parcel is not assigned to you")
        return parcel

    def _set_rider_work_status(self, parcel: Dict[str, Any], work_status: str, current_parcel: Optional[str]):
        """Update the rider document referenced by the parcel"""
        rider_id = parcel.get("assignedRider")
        try:
            updated = rider_id is not None and self.riders.set_work_status(
                ObjectId(rider_id), work_status, current_parcel
            )
        except InvalidId:
            updated = False
        if not updated:
            updated = self.riders.set_work_status_by_email(parcel["assignedEmail"], work_status, current_parcel)
        if not updated:
            logger.warning(f"⚠️ No rider document found for parcel {parcel['_id']}")

    async def get_assigned_parcels(self, identity: VerifiedIdentity) -> Dict[str, Any]:
        parcels = self.repository.get_assigned_parcels(identity.email)
        return {
            "success": True,
            "message": "Parcels assigned to you",
            "parcels": [serialize_document(p) for p in parcels],
            "count": len(parcels)
        }

    async def confirm_pickup(self, parcel_id: str, identity: VerifiedIdentity) -> Dict[str, Any]:
        """Parcel and rider both go in-transit"""
        parcel = self._get_rider_parcel(parcel_id, identity)

        self.parcels.set_fields(parcel["_id"], {"delivery_status": "in-transit", "picked_at": current_time()})
        self._set_rider_work_status(parcel, "in-transit", parcel_id)
        self.tracking.record_progress(parcel.get("trackingId"), "in-transit", "Picked up by rider")

        logger.info(f"🚚 Parcel {parcel_id} picked up by {identity.email}")
        return {
            "success": True,
            "message": "Pick-up confirmed - parcel in transit",
            "parcel_id": parcel_id,
            "delivery_status": "in-transit",
            "rider_work_status": "in-transit"
        }

    async def confirm_delivery(self, parcel_id: str, identity: VerifiedIdentity) -> Dict[str, Any]:
        """Parcel delivered, rider available for the next assignment"""
        parcel = self._get_rider_parcel(parcel_id, identity)

        self.parcels.set_fields(parcel["_id"], {"delivery_status": "delivered", "delivered_at": current_time()})
        self._set_rider_work_status(parcel, "available", None)
        self.tracking.record_progress(parcel.get("trackingId"), "delivered", "Delivered to receiver")

        logger.info(f"✅ Parcel {parcel_id} delivered by {identity.email}")
        return {
            "success": True,
            "message": "Delivery confirmed",
            "parcel_id": parcel_id,
            "delivery_status": "delivered",
            "rider_work_status": "available"
        }

    async def get_completed_deliveries(self, identity: VerifiedIdentity) -> Dict[str, Any]:
        parcels = []
        for parcel in self.repository.get_completed_parcels(identity.email):
            item = serialize_document(parcel)
            item["earning"] = calculate_earning(parcel)
            parcels.append(item)

        return {
            "success": True,
            "message": "Completed deliveries",
            "parcels": parcels,
            "count": len(parcels),
            "total_earning": sum(p["earning"] for p in parcels)
        }

    async def request_cashout(self, parcel_id: str, identity: VerifiedIdentity) -> Dict[str, Any]:
        """
        Ask for the earning of one delivered parcel.

        A parcel already pending or cashed out is rejected; the write itself
        is conditional on the parcel still being at `none`.
        """
        parcel = self._get_rider_parcel(parcel_id, identity)

        current = parcel.get("cashout_status") or "none"
        if current in ("pending", "cashed_out"):
            raise HTTPException(status_code=400, detail=f"Cashout already {current}")
        if parcel.get("delivery_status") != "delivered":
            raise HTTPException(status_code=400, detail="Only delivered parcels can be cashed out")

        moved = self.parcels.transition_cashout(
            parcel["_id"], ["none", None], "pending", {"cashout_requested_at": current_time()}
        )
        if not moved:
            raise HTTPException(status_code=400, detail="Cashout already requested")

        earning = calculate_earning(parcel)
        logger.info(f"💸 Cashout requested for parcel {parcel_id} by {identity.email}: {earning}")
        return {
            "success": True,
            "message": "Cashout requested",
            "parcel_id": parcel_id,
            "cashout_status": "pending",
            "earning": earning
        }

    async def get_earnings(self, identity: VerifiedIdentity, today: Optional[date] = None) -> Dict[str, Any]:
        today = today or date.today()
        rows = self.repository.get_earning_rows(identity.email)
        return {
            "success": True,
            "message": f"Earnings as of {today.isoformat()}",
            "rider_email": identity.email,
            "earnings": summarize_earnings(rows, today)
        }

    async def get_weekly_deliveries(self, identity: VerifiedIdentity, today: Optional[date] = None) -> Dict[str, Any]:
        """Deliveries per day over the trailing week, oldest day first"""
        today = today or date.today()
        window = report_window(today)
        start = datetime.combine(window[0], datetime.min.time())

        times = self.repository.get_delivery_times_since(identity.email, start)
        days = bucket_by_day(times, window)
        return {
            "success": True,
            "message": "Deliveries in the last 7 days",
            "rider_email": identity.email,
            "start_date": window[0].isoformat(),
            "end_date": window[-1].isoformat(),
            "days": days,
            "total": sum(d["count"] for d in days)
        }
