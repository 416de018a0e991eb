# proshift/modules/parcels/service.py
import logging
from typing import Any, Dict, Optional

from bson import ObjectId
from bson.errors import InvalidId
from fastapi import HTTPException
from pymongo.database import Database

from proshift.core.auth.dependencies import AuthorizationError, ensure_owner, is_admin
from proshift.core.auth.schemas import VerifiedIdentity
from proshift.modules.riders.repository import RidersRepository
from proshift.modules.tracking.service import TrackingService, generate_tracking_id
from proshift.shared.database.documents import current_time, serialize_document, to_object_id
from .repository import ParcelsRepository
from .schemas import ParcelCreateRequest, AssignRiderRequest

logger = logging.getLogger(__name__)

# A parcel can change hands only before pick-up
ASSIGNABLE_STATUSES = ("pending", "rider-assigned")

class ParcelsService:
    def __init__(self, db: Database):
        self.db = db
        self.repository = ParcelsRepository(db)
        self.riders = RidersRepository(db)
        self.tracking = TrackingService(db)

    def _get_parcel_or_404(self, parcel_id: str) -> Dict[str, Any]:
        parcel = self.repository.get_by_id(to_object_id(parcel_id, "parcel id"))
        if parcel is None:
            raise HTTPException(status_code=404, detail="Parcel not found")
        return parcel

    def _ensure_owner_or_admin(self, identity: VerifiedIdentity, email: Optional[str]):
        if is_admin(self.db, identity):
            return
        ensure_owner(identity, email)

    def _release_rider(self, rider_id: str, parcel_id: str):
        try:
            rider_object_id = ObjectId(rider_id)
        except InvalidId:
            logger.warning(f"⚠️ Parcel {parcel_id} referenced an invalid rider id {rider_id}")
            return
        rider = self.riders.get_by_id(rider_object_id)
        if rider is None or rider.get("current_parcel") != parcel_id:
            return
        self.riders.set_work_status(rider_object_id, "available", None)
        logger.info(f"🔄 Rider {rider_id} released from parcel {parcel_id}")

    async def list_parcels(
        self,
        identity: VerifiedIdentity,
        email: Optional[str] = None,
        delivery_status: Optional[str] = None,
        payment_status: Optional[str] = None
    ) -> Dict[str, Any]:
        """Customers see their own parcels; admins may list everything"""
        if email is None:
            if not is_admin(self.db, identity):
                raise AuthorizationError("Email is required to list parcels")
        else:
            self._ensure_owner_or_admin(identity, email)

        parcels = self.repository.list_parcels(email, delivery_status, payment_status)
        return {
            "success": True,
            "message": "Parcels",
            "parcels": [serialize_document(p) for p in parcels],
            "count": len(parcels)
        }

    async def get_parcel(self, parcel_id: str, identity: VerifiedIdentity) -> Dict[str, Any]:
        parcel = self._get_parcel_or_404(parcel_id)
        self._ensure_owner_or_admin(identity, parcel.get("userEmail"))
        return {
            "success": True,
            "message": "Parcel details",
            "parcel": serialize_document(parcel)
        }

    async def create_parcel(self, request: ParcelCreateRequest, identity: VerifiedIdentity) -> Dict[str, Any]:
        """Insert the parcel and open its tracking record"""
        ensure_owner(identity, request.user_email)

        now = current_time()
        tracking_id = generate_tracking_id()
        parcel = self.repository.create_parcel(request.model_dump(by_alias=True), tracking_id, now)
        parcel_id = str(parcel["_id"])

        self.tracking.start_tracking(parcel_id, request.user_email, tracking_id)
        logger.info(f"📦 Parcel {parcel_id} created by {request.user_email} ({tracking_id})")

        return {
            "success": True,
            "message": "Parcel created",
            "parcel_id": parcel_id,
            "tracking_id": tracking_id
        }

    async def delete_parcel(self, parcel_id: str, identity: VerifiedIdentity) -> Dict[str, Any]:
        parcel = self._get_parcel_or_404(parcel_id)
        self._ensure_owner_or_admin(identity, parcel.get("userEmail"))

        self.repository.delete_parcel(parcel["_id"])
        self.tracking.repository.delete_by_parcel(parcel_id)
        logger.info(f"🗑️ Parcel {parcel_id} deleted by {identity.email}")
        return {"success": True, "message": "Parcel deleted", "parcel_id": parcel_id}

    async def list_assignable(self) -> Dict[str, Any]:
        """Paid parcels still waiting for a rider"""
        parcels = self.repository.list_parcels(delivery_status="pending", payment_status="paid")
        return {
            "success": True,
            "message": "Parcels waiting for a rider",
            "parcels": [serialize_document(p) for p in parcels],
            "count": len(parcels)
        }

    async def get_status_counts(self) -> Dict[str, Any]:
        counts = self.repository.count_by_delivery_status()
        return {
            "success": True,
            "message": "Parcels by delivery status",
            "counts": counts,
            "total": sum(c["count"] for c in counts)
        }

    async def assign_rider(self, parcel_id: str, request: AssignRiderRequest) -> Dict[str, Any]:
        """
        Hand a parcel to a rider.

        Only parcels that have not been picked up yet can be (re)assigned. A
        rider already carrying a parcel (work_status in-transit) cannot take
        another one. Both documents get a reference to each other, and a rider
        replaced on reassignment goes back to available.
        """
        parcel = self._get_parcel_or_404(parcel_id)
        delivery_status = parcel.get("delivery_status", "pending")
        if delivery_status not in ASSIGNABLE_STATUSES:
            raise HTTPException(
                status_code=400, detail=f"Parcel cannot be assigned from status '{delivery_status}'"
            )

        rider_object_id = to_object_id(request.rider_id, "rider id")
        rider = self.riders.get_by_id(rider_object_id)
        if rider is None:
            raise HTTPException(status_code=404, detail="Rider not found")
        if rider.get("status") != "Active":
            raise HTTPException(status_code=400, detail="Rider is not active")
        if rider.get("work_status") == "in-transit":
            raise HTTPException(status_code=400, detail="Rider is already delivering a parcel")

        previous_rider = parcel.get("assignedRider")
        now = current_time()
        self.repository.assign_rider(parcel["_id"], rider, now)
        if previous_rider and previous_rider != request.rider_id:
            self._release_rider(previous_rider, parcel_id)
        self.riders.set_work_status(rider_object_id, "assigned", parcel_id)
        self.tracking.record_progress(
            parcel.get("trackingId"), "rider-assigned", f"Assigned to {rider.get('name') or rider['email']}"
        )

        logger.info(f"🏍️ Parcel {parcel_id} assigned to rider {request.rider_id}")
        return {
            "success": True,
            "message": "Rider assigned",
            "parcel_id": parcel_id,
            "rider_id": request.rider_id,
            "rider_email": rider["email"],
            "delivery_status": "rider-assigned"
        }

    async def approve_cashout(self, parcel_id: str) -> Dict[str, Any]:
        """pending -> cashed_out; any other state is rejected"""
        parcel = self._get_parcel_or_404(parcel_id)

        moved = self.repository.transition_cashout(
            parcel["_id"], ["pending"], "cashed_out", {"cashed_out_at": current_time()}
        )
        if not moved:
            current = parcel.get("cashout_status", "none")
            raise HTTPException(status_code=400, detail=f"Cashout cannot be approved from status '{current}'")

        logger.info(f"💸 Cashout approved for parcel {parcel_id}")
        return {
            "success": True,
            "message": "Cashout completed",
            "parcel_id": parcel_id,
            "cashout_status": "cashed_out"
        }
