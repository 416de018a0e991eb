# proshift/modules/riders/service.py
import logging
from typing import Any, Dict, Optional

from fastapi import HTTPException
from pymongo.database import Database

from proshift.core.auth.dependencies import RIDER_ROLE, ensure_owner
from proshift.core.auth.schemas import VerifiedIdentity
from proshift.modules.users.repository import UsersRepository
from proshift.shared.database.documents import current_time, serialize_document, to_object_id
from .repository import RidersRepository
from .schemas import RiderApplication, RiderStatusUpdate

logger = logging.getLogger(__name__)

class RidersService:
    def __init__(self, db: Database):
        self.db = db
        self.repository = RidersRepository(db)
        self.users = UsersRepository(db)

    async def apply(self, application: RiderApplication, identity: VerifiedIdentity) -> Dict[str, Any]:
        """Register a Pending application for the signed-in user"""
        ensure_owner(identity, application.email)

        if self.repository.get_open_application(application.email):
            raise HTTPException(status_code=409, detail="An application for this email is already open")

        rider = self.repository.create_rider(application.model_dump(), current_time())
        logger.info(f"🏍️ Rider application received: {application.email}")

        return {
            "success": True,
            "message": "Rider application submitted",
            "rider_id": str(rider["_id"]),
            "status": rider["status"]
        }

    async def list_riders(self, status: str, district: Optional[str] = None) -> Dict[str, Any]:
        riders = [serialize_document(r) for r in self.repository.list_by_status(status, district)]
        return {
            "success": True,
            "message": f"{status} riders",
            "riders": riders,
            "count": len(riders)
        }

    async def list_available(self, district: Optional[str] = None) -> Dict[str, Any]:
        riders = [serialize_document(r) for r in self.repository.list_available(district)]
        return {
            "success": True,
            "message": "Riders available for assignment",
            "riders": riders,
            "count": len(riders)
        }

    async def update_status(self, rider_id: str, update: RiderStatusUpdate) -> Dict[str, Any]:
        """
        Move an application to Active, Inactive or Rejected.

        Activation makes the account a rider; deactivation or rejection
        returns a rider account to the plain user role.
        """
        object_id = to_object_id(rider_id, "rider id")
        rider = self.repository.get_by_id(object_id)
        if rider is None:
            raise HTTPException(status_code=404, detail="Rider not found")

        work_status = "available" if update.status == "Active" else None
        self.repository.set_status(object_id, update.status, current_time(), work_status)

        user_role = None
        user = self.users.get_by_email(rider["email"])
        if user is not None:
            if update.status == "Active":
                user_role = RIDER_ROLE
                self.users.set_role_by_email(rider["email"], RIDER_ROLE)
            elif user.get("role") == RIDER_ROLE:
                user_role = "user"
                self.users.set_role_by_email(rider["email"], "user")
            else:
                user_role = user.get("role")
        else:
            logger.warning(f"⚠️ Rider {rider_id} has no user account for {rider['email']}")

        logger.info(f"🏍️ Rider {rider_id} status set to {update.status}")
        return {
            "success": True,
            "message": f"Rider status updated to {update.status}",
            "rider_id": rider_id,
            "status": update.status,
            "user_role": user_role
        }

    async def delete_rider(self, rider_id: str) -> Dict[str, Any]:
        object_id = to_object_id(rider_id, "rider id")
        if not self.repository.delete_rider(object_id):
            raise HTTPException(status_code=404, detail="Rider not found")
        return {"success": True, "message": "Rider deleted", "rider_id": rider_id}
