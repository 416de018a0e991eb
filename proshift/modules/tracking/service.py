# proshift/modules/tracking/service.py
import logging
import uuid
from typing import Any, Dict, Optional

from fastapi import HTTPException
from pymongo.database import Database

from proshift.core.auth.dependencies import (
    ADMIN_ROLE, RIDER_ROLE, AuthorizationError, ensure_owner, get_stored_role, is_admin
)
from proshift.core.auth.schemas import VerifiedIdentity
from proshift.shared.database.documents import current_time, serialize_document
from .repository import TrackingRepository
from .schemas import TrackingUpdateRequest

logger = logging.getLogger(__name__)

def generate_tracking_id() -> str:
    """PS-YYYYMMDD-XXXXXX"""
    return f"PS-{current_time():%Y%m%d}-{uuid.uuid4().hex[:6].upper()}"

class TrackingService:
    def __init__(self, db: Database):
        self.db = db
        self.repository = TrackingRepository(db)

    @staticmethod
    def build_entry(status: str, details: Optional[str] = None, location: Optional[str] = None) -> Dict[str, Any]:
        return {
            "status": status,
            "details": details,
            "location": location,
            "timestamp": current_time()
        }

    def start_tracking(self, parcel_id: str, user_email: str, tracking_id: Optional[str] = None) -> Dict[str, Any]:
        """Tracking record for a new parcel, opened with a pending entry"""
        tracking_id = tracking_id or generate_tracking_id()
        entry = self.build_entry("pending", "Parcel created")
        return self.repository.create_tracking(tracking_id, parcel_id, user_email, entry, entry["timestamp"])

    def record_progress(self, tracking_id: Optional[str], status: str, details: Optional[str] = None) -> bool:
        """Append to a parcel's history; parcels created without tracking are skipped"""
        if not tracking_id:
            return False
        appended = self.repository.append_entry(tracking_id, self.build_entry(status, details))
        if not appended:
            logger.warning(f"⚠️ Tracking record {tracking_id} not found for status {status}")
        return appended

    async def get_tracking(self, tracking_id: str, identity: VerifiedIdentity) -> Dict[str, Any]:
        tracking = self.repository.get_by_tracking_id(tracking_id)
        if tracking is None:
            raise HTTPException(status_code=404, detail="Tracking record not found")

        if not is_admin(self.db, identity):
            ensure_owner(identity, tracking.get("userEmail"))

        return {
            "success": True,
            "message": f"Tracking {tracking_id}",
            "tracking": serialize_document(tracking)
        }

    async def add_update(
        self, tracking_id: str, update: TrackingUpdateRequest, identity: VerifiedIdentity
    ) -> Dict[str, Any]:
        """Staff-only history entry"""
        if get_stored_role(self.db, identity.email) not in (ADMIN_ROLE, RIDER_ROLE):
            raise AuthorizationError("Only admins and riders can update tracking")

        entry = self.build_entry(update.status, update.details, update.location)
        if not self.repository.append_entry(tracking_id, entry):
            raise HTTPException(status_code=404, detail="Tracking record not found")

        return {
            "success": True,
            "message": "Tracking updated",
            "tracking_id": tracking_id,
            "current_status": update.status,
            "entry": entry
        }
