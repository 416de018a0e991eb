# proshift/modules/tracking/router.py
from fastapi import APIRouter, Depends, Path, status
from pymongo.database import Database

from proshift.config.database import get_db
from proshift.core.auth.dependencies import get_verified_identity
from proshift.core.auth.schemas import VerifiedIdentity
from .service import TrackingService
from .schemas import TrackingUpdateRequest, TrackingResponse, TrackingUpdateResponse

router = APIRouter()

@router.get("/{tracking_id}", response_model=TrackingResponse)
async def get_tracking(
    tracking_id: str = Path(..., description="Tracking id printed on the parcel"),
    identity: VerifiedIdentity = Depends(get_verified_identity),
    db: Database = Depends(get_db)
):
    """
    Tracking record with its full history

    Only the parcel owner and admins can read it.
    """
    service = TrackingService(db)
    return await service.get_tracking(tracking_id, identity)

@router.post("/{tracking_id}/updates", response_model=TrackingUpdateResponse, status_code=status.HTTP_201_CREATED)
async def add_tracking_update(
    update: TrackingUpdateRequest,
    tracking_id: str = Path(..., description="Tracking id printed on the parcel"),
    identity: VerifiedIdentity = Depends(get_verified_identity),
    db: Database = Depends(get_db)
):
    """Append a status entry (admins and riders)"""
    service = TrackingService(db)
    return await service.add_update(tracking_id, update, identity)
