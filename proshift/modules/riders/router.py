# proshift/modules/riders/router.py
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, status
from pymongo.database import Database

from proshift.config.database import get_db
from proshift.core.auth.dependencies import get_admin_identity, get_verified_identity
from proshift.core.auth.schemas import VerifiedIdentity
from .service import RidersService
from .schemas import (
    RiderApplication, RiderStatusUpdate, RiderApplicationResponse,
    RiderListResponse, RiderStatusResponse
)

router = APIRouter()

@router.post("", response_model=RiderApplicationResponse, status_code=status.HTTP_201_CREATED)
async def apply_as_rider(
    application: RiderApplication,
    identity: VerifiedIdentity = Depends(get_verified_identity),
    db: Database = Depends(get_db)
):
    """
    Submit a rider application

    The application waits as `Pending` until an admin reviews it.
    """
    service = RidersService(db)
    return await service.apply(application, identity)

@router.get("/pending", response_model=RiderListResponse)
async def get_pending_riders(
    identity: VerifiedIdentity = Depends(get_admin_identity),
    db: Database = Depends(get_db)
):
    service = RidersService(db)
    return await service.list_riders("Pending")

@router.get("/active", response_model=RiderListResponse)
async def get_active_riders(
    district: Optional[str] = Query(None, description="Only riders of this district"),
    identity: VerifiedIdentity = Depends(get_admin_identity),
    db: Database = Depends(get_db)
):
    service = RidersService(db)
    return await service.list_riders("Active", district)

@router.get("/available", response_model=RiderListResponse)
async def get_available_riders(
    district: Optional[str] = Query(None, description="Only riders of this district"),
    identity: VerifiedIdentity = Depends(get_admin_identity),
    db: Database = Depends(get_db)
):
    """Active riders free to take a parcel"""
    service = RidersService(db)
    return await service.list_available(district)

@router.patch("/{rider_id}/status", response_model=RiderStatusResponse)
async def update_rider_status(
    update: RiderStatusUpdate,
    rider_id: str = Path(..., description="Rider id"),
    identity: VerifiedIdentity = Depends(get_admin_identity),
    db: Database = Depends(get_db)
):
    """
    Review a rider application

    - **Active**: the account becomes a rider and can take parcels
    - **Inactive** / **Rejected**: a rider account goes back to `user`
    """
    service = RidersService(db)
    return await service.update_status(rider_id, update)

@router.delete("/{rider_id}")
async def delete_rider(
    rider_id: str = Path(..., description="Rider id"),
    identity: VerifiedIdentity = Depends(get_admin_identity),
    db: Database = Depends(get_db)
):
    service = RidersService(db)
    return await service.delete_rider(rider_id)
