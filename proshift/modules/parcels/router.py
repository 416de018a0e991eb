# proshift/modules/parcels/router.py
from typing import Literal, Optional

from fastapi import APIRouter, Depends, Path, Query, status
from pymongo.database import Database

from proshift.config.database import get_db
from proshift.core.auth.dependencies import get_admin_identity, get_verified_identity
from proshift.core.auth.schemas import VerifiedIdentity
from .service import ParcelsService
from .schemas import (
    ParcelCreateRequest, AssignRiderRequest, ParcelCreateResponse, ParcelListResponse,
    ParcelDetailResponse, ParcelStatusCountsResponse, AssignRiderResponse, CashoutApprovalResponse
)

router = APIRouter()

@router.get("", response_model=ParcelListResponse)
async def list_parcels(
    email: Optional[str] = Query(None, description="Owner email"),
    delivery_status: Optional[Literal["pending", "rider-assigned", "in-transit", "delivered"]] = Query(None),
    payment_status: Optional[Literal["unpaid", "paid"]] = Query(None),
    identity: VerifiedIdentity = Depends(get_verified_identity),
    db: Database = Depends(get_db)
):
    """
    Parcels, newest first

    - Customers must pass their own email
    - Admins may omit it to list every parcel
    """
    service = ParcelsService(db)
    return await service.list_parcels(identity, email, delivery_status, payment_status)

@router.post("", response_model=ParcelCreateResponse, status_code=status.HTTP_201_CREATED)
async def create_parcel(
    request: ParcelCreateRequest,
    identity: VerifiedIdentity = Depends(get_verified_identity),
    db: Database = Depends(get_db)
):
    """
    Submit a parcel

    Starts as `pending` / `unpaid` and gets a tracking id.
    """
    service = ParcelsService(db)
    return await service.create_parcel(request, identity)

@router.get("/assignable", response_model=ParcelListResponse)
async def get_assignable_parcels(
    identity: VerifiedIdentity = Depends(get_admin_identity),
    db: Database = Depends(get_db)
):
    service = ParcelsService(db)
    return await service.list_assignable()

@router.get("/status-counts", response_model=ParcelStatusCountsResponse)
async def get_status_counts(
    identity: VerifiedIdentity = Depends(get_admin_identity),
    db: Database = Depends(get_db)
):
    service = ParcelsService(db)
    return await service.get_status_counts()

@router.get("/{parcel_id}", response_model=ParcelDetailResponse)
async def get_parcel(
    parcel_id: str = Path(..., description="Parcel id"),
    identity: VerifiedIdentity = Depends(get_verified_identity),
    db: Database = Depends(get_db)
):
    service = ParcelsService(db)
    return await service.get_parcel(parcel_id, identity)

@router.delete("/{parcel_id}")
async def delete_parcel(
    parcel_id: str = Path(..., description="Parcel id"),
    identity: VerifiedIdentity = Depends(get_verified_identity),
    db: Database = Depends(get_db)
):
    service = ParcelsService(db)
    return await service.delete_parcel(parcel_id, identity)

@router.patch("/{parcel_id}/assign", response_model=AssignRiderResponse)
async def assign_rider(
    request: AssignRiderRequest,
    parcel_id: str = Path(..., description="Parcel id"),
    identity: VerifiedIdentity = Depends(get_admin_identity),
    db: Database = Depends(get_db)
):
    """
    Assign a rider to a parcel

    **Validations:**
    - The rider must be Active
    - A rider with work status `in-transit` cannot be assigned
    """
    service = ParcelsService(db)
    return await service.assign_rider(parcel_id, request)

@router.patch("/{parcel_id}/cashout/approve", response_model=CashoutApprovalResponse)
async def approve_cashout(
    parcel_id: str = Path(..., description="Parcel id"),
    identity: VerifiedIdentity = Depends(get_admin_identity),
    db: Database = Depends(get_db)
):
    """Pay out a pending rider cashout"""
    service = ParcelsService(db)
    return await service.approve_cashout(parcel_id)
