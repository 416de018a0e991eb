# proshift/modules/deliveries/router.py
from fastapi import APIRouter, Depends, Path
from pymongo.database import Database

from proshift.config.database import get_db
from proshift.core.auth.dependencies import get_rider_identity
from proshift.core.auth.schemas import VerifiedIdentity
from .service import DeliveriesService
from .schemas import (
    AssignedParcelsResponse, DeliveryStatusResponse, CompletedDeliveriesResponse,
    CashoutRequestResponse, EarningsResponse, WeeklyDeliveriesResponse
)

router = APIRouter()

@router.get("/assigned", response_model=AssignedParcelsResponse)
async def get_assigned_parcels(
    identity: VerifiedIdentity = Depends(get_rider_identity),
    db: Database = Depends(get_db)
):
    """Parcels waiting for pick-up or on the way"""
    service = DeliveriesService(db)
    return await service.get_assigned_parcels(identity)

@router.patch("/{parcel_id}/pick-up", response_model=DeliveryStatusResponse)
async def confirm_pickup(
    parcel_id: str = Path(..., description="Parcel id"),
    identity: VerifiedIdentity = Depends(get_rider_identity),
    db: Database = Depends(get_db)
):
    """
    Confirm pick-up

    - Parcel goes to `in-transit` with a pick-up timestamp
    - The rider goes `in-transit` and cannot be assigned another parcel
    """
    service = DeliveriesService(db)
    return await service.confirm_pickup(parcel_id, identity)

@router.patch("/{parcel_id}/deliver", response_model=DeliveryStatusResponse)
async def confirm_delivery(
    parcel_id: str = Path(..., description="Parcel id"),
    identity: VerifiedIdentity = Depends(get_rider_identity),
    db: Database = Depends(get_db)
):
    """
    Confirm delivery

    - Parcel goes to `delivered` with a delivery timestamp
    - The rider is `available` again
    """
    service = DeliveriesService(db)
    return await service.confirm_delivery(parcel_id, identity)

@router.get("/completed", response_model=CompletedDeliveriesResponse)
async def get_completed_deliveries(
    identity: VerifiedIdentity = Depends(get_rider_identity),
    db: Database = Depends(get_db)
):
    service = DeliveriesService(db)
    return await service.get_completed_deliveries(identity)

@router.patch("/{parcel_id}/cashout", response_model=CashoutRequestResponse)
async def request_cashout(
    parcel_id: str = Path(..., description="Parcel id"),
    identity: VerifiedIdentity = Depends(get_rider_identity),
    db: Database = Depends(get_db)
):
    """Request payout of a delivered parcel's earning"""
    service = DeliveriesService(db)
    return await service.request_cashout(parcel_id, identity)

@router.get("/earnings", response_model=EarningsResponse)
async def get_earnings(
    identity: VerifiedIdentity = Depends(get_rider_identity),
    db: Database = Depends(get_db)
):
    """
    Earnings summary

    80% of the cost inside one service center, 40% between centers.
    Lifetime and today's totals, split by cashout state.
    """
    service = DeliveriesService(db)
    return await service.get_earnings(identity)

@router.get("/weekly", response_model=WeeklyDeliveriesResponse)
async def get_weekly_deliveries(
    identity: VerifiedIdentity = Depends(get_rider_identity),
    db: Database = Depends(get_db)
):
    service = DeliveriesService(db)
    return await service.get_weekly_deliveries(identity)
