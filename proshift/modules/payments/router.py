# proshift/modules/payments/router.py
from fastapi import APIRouter, Depends, Query, status
from pymongo.database import Database

from proshift.config.database import get_db
from proshift.core.auth.dependencies import get_verified_identity
from proshift.core.auth.schemas import VerifiedIdentity
from proshift.shared.services.payment_processor import PaymentProcessorClient, get_payment_processor
from .service import PaymentsService
from .schemas import (
    PaymentIntentRequest, PaymentIntentResponse, PaymentRecordRequest,
    PaymentRecordResponse, PaymentHistoryResponse
)

router = APIRouter()

@router.post("/create-intent", response_model=PaymentIntentResponse)
async def create_payment_intent(
    request: PaymentIntentRequest,
    identity: VerifiedIdentity = Depends(get_verified_identity),
    processor: PaymentProcessorClient = Depends(get_payment_processor),
    db: Database = Depends(get_db)
):
    """
    Create a payment intent

    Only the parcel owner may pay. The amount is sent to the processor in
    minor units (amount × 100); the parcel id travels in the intent metadata.
    """
    service = PaymentsService(db, processor)
    return await service.create_payment_intent(request, identity)

@router.post("", response_model=PaymentRecordResponse, status_code=status.HTTP_201_CREATED)
async def record_payment(
    request: PaymentRecordRequest,
    identity: VerifiedIdentity = Depends(get_verified_identity),
    db: Database = Depends(get_db)
):
    """Record a successful payment and mark the parcel paid"""
    service = PaymentsService(db)
    return await service.record_payment(request, identity)

@router.get("", response_model=PaymentHistoryResponse)
async def get_payment_history(
    email: str = Query(..., description="Payer email"),
    identity: VerifiedIdentity = Depends(get_verified_identity),
    db: Database = Depends(get_db)
):
    """Payments of the signed-in user, newest first"""
    service = PaymentsService(db)
    return await service.get_history(email, identity)
