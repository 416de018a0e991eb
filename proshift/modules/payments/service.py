# proshift/modules/payments/service.py
import logging
from typing import Any, Dict, Optional

from fastapi import HTTPException
from pymongo.database import Database

from proshift.config.settings import settings
from proshift.core.auth.dependencies import ensure_owner
from proshift.core.auth.schemas import VerifiedIdentity
from proshift.modules.parcels.repository import ParcelsRepository
from proshift.modules.tracking.service import TrackingService
from proshift.shared.database.documents import current_time, serialize_document, to_object_id
from proshift.shared.services.payment_processor import PaymentProcessorClient
from .repository import PaymentsRepository
from .schemas import PaymentIntentRequest, PaymentRecordRequest

logger = logging.getLogger(__name__)

class PaymentsService:
    def __init__(self, db: Database, processor: Optional[PaymentProcessorClient] = None):
        self.db = db
        self.repository = PaymentsRepository(db)
        self.parcels = ParcelsRepository(db)
        self.tracking = TrackingService(db)
        self.processor = processor

    def _get_owned_parcel(self, parcel_id: str, identity: VerifiedIdentity) -> Dict[str, Any]:
        parcel = self.parcels.get_by_id(to_object_id(parcel_id, "parcel id"))
        if parcel is None:
            raise HTTPException(status_code=404, detail="Parcel not found")
        ensure_owner(identity, parcel.get("userEmail"))
        return parcel

    async def create_payment_intent(self, request: PaymentIntentRequest, identity: VerifiedIdentity) -> Dict[str, Any]:
        """Forward to the processor and hand back its client secret verbatim"""
        self._get_owned_parcel(request.parcel_id, identity)

        intent = await self.processor.create_payment_intent(
            amount=request.amount,
            currency=(request.currency or settings.payment_currency).lower(),
            metadata={"parcelId": request.parcel_id}
        )
        client_secret = intent.get("client_secret")
        if not client_secret:
            raise HTTPException(status_code=502, detail="Payment processor returned no client secret")
        return {"client_secret": client_secret}

    async def record_payment(self, request: PaymentRecordRequest, identity: VerifiedIdentity) -> Dict[str, Any]:
        """
        Store the payment and mark the parcel paid.

        Two independent writes: the payment record goes first, so a failure
        on the parcel update leaves the record in place.
        """
        ensure_owner(identity, request.email)
        parcel = self._get_owned_parcel(request.parcel_id, identity)
        parcel_object_id = parcel["_id"]

        now = current_time()
        payment = self.repository.create_payment({
            "parcelId": request.parcel_id,
            "amount": request.amount,
            "paymentId": request.payment_id,
            "transactionId": request.transaction_id,
            "payment_method": request.payment_method,
            "userEmail": request.email
        }, now)

        self.parcels.set_fields(parcel_object_id, {"payment_status": "paid", "paid_at": now})
        self.tracking.record_progress(parcel.get("trackingId"), "paid", f"Payment {request.transaction_id}")

        logger.info(f"💳 Payment {request.transaction_id} recorded for parcel {request.parcel_id}")
        return {
            "success": True,
            "message": "Payment recorded",
            "payment_id": str(payment["_id"]),
            "parcel_id": request.parcel_id,
            "payment_status": "paid"
        }

    async def get_history(self, email: str, identity: VerifiedIdentity) -> Dict[str, Any]:
        ensure_owner(identity, email)
        payments = self.repository.list_by_email(email)
        return {
            "success": True,
            "message": "Payment history",
            "payments": [serialize_document(p) for p in payments],
            "count": len(payments)
        }
