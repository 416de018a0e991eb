# proshift/modules/payments/schemas.py
from pydantic import BaseModel, Field
from typing import Optional, Dict, Any, List
from proshift.shared.schemas.common import BaseResponse

class PaymentIntentRequest(BaseModel):
    amount: float = Field(..., gt=0, description="Amount in major currency units")
    currency: Optional[str] = Field(None, min_length=3, max_length=3, description="ISO currency code")
    parcel_id: str = Field(..., description="Parcel being paid")

    class Config:
        json_schema_extra = {
            "example": {"amount": 250, "currency": "usd", "parcel_id": "6650a1f2c3d4e5f601234567"}
        }

class PaymentIntentResponse(BaseModel):
    client_secret: str

class PaymentRecordRequest(BaseModel):
    parcel_id: str = Field(..., description="Parcel that was paid")
    amount: float = Field(..., gt=0, description="Amount paid in major units")
    payment_id: Optional[str] = Field(None, description="Processor payment intent id")
    transaction_id: str = Field(..., description="Processor transaction reference")
    payment_method: Optional[str] = Field("card", description="Method used")
    email: str = Field(..., description="Payer email")

class PaymentRecordResponse(BaseResponse):
    payment_id: str
    parcel_id: str
    payment_status: str

class PaymentHistoryResponse(BaseResponse):
    payments: List[Dict[str, Any]]
    count: int
