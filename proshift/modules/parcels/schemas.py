# proshift/modules/parcels/schemas.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Dict, Any, List, Literal
from proshift.shared.schemas.common import BaseResponse


class ParcelCreateRequest(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "title": "Birthday gift",
                "parcel_type": "non-document",
                "weight": 2.5,
                "sender_name": "Nadia Islam",
                "sender_phone": "01811111111",
                "sender_region": "Dhaka",
                "sender_center": "Dhaka",
                "sender_address": "House 12, Road 5, Dhanmondi",
                "receiver_name": "Rafi Ahmed",
                "receiver_phone": "01922222222",
                "receiver_region": "Chattogram",
                "receiver_center": "Chattogram",
                "receiver_address": "Agrabad C/A",
                "userEmail": "nadia@proshift.com",
                "totalCost": 250
            }
        }
    )

    title: str = Field(..., min_length=2, description="Short description of the parcel")
    parcel_type: Literal["document", "non-document"] = Field("non-document", description="Parcel type")
    weight: Optional[float] = Field(None, ge=0, description="Weight in kg")
    sender_name: str = Field(..., description="Sender name")
    sender_phone: Optional[str] = None
    sender_region: str = Field(..., description="Sender region")
    sender_center: str = Field(..., description="Service center the parcel starts from")
    sender_address: Optional[str] = None
    pickup_instruction: Optional[str] = None
    receiver_name: str = Field(..., description="Receiver name")
    receiver_phone: Optional[str] = None
    receiver_region: str = Field(..., description="Receiver region")
    receiver_center: str = Field(..., description="Service center the parcel ends at")
    receiver_address: Optional[str] = None
    delivery_instruction: Optional[str] = None
    user_email: str = Field(..., alias="userEmail", description="Owner of the parcel")
    total_cost: float = Field(..., alias="totalCost", ge=0, description="Delivery charge")

class AssignRiderRequest(BaseModel):
    rider_id: str = Field(..., description="Rider to assign")

class ParcelCreateResponse(BaseResponse):
    parcel_id: str
    tracking_id: str

class ParcelListResponse(BaseResponse):
    parcels: List[Dict[str, Any]]
    count: int

class ParcelDetailResponse(BaseResponse):
    parcel: Dict[str, Any]

class ParcelStatusCountsResponse(BaseResponse):
    counts: List[Dict[str, Any]]
    total: int

class AssignRiderResponse(BaseResponse):
    parcel_id: str
    rider_id: str
    rider_email: str
    delivery_status: str

class CashoutApprovalResponse(BaseResponse):
    parcel_id: str
    cashout_status: str
