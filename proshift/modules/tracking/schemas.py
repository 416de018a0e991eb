# proshift/modules/tracking/schemas.py
from pydantic import BaseModel, Field
from typing import Optional, Dict, Any
from proshift.shared.schemas.common import BaseResponse

class TrackingUpdateRequest(BaseModel):
    status: str = Field(..., min_length=2, description="New status label")
    details: Optional[str] = Field(None, description="Free text shown to the customer")
    location: Optional[str] = Field(None, description="Where the parcel is")

    class Config:
        json_schema_extra = {
            "example": {
                "status": "in-transit",
                "details": "Parcel left the Dhaka sorting center",
                "location": "Dhaka"
            }
        }

class TrackingResponse(BaseResponse):
    tracking: Dict[str, Any]

class TrackingUpdateResponse(BaseResponse):
    tracking_id: str
    current_status: str
    entry: Dict[str, Any]
