# proshift/modules/riders/schemas.py
from pydantic import BaseModel, Field
from typing import Optional, Dict, Any, List, Literal
from proshift.shared.schemas.common import BaseResponse


class RiderApplication(BaseModel):
    name: str = Field(..., min_length=2, description="Full name")
    email: str = Field(..., description="Account email of the applicant")
    phone: str = Field(..., min_length=6, description="Contact number")
    age: int = Field(..., ge=18, le=70, description="Age in years")
    region: str = Field(..., description="Region the rider covers")
    district: str = Field(..., description="District (service center) the rider covers")
    nid: str = Field(..., description="National id number")
    bike_brand: Optional[str] = Field(None, description="Bike brand")
    bike_registration: Optional[str] = Field(None, description="Bike registration number")

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Karim Rahman",
                "email": "karim@proshift.com",
                "phone": "01712345678",
                "age": 27,
                "region": "Dhaka",
                "district": "Dhaka",
                "nid": "1990123456789",
                "bike_brand": "Honda",
                "bike_registration": "DHA-11-2233"
            }
        }

class RiderStatusUpdate(BaseModel):
    status: Literal["Active", "Inactive", "Rejected"] = Field(..., description="New application status")

class RiderApplicationResponse(BaseResponse):
    rider_id: str
    status: str

class RiderListResponse(BaseResponse):
    riders: List[Dict[str, Any]]
    count: int

class RiderStatusResponse(BaseResponse):
    rider_id: str
    status: str
    user_role: Optional[str] = None
