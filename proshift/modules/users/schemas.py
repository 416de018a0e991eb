# proshift/modules/users/schemas.py
from pydantic import BaseModel, Field
from typing import Optional, Dict, Any, List, Literal
from proshift.shared.schemas.common import BaseResponse

class UserSignIn(BaseModel):
    email: str = Field(..., description="Email verified by the identity provider")
    name: Optional[str] = Field(None, description="Display name")
    photo: Optional[str] = Field(None, description="Profile photo URL")

    class Config:
        json_schema_extra = {
            "example": {
                "email": "customer@proshift.com",
                "name": "Nadia Islam",
                "photo": "https://example.com/nadia.png"
            }
        }

class RoleUpdateRequest(BaseModel):
    role: Literal["admin", "user"] = Field(..., description="New role")

class SignInResponse(BaseResponse):
    inserted: bool
    user: Dict[str, Any]

class RoleResponse(BaseModel):
    email: str
    role: str

class UserSearchResponse(BaseResponse):
    users: List[Dict[str, Any]]
    count: int

class RoleUpdateResponse(BaseResponse):
    user_id: str
    role: str
