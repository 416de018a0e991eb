from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional

class VerifiedIdentity(BaseModel):
    """Identity attached to a request once the provider token checks out"""
    email: str
    claims: Dict[str, Any] = Field(default_factory=dict)

class PermissionResult(BaseModel):
    """Outcome of a role check; a missing user is reported as not granted"""
    granted: bool
    required_role: str
    role: Optional[str] = None

    @property
    def reason(self) -> str:
        if self.granted:
            return "granted"
        if self.role is None:
            return f"Role '{self.required_role}' required"
        return f"Role '{self.role}' not authorized. Required role: {self.required_role}"

class CurrentUserResponse(BaseModel):
    email: str
    name: Optional[str] = None
    photo: Optional[str] = None
    role: Optional[str] = None
    registered: bool

    class Config:
        json_schema_extra = {
            "example": {
                "email": "rider@proshift.com",
                "name": "Karim Rahman",
                "photo": "https://example.com/karim.png",
                "role": "rider",
                "registered": True
            }
        }

class PermissionsResponse(BaseModel):
    email: str
    role: Optional[str] = None
    permissions: List[str]
    can_access: Dict[str, bool]
