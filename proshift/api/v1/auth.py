from fastapi import APIRouter, Depends
from pymongo.database import Database

from proshift.config.database import get_db
from proshift.core.auth.dependencies import get_verified_identity
from proshift.core.auth.schemas import CurrentUserResponse, PermissionsResponse, VerifiedIdentity
from proshift.shared.database.documents import USERS

router = APIRouter()

@router.get("/me", response_model=CurrentUserResponse)
async def get_current_user_info(
    identity: VerifiedIdentity = Depends(get_verified_identity),
    db: Database = Depends(get_db)
):
    """
    Stored profile of the verified identity

    **Required headers:**
    - Authorization: Bearer {token}
    """
    user = db[USERS].find_one({"email": identity.email})
    if user is None:
        return CurrentUserResponse(email=identity.email, registered=False)

    return CurrentUserResponse(
        email=identity.email,
        name=user.get("name"),
        photo=user.get("photo"),
        role=user.get("role"),
        registered=True
    )

# Role overview for the client application
@router.get("/check-permissions", response_model=PermissionsResponse)
async def check_permissions(
    identity: VerifiedIdentity = Depends(get_verified_identity),
    db: Database = Depends(get_db)
):
    """What the current role can reach"""
    permissions = {
        "user": ["parcels", "payments", "tracking", "rider_application"],
        "rider": ["parcels", "payments", "tracking", "deliveries", "earnings", "cashout"],
        "admin": ["parcels", "payments", "tracking", "user_management", "rider_management", "assignment"]
    }

    user = db[USERS].find_one({"email": identity.email}, {"role": 1})
    role = user.get("role") if user else None

    return PermissionsResponse(
        email=identity.email,
        role=role,
        permissions=permissions.get(role, []),
        can_access={
            "customer_panel": role is not None,
            "rider_panel": role == "rider",
            "admin_panel": role == "admin"
        }
    )
