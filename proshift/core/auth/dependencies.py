from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pymongo.database import Database
from typing import Optional

from proshift.config.database import get_db
from proshift.shared.database.documents import USERS
from .schemas import PermissionResult, VerifiedIdentity
from .service import IdentityVerifier

security = HTTPBearer(auto_error=False)

ADMIN_ROLE = "admin"
RIDER_ROLE = "rider"

class AuthenticationError(HTTPException):
    def __init__(self, detail: str = "Unauthorized access"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )

class AuthorizationError(HTTPException):
    def __init__(self, detail: str = "Forbidden access"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail
        )

def get_identity_verifier() -> IdentityVerifier:
    return IdentityVerifier()

async def get_verified_identity(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    verifier: IdentityVerifier = Depends(get_identity_verifier)
) -> VerifiedIdentity:
    """Identity from the bearer token: 401 without a token, 403 for a bad one"""

    if credentials is None or not credentials.credentials:
        raise AuthenticationError()

    identity = verifier.verify(credentials.credentials)
    if identity is None:
        raise AuthorizationError("Invalid or expired token")

    # Picked up by the request log
    request.state.identity_email = identity.email
    return identity

def get_stored_role(db: Database, email: str) -> Optional[str]:
    user = db[USERS].find_one({"email": email}, {"role": 1})
    if user is None:
        return None
    return user.get("role")

def check_role(db: Database, identity: VerifiedIdentity, required_role: str) -> PermissionResult:
    """Compare the stored role of the verified email against the required one"""
    role = get_stored_role(db, identity.email)
    return PermissionResult(
        granted=role == required_role,
        required_role=required_role,
        role=role
    )

def require_role(required_role: str):
    """Factory for a dependency that requires one specific role"""
    def role_checker(
        identity: VerifiedIdentity = Depends(get_verified_identity),
        db: Database = Depends(get_db)
    ) -> VerifiedIdentity:
        result = check_role(db, identity, required_role)
        if not result.granted:
            raise AuthorizationError(result.reason)
        return identity
    return role_checker

def get_admin_identity(identity: VerifiedIdentity = Depends(require_role(ADMIN_ROLE))):
    """Dependency for admins"""
    return identity

def get_rider_identity(identity: VerifiedIdentity = Depends(require_role(RIDER_ROLE))):
    """Dependency for riders"""
    return identity

def is_admin(db: Database, identity: VerifiedIdentity) -> bool:
    return check_role(db, identity, ADMIN_ROLE).granted

def ensure_owner(identity: VerifiedIdentity, email: Optional[str]):
    """Users may only read their own parcels, payments and tracking records"""
    if email is None or email.lower() != identity.email.lower():
        raise AuthorizationError("You can only access your own records")
