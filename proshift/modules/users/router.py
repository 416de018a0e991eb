# proshift/modules/users/router.py
from fastapi import APIRouter, Depends, Path, Query, Response, status
from pymongo.database import Database

from proshift.config.database import get_db
from proshift.core.auth.dependencies import get_admin_identity, get_verified_identity
from proshift.core.auth.schemas import VerifiedIdentity
from .service import UsersService
from .schemas import (
    UserSignIn, RoleUpdateRequest, SignInResponse, RoleResponse,
    UserSearchResponse, RoleUpdateResponse
)

router = APIRouter()

@router.post("", response_model=SignInResponse)
async def sign_in_user(
    payload: UserSignIn,
    response: Response,
    identity: VerifiedIdentity = Depends(get_verified_identity),
    db: Database = Depends(get_db)
):
    """
    Register the signed-in user

    - First sign-in creates the user with role `user` (201)
    - Later sign-ins only update `last_login` (200)
    """
    service = UsersService(db)
    result = await service.sign_in(payload, identity)
    if result["inserted"]:
        response.status_code = status.HTTP_201_CREATED
    return result

@router.get("/search", response_model=UserSearchResponse)
async def search_users(
    email: str = Query(..., min_length=1, description="Part of the email to look for"),
    identity: VerifiedIdentity = Depends(get_admin_identity),
    db: Database = Depends(get_db)
):
    """Admin search of users by email"""
    service = UsersService(db)
    return await service.search_users(email)

@router.get("/{email}/role", response_model=RoleResponse)
async def get_user_role(
    email: str = Path(..., description="User email"),
    identity: VerifiedIdentity = Depends(get_verified_identity),
    db: Database = Depends(get_db)
):
    service = UsersService(db)
    return await service.get_role(email)

@router.patch("/{user_id}/role", response_model=RoleUpdateResponse)
async def update_user_role(
    request: RoleUpdateRequest,
    user_id: str = Path(..., description="User id"),
    identity: VerifiedIdentity = Depends(get_admin_identity),
    db: Database = Depends(get_db)
):
    """Promote a user to admin or demote back to user"""
    service = UsersService(db)
    return await service.update_role(user_id, request)
