# proshift/modules/users/service.py
import logging
from typing import Any, Dict

from fastapi import HTTPException
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from proshift.core.auth.schemas import VerifiedIdentity
from proshift.core.auth.dependencies import ensure_owner
from proshift.shared.database.documents import current_time, serialize_document, to_object_id
from .repository import UsersRepository
from .schemas import UserSignIn, RoleUpdateRequest

logger = logging.getLogger(__name__)

DEFAULT_ROLE = "user"

class UsersService:
    def __init__(self, db: Database):
        self.db = db
        self.repository = UsersRepository(db)

    async def sign_in(self, payload: UserSignIn, identity: VerifiedIdentity) -> Dict[str, Any]:
        """
        Create the user on first sign-in, otherwise refresh last_login only.

        The unique index on email settles concurrent first sign-ins: the
        losing insert falls back to the update path.
        """
        ensure_owner(identity, payload.email)
        now = current_time()

        existing = self.repository.touch_last_login(payload.email, now)
        if existing is not None:
            return {
                "success": True,
                "message": "User already exists",
                "inserted": False,
                "user": serialize_document(existing)
            }

        try:
            user = self.repository.create_user(payload.model_dump(), DEFAULT_ROLE, now)
        except DuplicateKeyError:
            existing = self.repository.touch_last_login(payload.email, now)
            return {
                "success": True,
                "message": "User already exists",
                "inserted": False,
                "user": serialize_document(existing)
            }

        logger.info(f"👤 New user registered: {payload.email}")
        return {
            "success": True,
            "message": "User created",
            "inserted": True,
            "user": serialize_document(user)
        }

    async def get_role(self, email: str) -> Dict[str, Any]:
        user = self.repository.get_by_email(email)
        if user is None:
            raise HTTPException(status_code=404, detail="User not found")
        return {"email": email, "role": user.get("role", DEFAULT_ROLE)}

    async def search_users(self, term: str) -> Dict[str, Any]:
        users = [serialize_document(u) for u in self.repository.search_by_email(term)]
        return {
            "success": True,
            "message": f"Users matching '{term}'",
            "users": users,
            "count": len(users)
        }

    async def update_role(self, user_id: str, request: RoleUpdateRequest) -> Dict[str, Any]:
        object_id = to_object_id(user_id, "user id")
        if not self.repository.set_role(object_id, request.role):
            raise HTTPException(status_code=404, detail="User not found")

        logger.info(f"🔑 User {user_id} role set to {request.role}")
        return {
            "success": True,
            "message": f"User role updated to {request.role}",
            "user_id": user_id,
            "role": request.role
        }
