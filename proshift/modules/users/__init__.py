# proshift/modules/users/__init__.py
"""
Users module - accounts and roles

- Sign-in upsert: first sign-in creates the user, later ones refresh last_login
- Role lookup for the client application
- Admin search and role changes

Architecture:
- router.py: endpoints
- service.py: business rules
- repository.py: document access
- schemas.py: request/response models
"""

from .router import router
from .service import UsersService
from .repository import UsersRepository

__all__ = [
    "router",
    "UsersService",
    "UsersRepository"
]
