# proshift/modules/riders/__init__.py
"""
Riders module - rider applications and approval

- Applicants submit their details and wait as Pending
- Admins activate, deactivate or reject applications
- Activation promotes the user account to the rider role

Architecture:
- router.py: endpoints
- service.py: business rules
- repository.py: document access
- schemas.py: request/response models
"""

from .router import router
from .service import RidersService
from .repository import RidersRepository

__all__ = [
    "router",
    "RidersService",
    "RidersRepository"
]
