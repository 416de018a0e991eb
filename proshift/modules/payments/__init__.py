# proshift/modules/payments/__init__.py
"""
Payments module - payment capture

- Payment intent bridge to the external processor
- Payment records (written once, never updated)
- Payment history per user
"""

from .router import router
from .service import PaymentsService
from .repository import PaymentsRepository

__all__ = [
    "router",
    "PaymentsService",
    "PaymentsRepository"
]
