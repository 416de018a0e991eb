# proshift/modules/parcels/__init__.py
"""
Parcels module - parcel lifecycle

Delivery axis:  pending -> rider-assigned -> in-transit -> delivered
Payment axis:   unpaid -> paid
Cashout axis:   none -> pending -> cashed_out

- Customers submit, list and delete their parcels
- Admins assign riders and approve rider cashouts

Rider-side transitions (pick-up, delivery, cashout request) live in the
deliveries module.
"""

from .router import router
from .service import ParcelsService
from .repository import ParcelsRepository

__all__ = [
    "router",
    "ParcelsService",
    "ParcelsRepository"
]
