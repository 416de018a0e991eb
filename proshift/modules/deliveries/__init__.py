# proshift/modules/deliveries/__init__.py
"""
Deliveries module - rider operations

- Parcels assigned to the rider
- Confirm pick-up (parcel and rider go in-transit)
- Confirm delivery (rider becomes available again)
- Completed deliveries with their earning
- Cashout requests
- Earnings summary and weekly delivery report

Architecture:
- router.py: rider endpoints
- service.py: business rules
- earnings.py: earning rule and daily buckets
- repository.py: parcel queries and aggregation pipelines for riders
- schemas.py: response models
"""

from .router import router
from .service import DeliveriesService
from .repository import DeliveriesRepository

__all__ = [
    "router",
    "DeliveriesService",
    "DeliveriesRepository"
]
