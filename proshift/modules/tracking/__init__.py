# proshift/modules/tracking/__init__.py
"""
Tracking module - parcel progress history

Every parcel gets a tracking record when it is created. Status changes are
appended to its history; entries are never rewritten.
"""

from .router import router
from .service import TrackingService
from .repository import TrackingRepository

__all__ = [
    "router",
    "TrackingService",
    "TrackingRepository"
]
