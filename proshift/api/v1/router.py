from fastapi import APIRouter
from proshift.api.v1.auth import router as auth_router
from proshift.modules.users import router as users_router
from proshift.modules.parcels import router as parcels_router
from proshift.modules.deliveries import router as deliveries_router
from proshift.modules.riders import router as riders_router
from proshift.modules.payments import router as payments_router
from proshift.modules.tracking import router as tracking_router

# Main API v1 router
api_router = APIRouter()

api_router.include_router(auth_router, prefix="/auth", tags=["Authentication"])

api_router.include_router(
    users_router,
    prefix="/users",
    tags=["Users"]
)

api_router.include_router(
    parcels_router,
    prefix="/parcels",
    tags=["Parcels"]
)

api_router.include_router(
    deliveries_router,
    prefix="/deliveries",
    tags=["Rider Deliveries"]
)

api_router.include_router(
    riders_router,
    prefix="/riders",
    tags=["Riders"]
)

api_router.include_router(
    payments_router,
    prefix="/payments",
    tags=["Payments"]
)

api_router.include_router(
    tracking_router,
    prefix="/tracking",
    tags=["Tracking"]
)
