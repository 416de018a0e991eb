import logging
from fastapi import FastAPI, Depends
from contextlib import asynccontextmanager
from pymongo.database import Database
from pymongo.errors import PyMongoError

from proshift.config.settings import settings
from proshift.config.database import close_client, ensure_indexes, get_client, get_db
from proshift.core.errors import setup_exception_handlers
from proshift.core.middleware import setup_middleware
from proshift.api.v1.router import api_router

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info("🚀 ProShift API Starting...")
    logger.info(f"📍 Version: {settings.version}")
    logger.info(f"🌍 Environment: {'Development' if settings.debug else 'Production'}")
    logger.info(f"🗄️  Database: {settings.mongodb_db_name}")
    try:
        ensure_indexes(get_client()[settings.mongodb_db_name])
    except PyMongoError as e:
        logger.error(f"❌ Could not verify indexes: {e}")

    yield

    # Shutdown
    close_client()
    logger.info("🛑 ProShift API Shutting down...")

# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    description="Parcel delivery management: parcels, riders, payments and tracking",
    docs_url="/docs",
    redoc_url="/redoc" if settings.debug else None,
    lifespan=lifespan
)

# Setup middleware and error handlers
setup_middleware(app)
setup_exception_handlers(app)

# Include routers
app.include_router(api_router, prefix="/api/v1")

# Root endpoint
@app.get("/")
async def root():
    return {
        "message": "ProShift Parcel Delivery API is running 🚚",
        "version": settings.version,
        "status": "running",
        "docs": "/docs",
        "api": "/api/v1"
    }

@app.get("/health")
async def health_check(db: Database = Depends(get_db)):
    try:
        db.command("ping")
        database = "connected"
    except PyMongoError as e:
        logger.error(f"❌ Health check ping failed: {e}")
        database = "unavailable"

    return {
        "status": "healthy" if database == "connected" else "degraded",
        "version": settings.version,
        "app": settings.app_name,
        "database": database,
        "environment": "production" if not settings.debug else "development"
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "proshift.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
