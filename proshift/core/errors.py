import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from proshift.shared.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)

def setup_exception_handlers(app: FastAPI):
    """Database failures end the request with a JSON 500"""

    @app.exception_handler(PyMongoError)
    async def database_error_handler(request: Request, exc: PyMongoError):
        logger.error(f"❌ Database error on {request.method} {request.url.path}: {exc}")
        body = ErrorResponse(message="Database operation failed", error=str(exc))
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=jsonable_encoder(body)
        )
