from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import time
import logging

from proshift.config.settings import settings

logger = logging.getLogger(__name__)

def setup_middleware(app: FastAPI):
    """CORS plus one log line per request, tagged with the caller when known"""

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request, call_next):
        started = time.perf_counter()

        response = await call_next(request)

        elapsed = time.perf_counter() - started
        response.headers["X-Process-Time"] = f"{elapsed:.4f}"

        caller = getattr(request.state, "identity_email", None) or "anonymous"
        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        logger.log(
            level,
            f"🌐 {request.method} {request.url.path} [{caller}] -> {response.status_code} ({elapsed:.4f}s)"
        )

        return response
