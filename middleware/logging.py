import logging
import time

from fastapi import FastAPI, Request

logger = logging.getLogger(__name__)


def register_request_logging(app: FastAPI) -> None:
    """Log every request with its outcome and timing."""

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        client = request.client.host if request.client else "unknown"
        logger.info("Processing request: %s %s from %s", request.method, request.url.path, client)

        start = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - start

        response.headers["X-Process-Time"] = f"{elapsed:.4f}"
        logger.info(
            "Completed request: %s %s for user %s with status %d in %.0fms",
            request.method,
            request.url.path,
            getattr(request.state, "user_id", "anonymous"),
            response.status_code,
            elapsed * 1000,
        )
        return response
