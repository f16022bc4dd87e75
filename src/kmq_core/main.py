"""KMQ FastAPI application entry point."""
import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from .api.routes import router as api_router
from .exceptions import KMQError


logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

logger = logging.getLogger(__name__)


async def handle_kmq_error(request: Request, exc: KMQError) -> JSONResponse:
    """Serve adapter configuration errors as 500 with the error type."""
    logger.error("%s on %s: %s", type(exc).__name__, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": str(exc), "error": type(exc).__name__},
    )


def create_app() -> FastAPI:
    """Build the translation API with adapter error handling."""
    app = FastAPI(
        title="KMQ API",
        version="0.1.0",
        description="Canonical analytics call translation for the KISSmetrics _kmq queue",
    )
    app.add_exception_handler(KMQError, handle_kmq_error)
    app.include_router(api_router)
    return app


app = create_app()
