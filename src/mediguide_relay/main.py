import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .models import ErrorResponse
from .relay import router as relay_router
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Answer invalid request parameters with the relay's error shape."""
    logger.warning(f"{request.url.path}: invalid request: {exc.errors()}")
    body = ErrorResponse(
        error="Bad Request", message="Missing or invalid request parameters"
    )
    return JSONResponse(status_code=422, content=body.model_dump())


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the relay application around an immutable settings object."""
    settings = settings or get_settings()

    app = FastAPI(title="MediGuide Relay", version=__version__)
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    # Include routers
    app.include_router(relay_router)

    @app.get("/health")
    async def health_check():
        """Liveness probe for the hosting platform."""
        return {"status": "ok"}

    return app


app = create_app()


def main():
    """Main entry point for the relay server."""
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    if not settings.google_api_key:
        logger.warning("GOOGLE_API_KEY is not set; relay routes will answer 503")

    logger.info(f"Server running on port {settings.port}")
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
