"""
FastAPI router relaying MediGuide client requests to Google.
"""

import json
import logging
from collections.abc import Awaitable

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from ..integrations.google import (
    GeminiClient,
    PlacesClient,
    RelayConfigurationError,
    RelayError,
    UpstreamResponse,
)
from ..models import ErrorResponse
from ..settings import Settings
from .disconnect import ClientDisconnectedError, run_until_disconnected

logger = logging.getLogger(__name__)

router = APIRouter(tags=["relay"])

CLIENT_CLOSED_REQUEST = 499


def get_relay_settings(request: Request) -> Settings:
    """Dependency returning the settings the app was created with."""
    return request.app.state.settings


def get_places_client(settings: Settings = Depends(get_relay_settings)) -> PlacesClient:
    """Dependency to get the Places client."""
    return PlacesClient(settings)


def get_gemini_client(settings: Settings = Depends(get_relay_settings)) -> GeminiClient:
    """Dependency to get the Gemini client."""
    return GeminiClient(settings)


def error_response(status_code: int, error: str, message: str) -> JSONResponse:
    body = ErrorResponse(error=error, message=message)
    return JSONResponse(status_code=status_code, content=body.model_dump())


async def relay(
    request: Request,
    upstream_call: Awaitable[UpstreamResponse],
    settings: Settings,
) -> JSONResponse:
    """Run an upstream call and mirror its status and body.

    Failures are answered with a fixed message per error kind; the raw
    exception is only logged.
    """
    path = request.url.path
    try:
        upstream = await run_until_disconnected(
            request, upstream_call, settings.disconnect_poll_interval
        )
    except ClientDisconnectedError:
        return error_response(
            CLIENT_CLOSED_REQUEST,
            "Client Closed Request",
            "Client disconnected before the upstream answered",
        )
    except RelayConfigurationError as e:
        logger.error(f"{path}: relay is not configured: {e}")
        return error_response(e.status_code, e.error, e.public_message)
    except RelayError as e:
        logger.error(f"{path}: upstream call failed: {e!r}", exc_info=e.__cause__)
        return error_response(e.status_code, e.error, e.public_message)
    except Exception as e:
        logger.exception(f"{path}: unexpected error while relaying: {e}")
        return error_response(500, RelayError.error, RelayError.public_message)

    return JSONResponse(status_code=upstream.status_code, content=upstream.payload)


@router.get("/google")
async def relay_places_search(
    request: Request,
    query: str = Query(..., min_length=1, description="Free-text Places query"),
    settings: Settings = Depends(get_relay_settings),
    client: PlacesClient = Depends(get_places_client),
):
    """Relay a Places text search, attaching the server-side key."""
    return await relay(request, client.text_search(query), settings)


@router.post("/gemini")
async def relay_gemini_generate(
    request: Request,
    settings: Settings = Depends(get_relay_settings),
    client: GeminiClient = Depends(get_gemini_client),
):
    """Relay a generateContent request body unmodified."""
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.warning(f"/gemini: request body is not JSON: {e}")
        return error_response(400, "Bad Request", "Request body must be valid JSON")

    return await relay(request, client.generate_content(payload), settings)
