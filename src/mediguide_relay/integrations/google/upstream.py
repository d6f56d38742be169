import asyncio
import json
import logging
import re
from dataclasses import dataclass
from typing import Any

import httpx

from .exceptions import UpstreamDecodeError, UpstreamTimeoutError, UpstreamTransportError

logger = logging.getLogger(__name__)

_KEY_PARAM = re.compile(r"(key=)[^&]*")


def redact_key(url: str) -> str:
    """Mask the API key in a URL before it reaches the logs."""
    return _KEY_PARAM.sub(r"\1***", url)


@dataclass(frozen=True)
class UpstreamResponse:
    """Status code and decoded JSON body of an upstream call."""

    status_code: int
    payload: Any


async def send(
    service: str,
    method: str,
    url: str,
    timeout: float,
    **kwargs: Any,
) -> UpstreamResponse:
    """Issue a single upstream request and decode its JSON body.

    Non-2xx responses are returned as-is; only transport, timeout and decoding
    failures raise.
    """
    logger.debug(f"{service}: {method} {redact_key(url)}")
    try:
        # httpx limits each phase separately; the deadline bounds the whole call
        async with asyncio.timeout(timeout):
            async with httpx.AsyncClient(timeout=httpx.Timeout(timeout)) as client:
                resp = await client.request(method, url, **kwargs)
    except (httpx.TimeoutException, TimeoutError) as e:
        raise UpstreamTimeoutError(service, type(e).__name__) from e
    except httpx.TransportError as e:
        raise UpstreamTransportError(service, str(e)) from e

    try:
        payload = resp.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise UpstreamDecodeError(
            service, f"status {resp.status_code}, non-JSON body"
        ) from e

    logger.info(f"{service}: upstream answered {resp.status_code}")
    return UpstreamResponse(status_code=resp.status_code, payload=payload)
