"""
Google upstream clients.

Thin async wrappers over the Places text-search and Generative Language
``generateContent`` endpoints. Both attach the server-held API key and hand
back the upstream status and JSON body without interpreting them.
"""

from .exceptions import (
    RelayConfigurationError,
    RelayError,
    UpstreamDecodeError,
    UpstreamError,
    UpstreamTimeoutError,
    UpstreamTransportError,
)
from .gemini_client import GeminiClient
from .places_client import PlacesClient
from .upstream import UpstreamResponse

__all__ = [
    "GeminiClient",
    "PlacesClient",
    "RelayConfigurationError",
    "RelayError",
    "UpstreamDecodeError",
    "UpstreamError",
    "UpstreamResponse",
    "UpstreamTimeoutError",
    "UpstreamTransportError",
]
