import json
from typing import Any

from mediguide_relay.settings import Settings

from .exceptions import RelayConfigurationError
from .upstream import UpstreamResponse, send


class GeminiClient:
    """Client for the Generative Language ``generateContent`` endpoint."""

    SERVICE = "gemini"

    def __init__(self, settings: Settings):
        self._base_url = settings.gemini_api_base_url.rstrip("/")
        self._model = settings.gemini_model
        self._api_key = settings.google_api_key
        self._timeout = settings.upstream_timeout

    def build_url(self) -> str:
        return f"{self._base_url}/models/{self._model}:generateContent"

    async def generate_content(self, payload: Any) -> UpstreamResponse:
        """Forward an opaque generateContent payload.

        The payload is not inspected; it is re-serialized as the JSON body of
        the upstream request.
        """
        if not self._api_key:
            raise RelayConfigurationError("GOOGLE_API_KEY is not set")
        return await send(
            self.SERVICE,
            "POST",
            self.build_url(),
            self._timeout,
            params={"key": self._api_key},
            content=json.dumps(payload).encode("utf-8"),
            headers={"Content-Type": "application/json"},
        )
