from urllib.parse import quote

from mediguide_relay.settings import Settings

from .exceptions import RelayConfigurationError
from .upstream import UpstreamResponse, send

# Characters encodeURIComponent leaves untouched besides alphanumerics and "-_.~"
_URI_COMPONENT_SAFE = "!*'()"


class PlacesClient:
    """Client for the Google Places text-search API."""

    SERVICE = "places"

    def __init__(self, settings: Settings):
        self._base_url = settings.places_text_search_url
        self._api_key = settings.google_api_key
        self._timeout = settings.upstream_timeout

    def build_url(self, query: str) -> str:
        """Build the text-search URL with the query and key percent-encoded."""
        if not self._api_key:
            raise RelayConfigurationError("GOOGLE_API_KEY is not set")
        encoded_query = quote(query, safe=_URI_COMPONENT_SAFE)
        encoded_key = quote(self._api_key, safe=_URI_COMPONENT_SAFE)
        return f"{self._base_url}?query={encoded_query}&key={encoded_key}"

    async def text_search(self, query: str) -> UpstreamResponse:
        """Run a text search and return the upstream answer unchanged."""
        url = self.build_url(query)
        return await send(self.SERVICE, "GET", url, self._timeout)
