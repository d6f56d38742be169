from pydantic import Field

from .base import BaseRelayModel


class Place(BaseRelayModel):
    """A single Places text-search result."""

    name: str
    formatted_address: str | None = None
    place_id: str | None = None
    rating: float | None = None
    user_ratings_total: int | None = None
    business_status: str | None = None
    types: list[str] = Field(default_factory=list)


class PlacesSearchResult(BaseRelayModel):
    """Places text-search response as forwarded by the relay."""

    status: str = Field(description="Places status code, e.g. 'OK' or 'REQUEST_DENIED'")
    results: list[Place] = Field(default_factory=list)
    error_message: str | None = None

    @property
    def ok(self) -> bool:
        return self.status in ("OK", "ZERO_RESULTS")
