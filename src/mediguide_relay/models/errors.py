from pydantic import Field

from .base import BaseRelayModel


class ErrorResponse(BaseRelayModel):
    """JSON body returned by the relay for every failed request."""

    error: str = Field(description="Short error category, e.g. 'Server Error'")
    message: str = Field(description="Fixed, non-sensitive explanation")
