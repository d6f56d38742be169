"""
Custom exceptions for the Google upstream clients.

Each exception carries the HTTP status, error category and fixed public
message the relay answers with. The original exception stays available as
``__cause__`` for server-side logging only.
"""


class RelayError(Exception):
    """Base exception for all relay errors."""

    status_code = 500
    error = "Server Error"
    public_message = "Unexpected error while relaying the request"


class RelayConfigurationError(RelayError):
    """Raised when the relay is missing configuration needed for a call."""

    status_code = 503
    error = "Service Unavailable"
    public_message = "Upstream credentials are not configured"


class UpstreamError(RelayError):
    """Base exception for failures talking to an upstream service."""

    def __init__(self, service: str, detail: str = ""):
        self.service = service
        super().__init__(f"{service}: {detail}" if detail else service)


class UpstreamTransportError(UpstreamError):
    """Raised when the upstream service cannot be reached."""

    public_message = "Upstream service is unreachable"


class UpstreamDecodeError(UpstreamError):
    """Raised when the upstream response body is not valid JSON."""

    public_message = "Upstream service returned an invalid response"


class UpstreamTimeoutError(UpstreamError):
    """Raised when the upstream service does not answer within the timeout."""

    status_code = 504
    error = "Gateway Timeout"
    public_message = "Upstream service did not respond in time"
