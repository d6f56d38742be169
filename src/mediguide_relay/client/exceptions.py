class MediBotClientError(Exception):
    """Base exception for MediBot client errors."""

    pass


class MediBotAPIError(MediBotClientError):
    """The relay answered with a non-2xx status."""

    def __init__(self, status_code: int, error: str | None, message: str | None):
        self.status_code = status_code
        self.error = error
        self.message = message
        super().__init__(f"Relay returned {status_code}: {error or ''} {message or ''}".strip())


class MediBotResponseError(MediBotClientError):
    """The model answered in an unexpected format."""

    pass
