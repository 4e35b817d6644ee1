"""Errors raised by the Climate FieldView client."""


class ClimateError(Exception):
    """Base class for all handled client errors."""

    pass


class AuthenticationError(ClimateError):
    """HTTP 401 - the API key was rejected."""

    pass


class PermissionDeniedError(ClimateError):
    """HTTP 403 - the API key lacks access to the resource."""

    pass


class NotFoundError(ClimateError):
    """HTTP 404."""

    pass


class RateLimitError(ClimateError):
    """HTTP 429."""

    pass


class ApiError(ClimateError):
    """Any other non-2xx response."""

    def __init__(self, status: int, message: str, body: object = None):
        self.status = status
        self.body = body
        super().__init__(f"API Error ({status}): {message}")


class NetworkError(ClimateError):
    """The request was sent but no response came back."""

    pass


class ConfigurationError(ClimateError):
    """Local configuration is missing or unreadable."""

    pass
