"""Failure kinds raised by the backend gateway.

Every transport or HTTP failure is converted into exactly one of these at the
gateway boundary, so the session layer never handles httpx exceptions.
"""


class GatewayError(Exception):
    """Base class for backend gateway failures."""

    pass


class FetchError(GatewayError):
    """Raised when listing sessions or fetching a session history fails."""

    pass


class UploadError(GatewayError):
    """Raised when creating a session from an uploaded document fails."""

    pass


class QueryError(GatewayError):
    """Raised when asking a question fails."""

    pass


class DeleteError(GatewayError):
    """Raised when deleting a session fails."""

    pass
