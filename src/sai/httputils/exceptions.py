from typing import Any

from sai.httputils.protocol import reason_phrase


class SaiHttpError(Exception):
    """Base class for errors raised while processing HTTP requests and responses."""
    pass


class ArgumentError(SaiHttpError, ValueError):
    """Raised when a mandatory argument is missing. Always raised before any
    network activity takes place."""
    pass


class TransportError(SaiHttpError):
    """Raised when the underlying transport fails (refused connection, remote
    disconnect, truncated body, etc.). The original `requests` exception is
    available as `__cause__`."""
    pass


class RequestError(SaiHttpError):
    """Raised when a request that requires success gets an unsuccessful HTTP
    response."""
    def __init__(self, response: Any, *args):
        super().__init__(*args)

        self.response = response
        """The response (live or closed) from the failed request."""

        self.status_code: int = response.status_code
        """The numeric HTTP status code (e.g., 404) for the failed request."""

        self.reason: str = reason_phrase(self.status_code, response.reason)
        """The reason phrase (e.g., "Not Found") for the failed request. If the
        `response` does not have one, the standard phrase from `HTTPStatus`
        is used."""

    def __str__(self):
        return f'{self.status_code} {self.reason}'


class NotFoundError(RequestError):
    """Raised when a required resource cannot be found (HTTP 404)."""
    pass


class ContentValidationError(SaiHttpError):
    """Raised when a successful response does not declare an RDF content type."""
    pass


class ConversionError(SaiHttpError):
    """Raised when a URL, URI, or message body cannot be converted to the
    requested form."""
    pass
