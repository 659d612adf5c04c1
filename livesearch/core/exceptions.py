class LiveSearchError(Exception):
    """Base class for every failure that ends a search run."""

    exit_code = 1


class UsageError(LiveSearchError):
    """Raised for invalid command-line flags or values."""

    exit_code = 2


class ConfigurationError(UsageError):
    """Raised when required configuration is missing or invalid."""


class HttpStatusError(LiveSearchError):
    """Raised when the API answers with a non-retriable status or retries run out."""

    exit_code = 1

    def __init__(self, status: int, request_id: str, body: str) -> None:
        self.status = status
        self.request_id = request_id
        self.body = body
        super().__init__(f"HTTP {status} (request-id={request_id}): {body}")


class TransportError(LiveSearchError):
    """Raised when every attempt failed before a response arrived."""

    exit_code = 3


class ResponseParseError(LiveSearchError):
    """Raised when the response body is not valid JSON."""

    exit_code = 4
