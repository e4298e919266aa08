"""Client exceptions - transport, HTTP and configuration errors.

The task wrapper never raises these directly. They surface when the
awaitable returned by a task operation is awaited.
"""

# =============================================================================
# Base Exception
# =============================================================================


class NuxeoClientError(Exception):
    """Base exception for all client errors."""

    def __init__(self, message: str, details: str | None = None):
        self.message = message
        self.details = details
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.details:
            return f"{self.message}\n  Details: {self.details}"
        return self.message


# =============================================================================
# Transport Errors
# =============================================================================


class RequestTimeoutError(NuxeoClientError):
    """Raised when a request to the server times out."""

    def __init__(self, url: str, timeout: float | None):
        self.url = url
        self.timeout = timeout
        super().__init__(
            f"Request to {url} timed out",
            f"No response after {timeout} seconds." if timeout else None,
        )


class ServerConnectionError(NuxeoClientError):
    """Raised when the server cannot be reached."""

    def __init__(self, url: str, original_error: Exception):
        self.url = url
        self.original_error = original_error
        super().__init__(
            f"Failed to connect to {url}",
            f"Network error: {original_error}. Check the server URL and that it is running.",
        )


# =============================================================================
# Response Errors
# =============================================================================


class ServerHTTPError(NuxeoClientError):
    """Raised when the server answers with an HTTP error status."""

    def __init__(self, status_code: int, url: str, response_body: str | None = None):
        self.status_code = status_code
        self.url = url
        self.response_body = response_body
        error_messages = {
            400: "Bad request - the server rejected the request parameters",
            401: "Unauthorized - check the configured credentials",
            403: "Forbidden - the current user cannot act on this resource",
            404: "Not found - the task or resource does not exist",
            409: "Conflict - the resource was modified concurrently",
            500: "Server error - the document server hit an internal error",
            502: "Bad gateway - the document server may be temporarily unavailable",
            503: "Service unavailable - the document server is temporarily unavailable",
        }
        message = error_messages.get(status_code, f"HTTP error {status_code}")
        super().__init__(f"{message} ({url})", response_body or None)


class InvalidResponseError(NuxeoClientError):
    """Raised when a JSON response cannot be decoded or has the wrong shape."""

    def __init__(self, url: str, original_error: Exception):
        self.url = url
        self.original_error = original_error
        super().__init__(f"Invalid response from {url}", str(original_error))


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigError(NuxeoClientError):
    """Raised when the configuration file cannot be read or is invalid."""
