"""Client exception hierarchy

The board catches ClientError at each call site; nothing here is retried.
"""


class ClientError(Exception):
    """Base class for API client failures"""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ApiError(ClientError):
    """The gateway answered with a non-2xx status"""

    def __init__(self, status_code: int, error: str, message: str) -> None:
        """
        Args:
            status_code: HTTP status code
            error: short error label from the response body
            message: human-readable detail from the response body
        """
        super().__init__(f"{status_code} {error}: {message}")
        self.status_code = status_code
        self.error = error
        self.detail = message


class ApiTransportError(ClientError):
    """The gateway could not be reached (connection failure, timeout, DNS)"""

    def __init__(self, base_url: str, original_error: Exception) -> None:
        super().__init__(f"Task API unreachable: {base_url} -- {original_error}")
        self.base_url = base_url
        self.original_error = original_error


class ApiResponseError(ClientError):
    """A 2xx response whose body is not JSON or does not match the record schema

    Typically TASKBOARD_API_URL points at something other than the gateway.
    """

    def __init__(self, path: str, original_error: Exception) -> None:
        super().__init__(f"Unexpected response from {path}: {original_error}")
        self.path = path
        self.original_error = original_error
