from typing import Optional

from ..domain.errors import (
    ChunkTooLargeError,
    DoctorNotFoundError,
    DomainError,
    FinalizeFailedError,
)


class APIError(Exception):
    def __init__(self, code: str, message: str, http_status: int = 400, details: Optional[dict] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.http_status = http_status
        self.details = details


class ServiceUnavailableError(APIError):
    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__("SERVICE_UNAVAILABLE", message, 503, details)


class ServerError(APIError):
    """Unexpected failure inside a handler. The message is always "Server error"."""

    def __init__(self, error: Exception):
        super().__init__("SERVER_ERROR", "Server error", 500, {"error": str(error)})


# Domain errors that do not map to 400
_DOMAIN_ERROR_STATUS = {
    DoctorNotFoundError: 404,
    ChunkTooLargeError: 413,
    FinalizeFailedError: 500,
}


def domain_error_status(exc: DomainError) -> int:
    for error_type, status in _DOMAIN_ERROR_STATUS.items():
        if isinstance(exc, error_type):
            return status
    return 400
