"""
Domain-specific error types for business rule violations.
"""

from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base domain error."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class InvalidDoctorDataError(DomainError):
    """Invalid doctor data."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message, "INVALID_DOCTOR_DATA", {"field": field})


class DoctorNotFoundError(DomainError):
    """Doctor not found."""

    def __init__(self, doctor_id: str) -> None:
        message = f"Doctor with ID '{doctor_id}' not found"
        super().__init__(message, "DOCTOR_NOT_FOUND", {"doctor_id": doctor_id})


class InvalidVideoIdError(DomainError):
    """Video identifier is not a safe directory name."""

    def __init__(self, video_id: str) -> None:
        message = "Video ID must be 1-100 characters of letters, digits, '-' or '_'"
        super().__init__(message, "INVALID_VIDEO_ID", {"video_id": video_id[:100]})


class ChunkTooLargeError(DomainError):
    """Uploaded chunk exceeds the configured size limit."""

    def __init__(self, size: int, max_size: int) -> None:
        message = f"Video chunk too large: {size} bytes (max {max_size} bytes)"
        super().__init__(message, "CHUNK_TOO_LARGE", {"size": size, "max_size": max_size})


class NoChunksError(DomainError):
    """Finalize requested for a video without any chunks."""

    def __init__(self, video_id: str) -> None:
        super().__init__("No video chunks found", "NO_CHUNKS", {"video_id": video_id})


class FinalizeFailedError(DomainError):
    """Merging, rendering or uploading the final video failed."""

    def __init__(self, video_id: str, reason: str) -> None:
        message = f"Failed to finalize video: {reason}"
        super().__init__(message, "FINALIZE_FAILED", {"video_id": video_id, "error": reason})
