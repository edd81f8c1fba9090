"""
Exception handling for DocIntro application.

Infrastructure-level exceptions raised by configuration and external service
adapters. Business rule violations live in ``docintro.domain.errors``.
"""

from typing import Any, Dict, Optional


class DocIntroException(Exception):
    """Base exception class for DocIntro application."""

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


class ConfigurationError(DocIntroException):
    """Raised when there's a configuration error."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, "CONFIG_ERROR", details)


class ExternalServiceError(DocIntroException):
    """Raised when there's an external service error."""

    def __init__(
        self, service: str, message: str, details: Optional[Dict[str, Any]] = None
    ) -> None:
        self.service = service
        full_message = f"{service} service error: {message}"
        super().__init__(full_message, "EXTERNAL_SERVICE_ERROR", details)


class EmailDeliveryError(ExternalServiceError):
    """Raised when the email provider rejects or fails a send."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__("SendGrid", message, details)


class BlobStorageError(ExternalServiceError):
    """Raised when an Azure Blob Storage operation fails."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__("Azure Blob Storage", message, details)


class VideoProcessingError(ExternalServiceError):
    """Raised when ffmpeg fails to render a video."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__("ffmpeg", message, details)
