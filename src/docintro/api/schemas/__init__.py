"""
API schemas for request/response models.
"""

from .common import ErrorResponse, MessageResponse
from .doctor import DoctorPayload, DoctorResponse
from .video import ChunkUploadResponse, DeleteVideoResponse, FinalizeResponse

__all__ = [
    "ErrorResponse",
    "MessageResponse",
    "DoctorPayload",
    "DoctorResponse",
    "ChunkUploadResponse",
    "DeleteVideoResponse",
    "FinalizeResponse",
]
