"""
Value objects package for domain layer.
"""

from .video_id import VideoId

__all__ = [
    "VideoId",
]
