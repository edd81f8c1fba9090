"""
Remote video hosting and caption rendering interfaces.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional


class VideoHostingService(ABC):
    """Abstract remote store for finalized videos, keyed by video_id."""

    @abstractmethod
    async def upload_video(self, file_path: Path, video_id: str, caption: Optional[str] = None) -> str:
        """
        Upload a finalized video and return its playable URL.

        Args:
            file_path: Local path of the merged video
            video_id: Key the remote copy is stored under
            caption: Display text recorded with the upload

        Raises:
            BlobStorageError: if the upload fails
        """
        pass

    @abstractmethod
    async def delete_video(self, video_id: str) -> bool:
        """Delete the remote copy. Returns False when nothing was stored."""
        pass

    @abstractmethod
    async def get_video_url(self, video_id: str) -> Optional[str]:
        """Return the playable URL when a remote copy exists, else None."""
        pass


class CaptionRenderer(ABC):
    """Abstract renderer that burns a text caption into a video."""

    @abstractmethod
    async def render_caption(self, source: Path, caption: str) -> Path:
        """
        Render ``caption`` onto ``source`` and return the path of the new file.

        Raises:
            VideoProcessingError: if rendering fails
        """
        pass
