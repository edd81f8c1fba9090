"""
Service container for DocIntro application.

One container is built per application (in the lifespan, or by a test) and
kept on ``app.state.services``. Routers reach it through ``api.deps``.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from .config import Settings
from .video_locks import VideoLockRegistry


@dataclass
class ServiceContainer:
    """Handles shared by every request of one application instance."""

    settings: Settings
    doctor_repository: Any
    local_store: Any
    email_service: Any
    hosting_service: Optional[Any] = None
    caption_renderer: Optional[Any] = None
    locks: VideoLockRegistry = field(default_factory=VideoLockRegistry)
    mongo_client: Optional[Any] = None

    @property
    def storage_mode(self) -> str:
        return "azure" if self.hosting_service is not None else "local"

    @property
    def max_chunk_bytes(self) -> int:
        return self.settings.video.max_chunk_size_mb * 1024 * 1024

    def close(self) -> None:
        if self.mongo_client is not None:
            self.mongo_client.close()
            self.mongo_client = None


def build_service_container(settings: Settings, mongo_client: Optional[Any] = None) -> ServiceContainer:
    """Build the production container from settings.

    Beanie must already be initialized when the repository is used.
    """
    from ..adapters.db.mongo.repositories.doctor_repository import MongoDoctorRepository
    from ..adapters.external.email_service_sendgrid import SendGridEmailService
    from ..adapters.storage.local_video_store import LocalVideoStore

    video = settings.video
    local_store = LocalVideoStore(
        settings.video_root,
        chunk_extension=video.chunk_extension,
        final_filename=video.final_filename,
    )

    hosting_service = None
    caption_renderer = None
    if video.storage_mode == "azure":
        from ..adapters.storage.azure_blob_service import AzureVideoHostingService

        hosting_service = AzureVideoHostingService(
            settings.azure_blob,
            extension=Path(video.final_filename).suffix or video.chunk_extension,
        )
        if video.caption_overlay:
            from ..adapters.external.caption_overlay_ffmpeg import FfmpegCaptionRenderer

            caption_renderer = FfmpegCaptionRenderer(ffmpeg_path=video.ffmpeg_path)

    return ServiceContainer(
        settings=settings,
        doctor_repository=MongoDoctorRepository(),
        local_store=local_store,
        email_service=SendGridEmailService(settings.sendgrid),
        hosting_service=hosting_service,
        caption_renderer=caption_renderer,
        mongo_client=mongo_client,
    )
