"""Delete Video use case: idempotent removal of a video's artifacts."""

import logging
from typing import Optional

from ...adapters.storage.local_video_store import LocalVideoStore
from ...core.exceptions import DocIntroException
from ...core.video_locks import VideoLockRegistry
from ...domain.value_objects.video_id import VideoId
from ...observability.audit import audit_log_event
from ..dto.doctor_dto import DeleteVideoResponse
from ..ports.repositories.doctor_repo import DoctorRepository
from ..ports.services.video_hosting_service import VideoHostingService

logger = logging.getLogger("docintro")


class DeleteVideoUseCase:
    """Remove the local directory and any remote copy of a video.

    A missing directory or blob is a successful no-op. Local filesystem
    errors propagate; remote deletion failures are logged only.
    """

    def __init__(
        self,
        doctor_repository: DoctorRepository,
        local_store: LocalVideoStore,
        locks: VideoLockRegistry,
        hosting_service: Optional[VideoHostingService] = None,
    ):
        self._doctor_repository = doctor_repository
        self._local_store = local_store
        self._locks = locks
        self._hosting_service = hosting_service

    async def execute(self, video_id: str, clear_owner: bool = True) -> DeleteVideoResponse:
        video_id = VideoId(video_id).value

        async with self._locks.hold(video_id):
            removed = await self._local_store.remove_video(video_id)
            remote_deleted = False
            if self._hosting_service is not None:
                try:
                    remote_deleted = await self._hosting_service.delete_video(video_id)
                except DocIntroException as e:
                    logger.warning(f"Remote copy of video {video_id} could not be deleted: {e.message}")

        if clear_owner:
            await self._doctor_repository.set_video_url(video_id, None)

        audit_log_event(
            event="video.deleted",
            video_id=video_id,
            payload={"removed_files": len(removed), "remote_deleted": remote_deleted},
        )
        return DeleteVideoResponse(video_id=video_id, removed_files=removed, remote_deleted=remote_deleted)
