"""Finalize Video use case.

Merges the uploaded chunks of a video in order, publishes the result
(served locally or pushed to remote hosting with an optional caption) and
records the playable URL on the owning doctor.
"""

import logging
from pathlib import Path
from typing import Optional

from ...adapters.storage.local_video_store import LocalVideoStore
from ...core.exceptions import DocIntroException
from ...core.video_locks import VideoLockRegistry
from ...domain.entities.doctor import Doctor
from ...domain.errors import FinalizeFailedError
from ...domain.value_objects.video_id import VideoId
from ...observability.audit import audit_log_event
from ..dto.doctor_dto import FinalizeVideoResponse
from ..ports.repositories.doctor_repo import DoctorRepository
from ..ports.services.video_hosting_service import CaptionRenderer, VideoHostingService

logger = logging.getLogger("docintro")


class FinalizeVideoUseCase:
    """Use case for collapsing a video's chunks into one playable artifact."""

    def __init__(
        self,
        doctor_repository: DoctorRepository,
        local_store: LocalVideoStore,
        locks: VideoLockRegistry,
        back_end_url: str,
        hosting_service: Optional[VideoHostingService] = None,
        caption_renderer: Optional[CaptionRenderer] = None,
    ):
        self._doctor_repository = doctor_repository
        self._local_store = local_store
        self._locks = locks
        self._back_end_url = back_end_url
        self._hosting_service = hosting_service
        self._caption_renderer = caption_renderer

    async def execute(self, video_id: str) -> FinalizeVideoResponse:
        video_id = VideoId(video_id).value

        async with self._locks.hold(video_id):
            # Owner first: a failed lookup must not leave a merged file behind
            owner = await self._doctor_repository.find_by_video_id(video_id)
            merged = await self._local_store.merge_chunks(video_id)

            if self._hosting_service is None:
                video_url = self._local_store.public_url(self._back_end_url, video_id)
                file_path = str(merged.path)
            else:
                video_url = await self._publish_remote(video_id, merged.path, owner)
                file_path = None

            if owner is not None:
                await self._doctor_repository.set_video_url(video_id, video_url)
            else:
                logger.warning(f"Finalized video {video_id} has no owning doctor")

            await self._local_store.delete_files(merged.chunks)

        logger.info(f"Video {video_id} finalized from {len(merged.chunks)} chunk(s): {video_url}")
        audit_log_event(
            event="video.finalized",
            doctor_id=owner.id if owner else None,
            video_id=video_id,
            payload={"chunks": len(merged.chunks), "size": merged.size, "remote": file_path is None},
        )
        return FinalizeVideoResponse(
            video_id=video_id,
            video_url=video_url,
            file_path=file_path,
            chunk_count=len(merged.chunks),
            size=merged.size,
        )

    async def _publish_remote(self, video_id: str, merged_path: Path, owner: Optional[Doctor]) -> str:
        caption = owner.name if owner else None
        upload_path = merged_path
        try:
            if caption and self._caption_renderer is not None:
                upload_path = await self._caption_renderer.render_caption(merged_path, caption)
            return await self._hosting_service.upload_video(upload_path, video_id, caption=caption)
        except DocIntroException as e:
            logger.error(f"Publishing video {video_id} failed: {e.message}")
            raise FinalizeFailedError(video_id, e.message) from e
        finally:
            # Chunks stay on disk until success, so the merged file can always be rebuilt
            await self._local_store.delete_files(list({merged_path, upload_path}))
