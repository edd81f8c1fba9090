"""Upload Video Chunk use case: append one recorded fragment."""

from typing import Optional

from ...adapters.storage.local_video_store import LocalVideoStore
from ...core.video_locks import VideoLockRegistry
from ...domain.errors import ChunkTooLargeError
from ...domain.value_objects.video_id import VideoId
from ..dto.doctor_dto import UploadChunkRequest, UploadChunkResponse


class UploadVideoChunkUseCase:
    """Store one chunk under the next (or the client-supplied) sequence index."""

    def __init__(self, local_store: LocalVideoStore, locks: VideoLockRegistry, max_chunk_bytes: int):
        self._local_store = local_store
        self._locks = locks
        self._max_chunk_bytes = max_chunk_bytes

    def check_size(self, size: Optional[int]) -> None:
        """Reject a chunk from its declared size, before its bytes are read."""
        if size is not None and size > self._max_chunk_bytes:
            raise ChunkTooLargeError(size, self._max_chunk_bytes)

    async def execute(self, request: UploadChunkRequest) -> UploadChunkResponse:
        video_id = VideoId(request.video_id).value
        self.check_size(len(request.data))

        async with self._locks.hold(video_id):
            chunk = await self._local_store.write_chunk(
                video_id, request.data, request.filename, request.sequence
            )

        return UploadChunkResponse(
            video_id=video_id,
            sequence=chunk.sequence,
            filename=chunk.filename,
            size=chunk.size,
        )
