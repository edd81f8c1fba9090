"""
Video upload, finalize and cleanup response schemas.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class ChunkUploadResponse(BaseModel):
    message: str = Field(..., description="Acknowledgement")
    video_id: str
    sequence: int = Field(..., description="Index the chunk was stored under")
    size: int = Field(..., description="Chunk size in bytes")


class FinalizeResponse(BaseModel):
    message: str = Field(..., description="Acknowledgement")
    video_id: str
    video_url: str = Field(..., description="Playable URL of the merged video")
    file_path: Optional[str] = Field(None, description="Local path of the merged video (local storage only)")
    chunk_count: int = 0
    size: int = 0


class DeleteVideoResponse(BaseModel):
    message: str = Field(..., description="Acknowledgement")
    video_id: str
    removed_files: List[str] = Field(default_factory=list)
    remote_deleted: bool = False
