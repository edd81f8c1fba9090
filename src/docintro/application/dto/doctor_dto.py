"""Doctor and video DTOs passed between the API layer and use cases."""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class CreateDoctorRequest:
    """Request DTO for creating a doctor."""

    name: str
    email: str
    designation: Optional[str] = None
    degree: Optional[str] = None
    mobile: Optional[str] = None


@dataclass
class UploadChunkRequest:
    """Request DTO for one uploaded video chunk."""

    video_id: str
    data: bytes
    filename: Optional[str] = None
    sequence: Optional[int] = None


@dataclass
class UploadChunkResponse:
    """Response DTO for a stored chunk."""

    video_id: str
    sequence: int
    filename: str
    size: int
    message: str = "Video chunk uploaded successfully"


@dataclass
class FinalizeVideoResponse:
    """Response DTO for a finalized video."""

    video_id: str
    video_url: str
    file_path: Optional[str] = None
    chunk_count: int = 0
    size: int = 0
    message: str = "Video file created successfully"


@dataclass
class DeleteVideoResponse:
    """Response DTO for video artifact cleanup."""

    video_id: str
    removed_files: List[str] = field(default_factory=list)
    remote_deleted: bool = False
    message: str = "All video files deleted successfully"
