"""
Recorded video endpoints: chunk upload, finalize and artifact cleanup.

The browser records with MediaRecorder and posts each fragment to
``/upload/{video_id}`` as the multipart field ``video``; ``/finishUpload``
merges them once recording stops.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from ...application.dto.doctor_dto import UploadChunkRequest
from ...application.use_cases.delete_video import DeleteVideoUseCase
from ...application.use_cases.finalize_video import FinalizeVideoUseCase
from ...application.use_cases.upload_video_chunk import UploadVideoChunkUseCase
from ...domain.errors import DomainError
from ..deps import get_delete_video_use_case, get_finalize_video_use_case, get_upload_chunk_use_case
from ..errors import ServerError
from ..schemas.common import ErrorResponse
from ..schemas.video import ChunkUploadResponse, DeleteVideoResponse, FinalizeResponse

router = APIRouter(tags=["Videos"])
logger = logging.getLogger("docintro")


@router.post(
    "/upload/{video_id}",
    response_model=ChunkUploadResponse,
    summary="Append one recorded chunk",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid video id or missing file"},
        413: {"model": ErrorResponse, "description": "Chunk too large"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
)
async def upload_chunk(
    video_id: str,
    use_case: Annotated[UploadVideoChunkUseCase, Depends(get_upload_chunk_use_case)],
    video: UploadFile = File(..., description="One MediaRecorder chunk"),
    sequence: Optional[int] = Form(None, ge=0, le=999_999, description="Explicit chunk index (retries)"),
):
    try:
        use_case.check_size(video.size)
        data = await video.read()
        result = await use_case.execute(
            UploadChunkRequest(video_id=video_id, data=data, filename=video.filename, sequence=sequence)
        )
    except DomainError:
        raise
    except Exception as e:
        logger.exception(f"Storing chunk for video {video_id} failed: {e}")
        raise ServerError(e) from e
    finally:
        await video.close()

    return ChunkUploadResponse(
        message=result.message,
        video_id=result.video_id,
        sequence=result.sequence,
        size=result.size,
    )


@router.post(
    "/finishUpload/{video_id}",
    response_model=FinalizeResponse,
    summary="Merge uploaded chunks into the final video",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid video id or no chunks"},
        500: {"model": ErrorResponse, "description": "Finalize failed"},
    },
)
async def finish_upload(
    video_id: str,
    use_case: Annotated[FinalizeVideoUseCase, Depends(get_finalize_video_use_case)],
):
    try:
        result = await use_case.execute(video_id)
    except DomainError:
        raise
    except Exception as e:
        logger.exception(f"Finalizing video {video_id} failed: {e}")
        raise ServerError(e) from e

    return FinalizeResponse(
        message=result.message,
        video_id=result.video_id,
        video_url=result.video_url,
        file_path=result.file_path,
        chunk_count=result.chunk_count,
        size=result.size,
    )


@router.delete(
    "/deleteVideo/{video_id}",
    response_model=DeleteVideoResponse,
    summary="Delete every artifact of a video",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid video id"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
)
async def delete_video(
    video_id: str,
    use_case: Annotated[DeleteVideoUseCase, Depends(get_delete_video_use_case)],
):
    try:
        result = await use_case.execute(video_id)
    except DomainError:
        raise
    except Exception as e:
        logger.exception(f"Deleting video {video_id} failed: {e}")
        raise ServerError(e) from e

    return DeleteVideoResponse(
        message=result.message,
        video_id=result.video_id,
        removed_files=result.removed_files,
        remote_deleted=result.remote_deleted,
    )
