"""
Local filesystem store for recorded video chunks and merged videos.

Layout::

    <root>/<video_id>/000000-1700000000000-blob.webm
    <root>/<video_id>/000001-1700000000420-blob.webm
    <root>/<video_id>/final_video.webm

Chunk names start with a zero-padded sequence index, so plain lexicographic
order is upload order. Callers serialize access per video_id.
"""

import logging
import os
import re
import shutil
import time
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from ...core.utils import ensure_directory, remove_directory_tree, run_blocking, safe_file_stem
from ...domain.errors import FinalizeFailedError, NoChunksError

logger = logging.getLogger("docintro")

SEQUENCE_PATTERN = re.compile(r"^(\d{6})-\d{13}-")
MAX_SEQUENCE = 999_999


@dataclass
class StoredChunk:
    """A chunk written to disk."""

    sequence: int
    filename: str
    size: int


@dataclass
class MergeResult:
    """Outcome of merging a video's chunks."""

    path: Path
    chunks: List[Path]
    size: int


class LocalVideoStore:
    """Chunk writer, merger and artifact cleanup over a storage directory."""

    def __init__(self, root: Path, chunk_extension: str = ".webm", final_filename: str = "final_video.webm"):
        self.root = Path(root)
        self.chunk_extension = chunk_extension
        self.final_filename = final_filename

    def video_dir(self, video_id: str) -> Path:
        return self.root / video_id

    def final_path(self, video_id: str) -> Path:
        return self.video_dir(video_id) / self.final_filename

    def has_final_video(self, video_id: str) -> bool:
        return self.final_path(video_id).is_file()

    def public_url(self, base_url: str, video_id: str) -> str:
        """URL under which the static mount serves the merged video."""
        return f"{base_url.rstrip('/')}/videos/{video_id}/{self.final_filename}"

    def list_chunks(self, video_id: str) -> List[Path]:
        """Chunk files of a video in merge order. Missing directory yields []."""
        directory = self.video_dir(video_id)
        if not directory.is_dir():
            return []
        chunks = [
            entry
            for entry in directory.iterdir()
            if entry.is_file()
            and entry.name.endswith(self.chunk_extension)
            and entry.name != self.final_filename
        ]
        return sorted(chunks, key=lambda p: p.name)

    async def write_chunk(
        self,
        video_id: str,
        data: bytes,
        original_name: Optional[str] = None,
        sequence: Optional[int] = None,
    ) -> StoredChunk:
        """Write one chunk and return where it landed."""
        return await run_blocking(self._write_chunk, video_id, data, original_name, sequence)

    async def merge_chunks(self, video_id: str) -> MergeResult:
        """Concatenate all chunks into the final file.

        Raises:
            NoChunksError: nothing to merge; no output file is created
            FinalizeFailedError: an I/O error occurred; chunks are left in place
        """
        return await run_blocking(self._merge_chunks, video_id)

    async def delete_files(self, paths: List[Path]) -> None:
        await run_blocking(self._delete_files, paths)

    async def remove_video(self, video_id: str) -> List[str]:
        """Delete the whole video directory. Returns removed file names."""
        removed = await run_blocking(remove_directory_tree, self.video_dir(video_id))
        if removed:
            logger.info(f"Removed {len(removed)} file(s) for video {video_id}")
        return removed

    def _write_chunk(
        self,
        video_id: str,
        data: bytes,
        original_name: Optional[str],
        sequence: Optional[int],
    ) -> StoredChunk:
        directory = ensure_directory(self.video_dir(video_id))

        if sequence is None:
            sequence = self._next_sequence(directory)
        else:
            self._drop_sequence(directory, sequence)
        if sequence > MAX_SEQUENCE:
            raise ValueError(f"Chunk sequence {sequence} exceeds {MAX_SEQUENCE}")

        stamp = time.time_ns() // 1_000_000
        stem = safe_file_stem(original_name or "", default="chunk")
        filename = f"{sequence:06d}-{stamp:013d}-{stem}{self.chunk_extension}"

        with open(directory / filename, "wb") as f:
            f.write(data)

        logger.debug(f"Stored chunk {filename} ({len(data)} bytes) for video {video_id}")
        return StoredChunk(sequence=sequence, filename=filename, size=len(data))

    def _next_sequence(self, directory: Path) -> int:
        highest = -1
        for entry in directory.iterdir():
            match = SEQUENCE_PATTERN.match(entry.name)
            if match:
                highest = max(highest, int(match.group(1)))
        return highest + 1

    def _drop_sequence(self, directory: Path, sequence: int) -> None:
        prefix = f"{sequence:06d}-"
        for entry in directory.iterdir():
            if entry.is_file() and entry.name.startswith(prefix) and entry.name.endswith(self.chunk_extension):
                logger.info(f"Replacing chunk {entry.name} in {directory.name}")
                entry.unlink()

    def _merge_chunks(self, video_id: str) -> MergeResult:
        chunks = self.list_chunks(video_id)
        if not chunks:
            raise NoChunksError(video_id)

        final_path = self.final_path(video_id)
        partial_path = final_path.with_name(final_path.name + ".part")
        size = 0
        try:
            with open(partial_path, "wb") as out:
                for chunk in chunks:
                    with open(chunk, "rb") as src:
                        shutil.copyfileobj(src, out)
                size = out.tell()
            os.replace(partial_path, final_path)
        except OSError as e:
            logger.error(f"Merging chunks for video {video_id} failed: {e}")
            partial_path.unlink(missing_ok=True)
            raise FinalizeFailedError(video_id, str(e)) from e

        logger.info(f"Merged {len(chunks)} chunk(s) into {final_path} ({size} bytes)")
        return MergeResult(path=final_path, chunks=chunks, size=size)

    def _delete_files(self, paths: List[Path]) -> None:
        for path in paths:
            Path(path).unlink(missing_ok=True)
