"""
Per-video mutual exclusion for chunk writes, finalize and cleanup.

Locks live in process memory, keyed by video_id. An entry is dropped as soon
as no coroutine holds or waits for it, so the registry does not grow with the
number of videos ever seen.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict


class _LockEntry:
    __slots__ = ("lock", "users")

    def __init__(self) -> None:
        self.lock = asyncio.Lock()
        self.users = 0


class VideoLockRegistry:
    """Hands out one ``asyncio.Lock`` per video_id."""

    def __init__(self) -> None:
        self._entries: Dict[str, _LockEntry] = {}

    @asynccontextmanager
    async def hold(self, video_id: str) -> AsyncIterator[None]:
        entry = self._entries.get(video_id)
        if entry is None:
            entry = self._entries[video_id] = _LockEntry()
        entry.users += 1
        try:
            async with entry.lock:
                yield
        finally:
            entry.users -= 1
            if entry.users == 0 and self._entries.get(video_id) is entry:
                del self._entries[video_id]

    def is_locked(self, video_id: str) -> bool:
        entry = self._entries.get(video_id)
        return bool(entry and entry.lock.locked())

    def __len__(self) -> int:
        return len(self._entries)
