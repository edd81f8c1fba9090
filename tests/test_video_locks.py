"""
Per-video lock registry tests.
"""

import asyncio

from docintro.core.video_locks import VideoLockRegistry


def test_same_video_is_serialized():
    registry = VideoLockRegistry()
    events = []

    async def worker(name):
        async with registry.hold("v"):
            events.append(f"{name}-start")
            await asyncio.sleep(0.01)
            events.append(f"{name}-end")

    async def main():
        await asyncio.gather(worker("a"), worker("b"))

    asyncio.run(main())

    assert events == ["a-start", "a-end", "b-start", "b-end"]
    assert len(registry) == 0


def test_different_videos_run_concurrently():
    registry = VideoLockRegistry()
    events = []

    async def worker(video_id):
        async with registry.hold(video_id):
            events.append(f"{video_id}-start")
            await asyncio.sleep(0.01)
            events.append(f"{video_id}-end")

    async def main():
        await asyncio.gather(worker("x"), worker("y"))

    asyncio.run(main())

    assert events[:2] == ["x-start", "y-start"]


def test_entry_released_after_error():
    registry = VideoLockRegistry()

    async def main():
        try:
            async with registry.hold("v"):
                assert registry.is_locked("v")
                raise RuntimeError("boom")
        except RuntimeError:
            pass

    asyncio.run(main())

    assert not registry.is_locked("v")
    assert len(registry) == 0
