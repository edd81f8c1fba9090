"""
Video ID value object for type-safe video identification.
Format: UUID4 string for generated ids; any 1-100 char ``[A-Za-z0-9_-]`` token is accepted.
"""

import re
import uuid
from dataclasses import dataclass
from typing import Any

from ..errors import InvalidVideoIdError

_VIDEO_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,100}$")


@dataclass(frozen=True)
class VideoId:
    """Immutable video identifier value object.

    The value doubles as a directory name and blob key, so anything that
    could escape the video root (dots, slashes) is rejected.
    """

    value: str

    def __post_init__(self) -> None:
        """Validate video ID format."""
        if not isinstance(self.value, str) or not _VIDEO_ID_PATTERN.fullmatch(self.value):
            raise InvalidVideoIdError(str(self.value))

    def __str__(self) -> str:
        """String representation."""
        return self.value

    def __eq__(self, other: Any) -> bool:
        """Equality comparison."""
        if not isinstance(other, VideoId):
            return False
        return self.value == other.value

    def __hash__(self) -> int:
        """Hash for use in sets and dictionaries."""
        return hash(self.value)

    @classmethod
    def generate(cls) -> "VideoId":
        """Generate a new video ID."""
        return cls(str(uuid.uuid4()))
