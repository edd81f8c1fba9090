"""
Doctor repository interface for data access abstraction.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from ....domain.entities.doctor import Doctor
from ....domain.enums.notification import NotificationStatus


class DoctorRepository(ABC):
    """Abstract repository for doctor data access."""

    @abstractmethod
    async def add(self, doctor: Doctor) -> Doctor:
        """Insert a new doctor and return it with its store-assigned id."""
        pass

    @abstractmethod
    async def find_by_id(self, doctor_id: str) -> Optional[Doctor]:
        """Find a doctor by id. Malformed ids behave like missing ones."""
        pass

    @abstractmethod
    async def find_by_video_id(self, video_id: str) -> Optional[Doctor]:
        """Find the doctor owning a video."""
        pass

    @abstractmethod
    async def find_all(self) -> List[Doctor]:
        """Return all doctors, newest first."""
        pass

    @abstractmethod
    async def update(self, doctor_id: str, changes: Dict[str, Any]) -> Optional[Doctor]:
        """Apply a partial update and return the updated doctor, or None if missing."""
        pass

    @abstractmethod
    async def delete(self, doctor_id: str) -> Optional[Doctor]:
        """Delete a doctor and return the removed record, or None if missing."""
        pass

    @abstractmethod
    async def set_video_url(self, video_id: str, video_url: Optional[str]) -> Optional[Doctor]:
        """Store (or clear) the playable URL on the doctor owning video_id."""
        pass

    @abstractmethod
    async def record_notification(
        self,
        doctor_id: str,
        status: NotificationStatus,
        attempts: int,
        error: Optional[str] = None,
    ) -> None:
        """Persist the outcome of a recording-invite delivery."""
        pass
