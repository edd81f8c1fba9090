"""Doctor domain entity representing a staff member and their introduction video."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from ..enums.notification import NotificationStatus
from ..errors import InvalidDoctorDataError

EDITABLE_FIELDS = ("name", "email", "designation", "degree", "mobile")


@dataclass
class Doctor:
    """Doctor domain entity.

    Note: payload validation (required fields, email syntax) happens at the API
    layer. The entity only guards the invariants that every stored doctor must
    satisfy: a non-empty name and email, and a video_id that never changes
    once assigned.
    """

    name: str
    email: str
    video_id: str
    id: Optional[str] = None
    designation: Optional[str] = None
    degree: Optional[str] = None
    mobile: Optional[str] = None
    video_url: Optional[str] = None
    notification_status: NotificationStatus = NotificationStatus.PENDING
    notification_attempts: int = 0
    notification_error: Optional[str] = None
    notified_at: Optional[datetime] = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        self._validate_doctor_data()

    def _validate_doctor_data(self) -> None:
        if not self.name or not self.name.strip():
            raise InvalidDoctorDataError("name", "Doctor name must be a non-empty string")
        if not self.email or not self.email.strip():
            raise InvalidDoctorDataError("email", "Doctor email must be a non-empty string")
        if not self.video_id:
            raise InvalidDoctorDataError("video_id", "Doctor video_id must be assigned")

    def apply_update(self, changes: Dict[str, Any]) -> None:
        """Apply a partial update restricted to the editable fields."""
        for key, value in changes.items():
            if key in EDITABLE_FIELDS:
                setattr(self, key, value)
        self._validate_doctor_data()
        self.updated_at = datetime.utcnow()

    def attach_video(self, video_url: Optional[str]) -> None:
        self.video_url = video_url
        self.updated_at = datetime.utcnow()

    def record_notification(
        self,
        status: NotificationStatus,
        attempts: int,
        error: Optional[str] = None,
    ) -> None:
        """Record the outcome of a recording-invite delivery."""
        self.notification_status = status
        self.notification_attempts = attempts
        self.notification_error = error
        if status == NotificationStatus.SENT:
            self.notified_at = datetime.utcnow()
        self.updated_at = datetime.utcnow()
