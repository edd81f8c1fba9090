"""MongoDB Beanie model for Doctor documents."""

from datetime import datetime
from typing import Optional

from beanie import Document, Indexed
from pydantic import Field

from docintro.domain.enums.notification import NotificationStatus


class DoctorMongo(Document):
    """MongoDB model for Doctor entity."""

    name: str = Field(..., description="Doctor display name")
    email: str = Field(..., description="Doctor email address (recording invite recipient)")
    designation: Optional[str] = Field(None, description="Job title")
    degree: Optional[str] = Field(None, description="Academic degree")
    mobile: Optional[str] = Field(None, description="Contact number")
    video_id: Indexed(str, unique=True) = Field(..., description="Opaque key for chunk and video artifacts")
    video_url: Optional[str] = Field(None, description="Playable URL of the finalized video")
    notification_status: NotificationStatus = Field(default=NotificationStatus.PENDING)
    notification_attempts: int = Field(default=0)
    notification_error: Optional[str] = Field(None, description="Last invite delivery error")
    notified_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "doctors"
        indexes = [
            "created_at",
        ]
