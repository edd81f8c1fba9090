"""
Doctor request/response schemas.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.networks import validate_email

from ...domain.entities.doctor import Doctor, EDITABLE_FIELDS
from ...domain.enums.notification import NotificationStatus


class DoctorPayload(BaseModel):
    """Body of create and update requests.

    Unknown fields are accepted but never stored. Name and email are
    validated but kept exactly as sent.
    """

    model_config = ConfigDict(extra="allow")

    name: str = Field(..., max_length=200, description="Doctor display name")
    email: str = Field(..., max_length=320, description="Address the recording link is sent to")
    designation: Optional[str] = Field(None, max_length=200, description="Job title")
    degree: Optional[str] = Field(None, max_length=200, description="Academic degree")
    mobile: Optional[str] = Field(None, max_length=32, description="Contact number")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("name is not allowed to be empty")
        return v

    @field_validator("email")
    @classmethod
    def validate_email_address(cls, v: str) -> str:
        validate_email(v)
        return v

    def editable_changes(self) -> Dict[str, Any]:
        """Editable fields present in the request body."""
        return {key: getattr(self, key) for key in EDITABLE_FIELDS if key in self.model_fields_set}


class DoctorResponse(BaseModel):
    """Doctor as returned by the API."""

    id: str
    name: str
    designation: Optional[str] = None
    degree: Optional[str] = None
    mobile: Optional[str] = None
    email: str
    video_id: str
    video_url: Optional[str] = None
    notification_status: NotificationStatus = NotificationStatus.PENDING
    notification_attempts: int = 0
    notification_error: Optional[str] = None
    notified_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, doctor: Doctor) -> "DoctorResponse":
        return cls(
            id=doctor.id,
            name=doctor.name,
            designation=doctor.designation,
            degree=doctor.degree,
            mobile=doctor.mobile,
            email=doctor.email,
            video_id=doctor.video_id,
            video_url=doctor.video_url,
            notification_status=doctor.notification_status,
            notification_attempts=doctor.notification_attempts,
            notification_error=doctor.notification_error,
            notified_at=doctor.notified_at,
            created_at=doctor.created_at,
            updated_at=doctor.updated_at,
        )
