"""Send Recording Invite use case: email the recording link with retries."""

import asyncio
import logging
from typing import Tuple

from ...core.exceptions import EmailDeliveryError
from ...domain.entities.doctor import Doctor
from ...domain.enums.notification import NotificationStatus
from ...observability.audit import audit_log_event
from ..ports.repositories.doctor_repo import DoctorRepository
from ..ports.services.email_service import EmailService

logger = logging.getLogger("docintro")

INVITE_SUBJECT = "Record Your Introduction Video"


def build_invite_email(front_end_url: str, video_id: str) -> Tuple[str, str]:
    """Return the (subject, text) of the recording invite."""
    link = f"{front_end_url.rstrip('/')}/record/{video_id}"
    return INVITE_SUBJECT, f"Click the link to record: {link}"


class SendRecordingInviteUseCase:
    """Deliver the recording link and record the outcome on the doctor.

    Delivery is attempted up to ``max_attempts`` times with exponential
    backoff. The result is never raised to the caller; it is stored as the
    doctor's ``notification_status`` and returned.
    """

    def __init__(
        self,
        doctor_repository: DoctorRepository,
        email_service: EmailService,
        front_end_url: str,
        max_attempts: int = 3,
        retry_base_delay: float = 1.0,
    ):
        self._doctor_repository = doctor_repository
        self._email_service = email_service
        self._front_end_url = front_end_url
        self._max_attempts = max_attempts
        self._retry_base_delay = retry_base_delay

    async def execute(self, doctor: Doctor) -> NotificationStatus:
        if not self._email_service.is_configured:
            logger.warning(f"Email delivery not configured; invite for doctor {doctor.id} skipped")
            await self._doctor_repository.record_notification(
                doctor.id, NotificationStatus.SKIPPED, 0, "Email delivery is not configured"
            )
            return NotificationStatus.SKIPPED

        subject, text = build_invite_email(self._front_end_url, doctor.video_id)
        last_error = None

        for attempt in range(1, self._max_attempts + 1):
            try:
                await self._email_service.send_email(doctor.email, subject, text)
            except EmailDeliveryError as e:
                last_error = e.message
                logger.warning(
                    f"Invite for doctor {doctor.id} failed (attempt {attempt}/{self._max_attempts}): {e.message}"
                )
                if attempt < self._max_attempts:
                    await asyncio.sleep(self._retry_base_delay * (2 ** (attempt - 1)))
                continue

            await self._doctor_repository.record_notification(doctor.id, NotificationStatus.SENT, attempt)
            logger.info(f"Invite sent to doctor {doctor.id} after {attempt} attempt(s)")
            audit_log_event(event="invite.sent", doctor_id=doctor.id, video_id=doctor.video_id,
                            payload={"attempts": attempt})
            return NotificationStatus.SENT

        await self._doctor_repository.record_notification(
            doctor.id, NotificationStatus.FAILED, self._max_attempts, last_error
        )
        logger.error(f"Invite for doctor {doctor.id} failed after {self._max_attempts} attempts: {last_error}")
        audit_log_event(event="invite.failed", doctor_id=doctor.id, video_id=doctor.video_id,
                        payload={"attempts": self._max_attempts, "error": last_error})
        return NotificationStatus.FAILED
