"""Delete Doctor use case: remove the record, then best-effort artifact cleanup."""

import logging

from ...domain.entities.doctor import Doctor
from ...domain.errors import DoctorNotFoundError
from ...observability.audit import audit_log_event
from ..ports.repositories.doctor_repo import DoctorRepository
from .delete_video import DeleteVideoUseCase

logger = logging.getLogger("docintro")


class DeleteDoctorUseCase:
    """Use case for deleting a doctor and the artifacts of their video."""

    def __init__(self, doctor_repository: DoctorRepository, delete_video: DeleteVideoUseCase):
        self._doctor_repository = doctor_repository
        self._delete_video = delete_video

    async def execute(self, doctor_id: str) -> Doctor:
        doctor = await self._doctor_repository.delete(doctor_id)
        if doctor is None:
            raise DoctorNotFoundError(doctor_id)

        audit_log_event(event="doctor.deleted", doctor_id=doctor.id, video_id=doctor.video_id)

        # Cleanup failures never fail the deletion itself
        try:
            await self._delete_video.execute(doctor.video_id, clear_owner=False)
        except Exception as e:
            logger.error(f"Artifact cleanup for doctor {doctor_id} (video_id={doctor.video_id}) failed: {e}")

        return doctor
