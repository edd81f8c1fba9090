"""Update Doctor use case: partial update of the editable fields."""

from typing import Any, Dict

from ...domain.entities.doctor import Doctor, EDITABLE_FIELDS
from ...domain.errors import DoctorNotFoundError
from ...observability.audit import audit_log_event
from ..ports.repositories.doctor_repo import DoctorRepository


class UpdateDoctorUseCase:
    """Use case for updating a doctor. video_id and video_url are never touched."""

    def __init__(self, doctor_repository: DoctorRepository):
        self._doctor_repository = doctor_repository

    async def execute(self, doctor_id: str, changes: Dict[str, Any]) -> Doctor:
        editable = {key: value for key, value in changes.items() if key in EDITABLE_FIELDS}

        doctor = await self._doctor_repository.update(doctor_id, editable)
        if doctor is None:
            raise DoctorNotFoundError(doctor_id)

        audit_log_event(
            event="doctor.updated",
            doctor_id=doctor.id,
            video_id=doctor.video_id,
            payload={"fields": sorted(editable)},
        )
        return doctor
