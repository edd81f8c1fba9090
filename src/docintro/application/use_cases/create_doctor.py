"""Create Doctor use case: persist a doctor with a fresh video_id."""

import logging

from ...domain.entities.doctor import Doctor
from ...domain.value_objects.video_id import VideoId
from ...observability.audit import audit_log_event
from ..dto.doctor_dto import CreateDoctorRequest
from ..ports.repositories.doctor_repo import DoctorRepository

logger = logging.getLogger("docintro")


class CreateDoctorUseCase:
    """Use case for creating a doctor record.

    The recording invite is scheduled by the caller after the response is
    sent (see ``SendRecordingInviteUseCase``).
    """

    def __init__(self, doctor_repository: DoctorRepository):
        self._doctor_repository = doctor_repository

    async def execute(self, request: CreateDoctorRequest) -> Doctor:
        doctor = Doctor(
            name=request.name,
            email=request.email,
            designation=request.designation,
            degree=request.degree,
            mobile=request.mobile,
            video_id=VideoId.generate().value,
        )
        doctor = await self._doctor_repository.add(doctor)

        logger.info(f"Doctor created: id={doctor.id}, video_id={doctor.video_id}")
        audit_log_event(event="doctor.created", doctor_id=doctor.id, video_id=doctor.video_id)
        return doctor
