"""List Doctors use case with playable video URL resolution."""

import logging
from typing import List, Optional

from ...adapters.storage.local_video_store import LocalVideoStore
from ...domain.entities.doctor import Doctor
from ..ports.repositories.doctor_repo import DoctorRepository
from ..ports.services.video_hosting_service import VideoHostingService

logger = logging.getLogger("docintro")


class ListDoctorsUseCase:
    """Return all doctors, newest first, each with a resolved ``video_url``.

    The URL stored at finalize time wins. Documents without one are probed
    for a finalized artifact (remote blob in azure mode, local file
    otherwise). A failing probe only blanks that doctor's URL.
    """

    def __init__(
        self,
        doctor_repository: DoctorRepository,
        local_store: LocalVideoStore,
        back_end_url: str,
        hosting_service: Optional[VideoHostingService] = None,
    ):
        self._doctor_repository = doctor_repository
        self._local_store = local_store
        self._back_end_url = back_end_url
        self._hosting_service = hosting_service

    async def execute(self) -> List[Doctor]:
        doctors = await self._doctor_repository.find_all()
        for doctor in doctors:
            try:
                doctor.video_url = await self._resolve_video_url(doctor)
            except Exception as e:
                logger.warning(f"Could not resolve video URL for doctor {doctor.id} (video_id={doctor.video_id}): {e}")
                doctor.video_url = None
        return doctors

    async def _resolve_video_url(self, doctor: Doctor) -> Optional[str]:
        if doctor.video_url:
            return doctor.video_url
        if self._hosting_service is not None:
            return await self._hosting_service.get_video_url(doctor.video_id)
        if self._local_store.has_final_video(doctor.video_id):
            return self._local_store.public_url(self._back_end_url, doctor.video_id)
        return None
