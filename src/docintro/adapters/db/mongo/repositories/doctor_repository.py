"""
MongoDB implementation of DoctorRepository.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from beanie import PydanticObjectId
from bson import ObjectId

from docintro.application.ports.repositories.doctor_repo import DoctorRepository
from docintro.domain.entities.doctor import Doctor, EDITABLE_FIELDS
from docintro.domain.enums.notification import NotificationStatus

from ..models.doctor_m import DoctorMongo

logger = logging.getLogger("docintro")


class MongoDoctorRepository(DoctorRepository):
    """MongoDB implementation of DoctorRepository."""

    async def add(self, doctor: Doctor) -> Doctor:
        """Insert a new doctor document."""
        doctor_mongo = self._domain_to_mongo(doctor)
        await doctor_mongo.insert()
        logger.info(f"Created doctor document: {doctor_mongo.id} (video_id={doctor_mongo.video_id})")
        return self._mongo_to_domain(doctor_mongo)

    async def find_by_id(self, doctor_id: str) -> Optional[Doctor]:
        """Find a doctor by ObjectId string."""
        doctor_mongo = await self._get(doctor_id)
        return self._mongo_to_domain(doctor_mongo) if doctor_mongo else None

    async def find_by_video_id(self, video_id: str) -> Optional[Doctor]:
        """Find the doctor owning a video."""
        doctor_mongo = await DoctorMongo.find_one(DoctorMongo.video_id == video_id)
        return self._mongo_to_domain(doctor_mongo) if doctor_mongo else None

    async def find_all(self) -> List[Doctor]:
        """Return all doctors, newest first."""
        doctors_mongo = await DoctorMongo.find_all().sort(-DoctorMongo.created_at).to_list()
        return [self._mongo_to_domain(d) for d in doctors_mongo]

    async def update(self, doctor_id: str, changes: Dict[str, Any]) -> Optional[Doctor]:
        """Apply a partial update to the editable fields."""
        doctor_mongo = await self._get(doctor_id)
        if not doctor_mongo:
            return None

        # Validate through the entity before touching the store
        doctor = self._mongo_to_domain(doctor_mongo)
        doctor.apply_update(changes)

        update = {key: getattr(doctor, key) for key in EDITABLE_FIELDS if key in changes}
        update["updated_at"] = doctor.updated_at
        await doctor_mongo.set(update)
        return self._mongo_to_domain(doctor_mongo)

    async def delete(self, doctor_id: str) -> Optional[Doctor]:
        """Delete a doctor document and return what was removed."""
        doctor_mongo = await self._get(doctor_id)
        if not doctor_mongo:
            return None
        await doctor_mongo.delete()
        logger.info(f"Deleted doctor document: {doctor_id}")
        return self._mongo_to_domain(doctor_mongo)

    async def set_video_url(self, video_id: str, video_url: Optional[str]) -> Optional[Doctor]:
        """Store or clear the finalized video URL."""
        doctor_mongo = await DoctorMongo.find_one(DoctorMongo.video_id == video_id)
        if not doctor_mongo:
            return None
        await doctor_mongo.set({
            DoctorMongo.video_url: video_url,
            DoctorMongo.updated_at: datetime.utcnow(),
        })
        return self._mongo_to_domain(doctor_mongo)

    async def record_notification(
        self,
        doctor_id: str,
        status: NotificationStatus,
        attempts: int,
        error: Optional[str] = None,
    ) -> None:
        """Persist the invite delivery outcome."""
        doctor_mongo = await self._get(doctor_id)
        if not doctor_mongo:
            logger.warning(f"Doctor {doctor_id} disappeared before invite outcome could be stored")
            return

        doctor = self._mongo_to_domain(doctor_mongo)
        doctor.record_notification(status, attempts, error)
        await doctor_mongo.set({
            DoctorMongo.notification_status: doctor.notification_status,
            DoctorMongo.notification_attempts: doctor.notification_attempts,
            DoctorMongo.notification_error: doctor.notification_error,
            DoctorMongo.notified_at: doctor.notified_at,
            DoctorMongo.updated_at: doctor.updated_at,
        })

    async def _get(self, doctor_id: str) -> Optional[DoctorMongo]:
        if not ObjectId.is_valid(doctor_id):
            return None
        return await DoctorMongo.get(PydanticObjectId(doctor_id))

    def _domain_to_mongo(self, doctor: Doctor) -> DoctorMongo:
        """Convert domain entity to MongoDB model."""
        return DoctorMongo(
            name=doctor.name,
            email=doctor.email,
            designation=doctor.designation,
            degree=doctor.degree,
            mobile=doctor.mobile,
            video_id=doctor.video_id,
            video_url=doctor.video_url,
            notification_status=doctor.notification_status,
            notification_attempts=doctor.notification_attempts,
            notification_error=doctor.notification_error,
            notified_at=doctor.notified_at,
            created_at=doctor.created_at,
            updated_at=doctor.updated_at,
        )

    def _mongo_to_domain(self, doctor_mongo: DoctorMongo) -> Doctor:
        """Convert MongoDB model to domain entity."""
        return Doctor(
            id=str(doctor_mongo.id) if doctor_mongo.id else None,
            name=doctor_mongo.name,
            email=doctor_mongo.email,
            designation=doctor_mongo.designation,
            degree=doctor_mongo.degree,
            mobile=doctor_mongo.mobile,
            video_id=doctor_mongo.video_id,
            video_url=doctor_mongo.video_url,
            notification_status=doctor_mongo.notification_status,
            notification_attempts=doctor_mongo.notification_attempts,
            notification_error=doctor_mongo.notification_error,
            notified_at=doctor_mongo.notified_at,
            created_at=doctor_mongo.created_at,
            updated_at=doctor_mongo.updated_at,
        )
