"""
Shared fixtures: in-memory doubles for the database, email and remote
hosting, plus a TestClient wired to them through the service container.
"""

import shutil
import uuid
from dataclasses import replace
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Dict, List, Optional, Set

import pytest
from fastapi.testclient import TestClient

from docintro.adapters.storage.local_video_store import LocalVideoStore
from docintro.app import create_app
from docintro.application.ports.repositories.doctor_repo import DoctorRepository
from docintro.application.ports.services.email_service import EmailService
from docintro.application.ports.services.video_hosting_service import CaptionRenderer, VideoHostingService
from docintro.core.config import (
    DatabaseSettings,
    LoggingSettings,
    NotificationSettings,
    Settings,
    VideoSettings,
)
from docintro.core.container import ServiceContainer
from docintro.core.exceptions import BlobStorageError, EmailDeliveryError
from docintro.domain.entities.doctor import Doctor
from docintro.domain.enums.notification import NotificationStatus


class InMemoryDoctorRepository(DoctorRepository):
    """Dict-backed repository; hands out copies like a real store would."""

    def __init__(self) -> None:
        self.docs: Dict[str, Doctor] = {}
        self._clock = datetime(2024, 1, 1)

    async def add(self, doctor: Doctor) -> Doctor:
        # Strictly increasing creation times keep "newest first" deterministic
        self._clock += timedelta(seconds=1)
        stored = replace(doctor, id=uuid.uuid4().hex[:24], created_at=self._clock, updated_at=self._clock)
        self.docs[stored.id] = stored
        return replace(stored)

    async def find_by_id(self, doctor_id: str) -> Optional[Doctor]:
        doctor = self.docs.get(doctor_id)
        return replace(doctor) if doctor else None

    async def find_by_video_id(self, video_id: str) -> Optional[Doctor]:
        for doctor in self.docs.values():
            if doctor.video_id == video_id:
                return replace(doctor)
        return None

    async def find_all(self) -> List[Doctor]:
        return [replace(d) for d in sorted(self.docs.values(), key=lambda d: d.created_at, reverse=True)]

    async def update(self, doctor_id: str, changes: Dict[str, Any]) -> Optional[Doctor]:
        doctor = self.docs.get(doctor_id)
        if doctor is None:
            return None
        updated = replace(doctor)
        updated.apply_update(changes)
        self.docs[doctor_id] = updated
        return replace(updated)

    async def delete(self, doctor_id: str) -> Optional[Doctor]:
        return self.docs.pop(doctor_id, None)

    async def set_video_url(self, video_id: str, video_url: Optional[str]) -> Optional[Doctor]:
        for doctor in self.docs.values():
            if doctor.video_id == video_id:
                doctor.attach_video(video_url)
                return replace(doctor)
        return None

    async def record_notification(
        self,
        doctor_id: str,
        status: NotificationStatus,
        attempts: int,
        error: Optional[str] = None,
    ) -> None:
        doctor = self.docs.get(doctor_id)
        if doctor is not None:
            doctor.record_notification(status, attempts, error)


class RecordingEmailService(EmailService):
    """Captures sent messages; the first ``failures`` sends raise."""

    def __init__(self, configured: bool = True, failures: int = 0) -> None:
        self.configured = configured
        self.failures = failures
        self.attempts = 0
        self.sent: List[Dict[str, str]] = []

    @property
    def is_configured(self) -> bool:
        return self.configured

    async def send_email(self, to_email: str, subject: str, text: str) -> None:
        self.attempts += 1
        if self.attempts <= self.failures:
            raise EmailDeliveryError("HTTP 503")
        self.sent.append({"to": to_email, "subject": subject, "text": text})


class FakeHostingService(VideoHostingService):
    """Remote store keeping uploaded bytes in memory."""

    base_url = "https://blob.example/doctor-videos/videos"

    def __init__(self) -> None:
        self.blobs: Dict[str, bytes] = {}
        self.captions: Dict[str, Optional[str]] = {}
        self.fail_upload = False
        self.fail_lookup = False
        self.failing_lookups: Set[str] = set()

    async def upload_video(self, file_path: Path, video_id: str, caption: Optional[str] = None) -> str:
        if self.fail_upload:
            raise BlobStorageError("upload rejected")
        self.blobs[video_id] = Path(file_path).read_bytes()
        self.captions[video_id] = caption
        return f"{self.base_url}/{video_id}.webm"

    async def delete_video(self, video_id: str) -> bool:
        return self.blobs.pop(video_id, None) is not None

    async def get_video_url(self, video_id: str) -> Optional[str]:
        if self.fail_lookup or video_id in self.failing_lookups:
            raise BlobStorageError("lookup timed out")
        if video_id in self.blobs:
            return f"{self.base_url}/{video_id}.webm"
        return None


class FakeCaptionRenderer(CaptionRenderer):
    """Appends the caption to the file so tests can see it was applied."""

    def __init__(self) -> None:
        self.calls: List[str] = []

    async def render_caption(self, source: Path, caption: str) -> Path:
        self.calls.append(caption)
        output = source.with_name(f"{source.stem}_captioned{source.suffix}")
        shutil.copyfile(source, output)
        with open(output, "ab") as f:
            f.write(f"|{caption}".encode("utf-8"))
        return output


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        app_env="testing",
        front_end_url="http://front.test",
        back_end_url="http://back.test/",
        database=DatabaseSettings(uri="mongodb://localhost:27017"),
        logging=LoggingSettings(level="DEBUG", format="text"),
        video=VideoSettings(storage_dir=str(tmp_path / "videos"), max_chunk_size_mb=1),
        notification=NotificationSettings(max_attempts=3, retry_base_delay=0),
    )


@pytest.fixture
def doctor_repo() -> InMemoryDoctorRepository:
    return InMemoryDoctorRepository()


@pytest.fixture
def email_service() -> RecordingEmailService:
    return RecordingEmailService()


@pytest.fixture
def services(settings, doctor_repo, email_service) -> ServiceContainer:
    return ServiceContainer(
        settings=settings,
        doctor_repository=doctor_repo,
        local_store=LocalVideoStore(
            settings.video_root,
            chunk_extension=settings.video.chunk_extension,
            final_filename=settings.video.final_filename,
        ),
        email_service=email_service,
    )


@pytest.fixture
def client(services):
    """Create a test client for the FastAPI app."""
    with TestClient(create_app(services=services)) as test_client:
        yield test_client


@pytest.fixture
def video_root(settings) -> Path:
    return settings.video_root


def create_doctor(client: TestClient, name: str = "Dr. Alice", email: str = "a@x.com", **extra) -> Dict[str, Any]:
    response = client.post("/doctors", json={"name": name, "email": email, **extra})
    assert response.status_code == 201, response.text
    return response.json()


def upload_chunk(client: TestClient, video_id: str, data: bytes, **form):
    return client.post(
        f"/upload/{video_id}",
        files={"video": ("blob.webm", data, "video/webm")},
        data={k: str(v) for k, v in form.items()},
    )
