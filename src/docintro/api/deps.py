"""FastAPI dependency providers.

Everything is resolved from the ``ServiceContainer`` stored on
``app.state.services`` by the lifespan (or injected by tests).
"""

from typing import Annotated

from fastapi import Depends, Request

from ..application.ports.repositories.doctor_repo import DoctorRepository
from ..application.use_cases.create_doctor import CreateDoctorUseCase
from ..application.use_cases.delete_doctor import DeleteDoctorUseCase
from ..application.use_cases.delete_video import DeleteVideoUseCase
from ..application.use_cases.finalize_video import FinalizeVideoUseCase
from ..application.use_cases.list_doctors import ListDoctorsUseCase
from ..application.use_cases.send_recording_invite import SendRecordingInviteUseCase
from ..application.use_cases.update_doctor import UpdateDoctorUseCase
from ..application.use_cases.upload_video_chunk import UploadVideoChunkUseCase
from ..core.container import ServiceContainer
from .errors import ServiceUnavailableError


def get_services(request: Request) -> ServiceContainer:
    services = getattr(request.app.state, "services", None)
    if services is None:
        raise ServiceUnavailableError("Application services are not initialized")
    return services


ServicesDep = Annotated[ServiceContainer, Depends(get_services)]


def get_doctor_repository(services: ServicesDep) -> DoctorRepository:
    return services.doctor_repository


def get_list_doctors_use_case(services: ServicesDep) -> ListDoctorsUseCase:
    return ListDoctorsUseCase(
        services.doctor_repository,
        services.local_store,
        services.settings.back_end_url,
        hosting_service=services.hosting_service,
    )


def get_create_doctor_use_case(services: ServicesDep) -> CreateDoctorUseCase:
    return CreateDoctorUseCase(services.doctor_repository)


def get_update_doctor_use_case(services: ServicesDep) -> UpdateDoctorUseCase:
    return UpdateDoctorUseCase(services.doctor_repository)


def get_delete_video_use_case(services: ServicesDep) -> DeleteVideoUseCase:
    return DeleteVideoUseCase(
        services.doctor_repository,
        services.local_store,
        services.locks,
        hosting_service=services.hosting_service,
    )


def get_delete_doctor_use_case(
    services: ServicesDep,
    delete_video: Annotated[DeleteVideoUseCase, Depends(get_delete_video_use_case)],
) -> DeleteDoctorUseCase:
    return DeleteDoctorUseCase(services.doctor_repository, delete_video)


def get_send_invite_use_case(services: ServicesDep) -> SendRecordingInviteUseCase:
    notification = services.settings.notification
    return SendRecordingInviteUseCase(
        services.doctor_repository,
        services.email_service,
        services.settings.front_end_url,
        max_attempts=notification.max_attempts,
        retry_base_delay=notification.retry_base_delay,
    )


def get_upload_chunk_use_case(services: ServicesDep) -> UploadVideoChunkUseCase:
    return UploadVideoChunkUseCase(services.local_store, services.locks, services.max_chunk_bytes)


def get_finalize_video_use_case(services: ServicesDep) -> FinalizeVideoUseCase:
    return FinalizeVideoUseCase(
        services.doctor_repository,
        services.local_store,
        services.locks,
        services.settings.back_end_url,
        hosting_service=services.hosting_service,
        caption_renderer=services.caption_renderer,
    )
