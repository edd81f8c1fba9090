"""
Doctor directory endpoints: list, create, update, delete, resend invite.
"""

import logging
from typing import Annotated, List

from fastapi import APIRouter, BackgroundTasks, Depends, status

from ...application.dto.doctor_dto import CreateDoctorRequest
from ...application.use_cases.create_doctor import CreateDoctorUseCase
from ...application.use_cases.delete_doctor import DeleteDoctorUseCase
from ...application.use_cases.list_doctors import ListDoctorsUseCase
from ...application.use_cases.send_recording_invite import SendRecordingInviteUseCase
from ...application.use_cases.update_doctor import UpdateDoctorUseCase
from ...application.ports.repositories.doctor_repo import DoctorRepository
from ...domain.entities.doctor import Doctor
from ...domain.errors import DoctorNotFoundError, DomainError
from ..deps import (
    get_create_doctor_use_case,
    get_delete_doctor_use_case,
    get_doctor_repository,
    get_list_doctors_use_case,
    get_send_invite_use_case,
    get_update_doctor_use_case,
)
from ..errors import ServerError
from ..schemas.common import ErrorResponse, MessageResponse
from ..schemas.doctor import DoctorPayload, DoctorResponse

router = APIRouter(prefix="/doctors", tags=["Doctors"])
logger = logging.getLogger("docintro")

DoctorRepositoryDep = Annotated[DoctorRepository, Depends(get_doctor_repository)]
SendInviteDep = Annotated[SendRecordingInviteUseCase, Depends(get_send_invite_use_case)]


async def deliver_invite(use_case: SendRecordingInviteUseCase, doctor: Doctor) -> None:
    """Background task body. Delivery outcome lives on the doctor document."""
    try:
        await use_case.execute(doctor)
    except Exception as e:
        logger.exception(f"Invite delivery for doctor {doctor.id} aborted: {e}")


@router.get(
    "",
    response_model=List[DoctorResponse],
    summary="List doctors with their playable video URL",
    responses={500: {"model": ErrorResponse, "description": "Internal server error"}},
)
async def list_doctors(use_case: Annotated[ListDoctorsUseCase, Depends(get_list_doctors_use_case)]):
    try:
        doctors = await use_case.execute()
    except Exception as e:
        logger.exception(f"Listing doctors failed: {e}")
        raise ServerError(e) from e
    return [DoctorResponse.from_domain(d) for d in doctors]


@router.post(
    "",
    response_model=DoctorResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a doctor and email the recording link",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
)
async def create_doctor(
    payload: DoctorPayload,
    background_tasks: BackgroundTasks,
    use_case: Annotated[CreateDoctorUseCase, Depends(get_create_doctor_use_case)],
    invite: SendInviteDep,
):
    """
    Create a doctor.

    The response is returned as soon as the record is stored; the recording
    invite is sent afterwards as a background task.
    """
    try:
        doctor = await use_case.execute(
            CreateDoctorRequest(
                name=payload.name,
                email=payload.email,
                designation=payload.designation,
                degree=payload.degree,
                mobile=payload.mobile,
            )
        )
    except DomainError:
        raise
    except Exception as e:
        logger.exception(f"Creating doctor failed: {e}")
        raise ServerError(e) from e

    background_tasks.add_task(deliver_invite, invite, doctor)
    return DoctorResponse.from_domain(doctor)


@router.put(
    "/{doctor_id}",
    response_model=DoctorResponse,
    summary="Update a doctor's details",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input"},
        404: {"model": ErrorResponse, "description": "Doctor not found"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
)
async def update_doctor(
    doctor_id: str,
    payload: DoctorPayload,
    use_case: Annotated[UpdateDoctorUseCase, Depends(get_update_doctor_use_case)],
):
    changes = payload.editable_changes()
    try:
        doctor = await use_case.execute(doctor_id, changes)
    except DomainError:
        raise
    except Exception as e:
        logger.exception(f"Updating doctor {doctor_id} failed: {e}")
        raise ServerError(e) from e
    return DoctorResponse.from_domain(doctor)


@router.delete(
    "/{doctor_id}",
    response_model=MessageResponse,
    summary="Delete a doctor and their video files",
    responses={
        404: {"model": ErrorResponse, "description": "Doctor not found"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
)
async def delete_doctor(
    doctor_id: str,
    use_case: Annotated[DeleteDoctorUseCase, Depends(get_delete_doctor_use_case)],
):
    try:
        await use_case.execute(doctor_id)
    except DomainError:
        raise
    except Exception as e:
        logger.exception(f"Deleting doctor {doctor_id} failed: {e}")
        raise ServerError(e) from e
    return MessageResponse(message="Doctor and related video files deleted successfully")


@router.post(
    "/{doctor_id}/invite",
    response_model=MessageResponse,
    status_code=status.HTTP_202_ACCEPTED,
    summary="Send the recording invite again",
    responses={
        404: {"model": ErrorResponse, "description": "Doctor not found"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
)
async def resend_invite(
    doctor_id: str,
    background_tasks: BackgroundTasks,
    doctor_repo: DoctorRepositoryDep,
    invite: SendInviteDep,
):
    try:
        doctor = await doctor_repo.find_by_id(doctor_id)
    except Exception as e:
        logger.exception(f"Loading doctor {doctor_id} failed: {e}")
        raise ServerError(e) from e
    if doctor is None:
        raise DoctorNotFoundError(doctor_id)

    background_tasks.add_task(deliver_invite, invite, doctor)
    return MessageResponse(message="Recording invite scheduled")
