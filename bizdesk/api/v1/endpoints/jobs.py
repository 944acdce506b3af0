"""Jobs API: tenant-scoped CRUD plus archive."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response, status

from bizdesk.api.v1.dependencies import get_current_user, get_job_service
from bizdesk.application.dtos.user import CurrentUser
from bizdesk.application.services import JobService
from bizdesk.core.limiter import limit_writes
from bizdesk.schemas.job import (
    DOCUMENT_ID_PATTERN,
    JobCreate,
    JobResponse,
    JobUpdate,
    JobWithClientResponse,
)

router = APIRouter()

CurrentUserDep = Annotated[CurrentUser, Depends(get_current_user)]
JobServiceDep = Annotated[JobService, Depends(get_job_service)]


@router.get("", response_model=list[JobWithClientResponse])
async def list_jobs(
    current_user: CurrentUserDep,
    service: JobServiceDep,
    client_id: Annotated[
        str | None, Query(max_length=128, pattern=DOCUMENT_ID_PATTERN)
    ] = None,
):
    """List jobs newest first.

    Each job carries its client's name. With client_id only that client's jobs
    are returned (404 if the client does not exist).
    """
    if client_id:
        jobs = await service.list_jobs_for_client(current_user.tenant_id, client_id)
    else:
        jobs = await service.list_jobs(current_user.tenant_id)
    return [JobWithClientResponse.model_validate(j) for j in jobs]


@router.post("", response_model=JobResponse, status_code=status.HTTP_201_CREATED)
@limit_writes
async def create_job(
    request: Request,
    body: JobCreate,
    current_user: CurrentUserDep,
    service: JobServiceDep,
):
    job = await service.create_job(current_user.tenant_id, current_user.uid, body)
    return JobResponse.model_validate(job)


@router.get("/{job_id}", response_model=JobResponse)
async def get_job(job_id: str, current_user: CurrentUserDep, service: JobServiceDep):
    job = await service.get_job(current_user.tenant_id, job_id)
    return JobResponse.model_validate(job)


@router.patch("/{job_id}", response_model=JobResponse)
@limit_writes
async def update_job(
    request: Request,
    job_id: str,
    body: JobUpdate,
    current_user: CurrentUserDep,
    service: JobServiceDep,
):
    """Update only the fields present in the body; any status may follow any other."""
    job = await service.update_job(current_user.tenant_id, job_id, body)
    return JobResponse.model_validate(job)


@router.post("/{job_id}/archive", response_model=JobResponse)
@limit_writes
async def archive_job(
    request: Request,
    job_id: str,
    current_user: CurrentUserDep,
    service: JobServiceDep,
):
    job = await service.archive_job(current_user.tenant_id, job_id)
    return JobResponse.model_validate(job)


@router.delete("/{job_id}", status_code=status.HTTP_204_NO_CONTENT)
@limit_writes
async def delete_job(
    request: Request,
    job_id: str,
    current_user: CurrentUserDep,
    service: JobServiceDep,
):
    await service.delete_job(current_user.tenant_id, job_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
