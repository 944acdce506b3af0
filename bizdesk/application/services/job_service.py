"""Job use cases, including the jobs-with-client-name read join."""

from __future__ import annotations

import logging

from bizdesk.application.dtos.job import JobResult, JobWithClientResult
from bizdesk.application.interfaces.repositories import (
    IClientRepository,
    IJobRepository,
)
from bizdesk.domain.enums import JobStatus
from bizdesk.domain.exceptions import ResourceNotFoundException, ValidationException
from bizdesk.schemas.job import JobCreate, JobUpdate
from bizdesk.schemas.projections import apply_update
from bizdesk.shared.utils.datetime import ensure_utc

logger = logging.getLogger(__name__)

UNKNOWN_CLIENT_NAME = "Unknown Client"


def with_client_name(job: JobResult, client_name: str) -> JobWithClientResult:
    return JobWithClientResult(**vars(job), client_name=client_name)


class JobService:
    """Tenant-scoped job operations.

    Status changes are not restricted: any JobStatus may replace any other.
    """

    def __init__(
        self, job_repo: IJobRepository, client_repo: IClientRepository
    ) -> None:
        self._jobs = job_repo
        self._clients = client_repo

    async def _require_client(self, tenant_id: str, client_id: str) -> None:
        if await self._clients.get_by_id(tenant_id, client_id) is None:
            raise ResourceNotFoundException("client", client_id)

    async def list_jobs(self, tenant_id: str) -> list[JobWithClientResult]:
        """Return jobs newest first, each with its client's name."""
        jobs = await self._jobs.list_by_tenant(tenant_id)
        names = {c.id: c.name for c in await self._clients.list_by_tenant(tenant_id)}
        return [
            with_client_name(job, names.get(job.client_id, UNKNOWN_CLIENT_NAME))
            for job in jobs
        ]

    async def list_jobs_for_client(
        self, tenant_id: str, client_id: str
    ) -> list[JobWithClientResult]:
        """Return the client's jobs newest first; unknown client raises ResourceNotFoundException."""
        client = await self._clients.get_by_id(tenant_id, client_id)
        if client is None:
            raise ResourceNotFoundException("client", client_id)
        jobs = await self._jobs.list_by_client(tenant_id, client_id)
        return [with_client_name(job, client.name) for job in jobs]

    async def get_job(self, tenant_id: str, job_id: str) -> JobResult:
        job = await self._jobs.get_by_id(tenant_id, job_id)
        if job is None:
            raise ResourceNotFoundException("job", job_id)
        return job

    async def create_job(
        self, tenant_id: str, user_id: str, data: JobCreate
    ) -> JobResult:
        """Create a job for an existing client of the tenant."""
        await self._require_client(tenant_id, data.client_id)
        job = await self._jobs.create(tenant_id, user_id, data.model_dump())
        logger.info("Created job %s for client %s in tenant %s", job.id, job.client_id, tenant_id)
        return job

    async def update_job(
        self, tenant_id: str, job_id: str, data: JobUpdate
    ) -> JobResult:
        """Apply the fields present in data.

        Raises:
            ResourceNotFoundException: Job, or a newly referenced client, does not exist.
            ValidationException: Resulting end_date is before start_date.
        """
        current = await self.get_job(tenant_id, job_id)
        changes = apply_update(data)
        if not changes:
            return current
        new_client_id = changes.get("client_id")
        if new_client_id and new_client_id != current.client_id:
            await self._require_client(tenant_id, new_client_id)
        start = ensure_utc(changes.get("start_date", current.start_date))
        end = ensure_utc(changes.get("end_date", current.end_date))
        if start and end and end < start:
            raise ValidationException(
                "end_date must not be before start_date", field="end_date"
            )
        job = await self._jobs.update(tenant_id, job_id, changes)
        if job is None:
            raise ResourceNotFoundException("job", job_id)
        return job

    async def archive_job(self, tenant_id: str, job_id: str) -> JobResult:
        """Soft delete: set status to archived."""
        job = await self._jobs.update(tenant_id, job_id, {"status": JobStatus.ARCHIVED})
        if job is None:
            raise ResourceNotFoundException("job", job_id)
        logger.info("Archived job %s in tenant %s", job_id, tenant_id)
        return job

    async def delete_job(self, tenant_id: str, job_id: str) -> None:
        """Hard delete."""
        await self.get_job(tenant_id, job_id)
        await self._jobs.delete(tenant_id, job_id)
        logger.info("Deleted job %s in tenant %s", job_id, tenant_id)
