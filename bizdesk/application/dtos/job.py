"""DTOs for job use cases."""

from dataclasses import dataclass
from datetime import datetime

from bizdesk.domain.enums import JobStatus


@dataclass(frozen=True)
class JobResult:
    """Job read-model."""

    id: str
    tenant_id: str
    client_id: str
    title: str
    status: JobStatus = JobStatus.ACTIVE
    reference: str | None = None
    description: str | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    default_daily_hours: float | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    created_by: str = ""


@dataclass(frozen=True)
class JobWithClientResult(JobResult):
    """Job plus its client's name (read-side join)."""

    client_name: str = ""
