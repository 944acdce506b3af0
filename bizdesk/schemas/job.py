"""Job API schemas: create/update projections and responses."""

from datetime import datetime
from typing import Annotated

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StringConstraints,
    field_validator,
    model_validator,
)

from bizdesk.domain.enums import JobStatus
from bizdesk.schemas.projections import reject_explicit_nulls
from bizdesk.shared.utils.datetime import ensure_utc

# A single Firestore path segment, as generated for client and job documents.
DOCUMENT_ID_PATTERN = r"^[A-Za-z0-9_-]+$"

DocumentId = Annotated[
    str,
    StringConstraints(
        strip_whitespace=True, min_length=1, max_length=128, pattern=DOCUMENT_ID_PATTERN
    ),
]
JobTitle = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)
]
DailyHours = Annotated[float, Field(gt=0, le=24)]


class JobCreate(BaseModel):
    """Form data for creating a job (no server-assigned fields)."""

    client_id: DocumentId
    title: JobTitle
    reference: str | None = Field(
        default=None, max_length=255, description="Client's reference number/code"
    )
    description: str | None = Field(default=None, max_length=5000)
    status: JobStatus = JobStatus.ACTIVE
    start_date: datetime | None = None
    end_date: datetime | None = None
    default_daily_hours: DailyHours | None = Field(
        default=None, description="Default hours per day for daily billing"
    )

    @field_validator("start_date", "end_date")
    @classmethod
    def normalize_dates(cls, value: datetime | None) -> datetime | None:
        """Naive datetimes are taken as UTC so the range check can compare them."""
        return ensure_utc(value)

    @model_validator(mode="after")
    def check_date_range(self) -> "JobCreate":
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class JobUpdate(BaseModel):
    """Partial update: the JobCreate fields, all optional.

    The date range is checked by the service against the stored job.
    """

    client_id: DocumentId | None = None
    title: JobTitle | None = None
    reference: str | None = Field(default=None, max_length=255)
    description: str | None = Field(default=None, max_length=5000)
    status: JobStatus | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None
    default_daily_hours: DailyHours | None = None

    @field_validator("start_date", "end_date")
    @classmethod
    def normalize_dates(cls, value: datetime | None) -> datetime | None:
        return ensure_utc(value)

    @model_validator(mode="after")
    def check_required_not_null(self) -> "JobUpdate":
        reject_explicit_nulls(self, ("client_id", "title", "status"))
        return self


class JobResponse(JobCreate):
    """Job as stored, including server-assigned fields."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    tenant_id: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
    created_by: str = ""


class JobWithClientResponse(JobResponse):
    """Job joined with its client's display name."""

    client_name: str
