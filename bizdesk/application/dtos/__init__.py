"""DTOs for application use cases (no dependency on storage)."""

from bizdesk.application.dtos.client import ClientResult
from bizdesk.application.dtos.job import JobResult, JobWithClientResult
from bizdesk.application.dtos.user import (
    CurrentUser,
    TenantUserResult,
    UserInitializationResult,
    UserProfileResult,
)

__all__ = [
    "ClientResult",
    "CurrentUser",
    "JobResult",
    "JobWithClientResult",
    "TenantUserResult",
    "UserInitializationResult",
    "UserProfileResult",
]
