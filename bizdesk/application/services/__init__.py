"""Application services (use cases)."""

from bizdesk.application.services.client_service import ClientService
from bizdesk.application.services.job_service import JobService
from bizdesk.application.services.user_initialization_service import (
    UserInitializationService,
)

__all__ = ["ClientService", "JobService", "UserInitializationService"]
