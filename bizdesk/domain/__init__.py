"""Domain layer: enums and exceptions.

No dependencies on infrastructure or presentation.
"""

from bizdesk.domain.enums import JobStatus, TenantRole
from bizdesk.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    BizdeskException,
    ResourceAlreadyExistsException,
    ResourceNotFoundException,
    TenantNotFoundException,
    ValidationException,
)

__all__ = [
    "JobStatus",
    "TenantRole",
    "AuthenticationException",
    "AuthorizationException",
    "BizdeskException",
    "ResourceAlreadyExistsException",
    "ResourceNotFoundException",
    "TenantNotFoundException",
    "ValidationException",
]
