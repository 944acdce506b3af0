"""Domain enumerations (job status, tenant roles)."""

from enum import Enum


class JobStatus(str, Enum):
    """Job lifecycle status.

    Transitions are unconstrained: any status may be assigned at any time.
    """

    ACTIVE = "active"
    COMPLETED = "completed"
    ARCHIVED = "archived"


class TenantRole(str, Enum):
    """Role of a user within a tenant."""

    OWNER = "owner"
    STAFF = "staff"
