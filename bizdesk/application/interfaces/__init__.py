"""Ports (protocols) implemented by infrastructure."""

from bizdesk.application.interfaces.repositories import (
    IClientRepository,
    IJobRepository,
    ITenantRepository,
)

__all__ = ["IClientRepository", "IJobRepository", "ITenantRepository"]
