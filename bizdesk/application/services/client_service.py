"""Client use cases: list/search, create, update, activate/deactivate, delete."""

from __future__ import annotations

import logging

from bizdesk.application.dtos.client import ClientResult
from bizdesk.application.interfaces.repositories import IClientRepository
from bizdesk.domain.exceptions import ResourceNotFoundException
from bizdesk.schemas.client import ClientCreate, ClientUpdate
from bizdesk.schemas.projections import apply_update

logger = logging.getLogger(__name__)


def matches_search(client: ClientResult, term: str) -> bool:
    """Case-insensitive substring match on name or email."""
    needle = term.strip().lower()
    if not needle:
        return True
    if needle in client.name.lower():
        return True
    return bool(client.email and needle in client.email.lower())


class ClientService:
    """Tenant-scoped client operations on top of IClientRepository."""

    def __init__(self, client_repo: IClientRepository) -> None:
        self._repo = client_repo

    async def list_clients(
        self, tenant_id: str, search: str | None = None
    ) -> list[ClientResult]:
        """Return clients ordered by name, optionally filtered by name/email substring."""
        clients = await self._repo.list_by_tenant(tenant_id)
        if search:
            clients = [c for c in clients if matches_search(c, search)]
        return clients

    async def get_client(self, tenant_id: str, client_id: str) -> ClientResult:
        """Return the client or raise ResourceNotFoundException."""
        client = await self._repo.get_by_id(tenant_id, client_id)
        if client is None:
            raise ResourceNotFoundException("client", client_id)
        return client

    async def create_client(
        self, tenant_id: str, user_id: str, data: ClientCreate
    ) -> ClientResult:
        """Create a client owned by the tenant; user_id is recorded as created_by."""
        client = await self._repo.create(tenant_id, user_id, data.model_dump())
        logger.info("Created client %s in tenant %s", client.id, tenant_id)
        return client

    async def update_client(
        self, tenant_id: str, client_id: str, data: ClientUpdate
    ) -> ClientResult:
        """Apply the fields present in data. Missing client raises ResourceNotFoundException."""
        changes = apply_update(data)
        if not changes:
            return await self.get_client(tenant_id, client_id)
        client = await self._repo.update(tenant_id, client_id, changes)
        if client is None:
            raise ResourceNotFoundException("client", client_id)
        return client

    async def set_client_active(
        self, tenant_id: str, client_id: str, is_active: bool
    ) -> ClientResult:
        """Soft-deactivate (or reactivate) a client."""
        client = await self._repo.update(tenant_id, client_id, {"is_active": is_active})
        if client is None:
            raise ResourceNotFoundException("client", client_id)
        logger.info(
            "Client %s in tenant %s set is_active=%s", client_id, tenant_id, is_active
        )
        return client

    async def delete_client(self, tenant_id: str, client_id: str) -> None:
        """Hard-delete a client. Its jobs are left in place and show "Unknown Client"."""
        await self.get_client(tenant_id, client_id)
        await self._repo.delete(tenant_id, client_id)
        logger.info("Deleted client %s in tenant %s", client_id, tenant_id)
