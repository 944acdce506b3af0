"""Clients API: tenant-scoped CRUD plus soft deactivate/activate.

The tenant always comes from the authenticated caller's profile.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response, status

from bizdesk.api.v1.dependencies import get_client_service, get_current_user
from bizdesk.application.dtos.user import CurrentUser
from bizdesk.application.services import ClientService
from bizdesk.core.limiter import limit_writes
from bizdesk.schemas.client import ClientCreate, ClientResponse, ClientUpdate

router = APIRouter()

CurrentUserDep = Annotated[CurrentUser, Depends(get_current_user)]
ClientServiceDep = Annotated[ClientService, Depends(get_client_service)]


@router.get("", response_model=list[ClientResponse])
async def list_clients(
    current_user: CurrentUserDep,
    service: ClientServiceDep,
    q: Annotated[str | None, Query(max_length=255, description="Name or email substring")] = None,
):
    """List the tenant's clients ordered by name."""
    clients = await service.list_clients(current_user.tenant_id, q)
    return [ClientResponse.model_validate(c) for c in clients]


@router.post("", response_model=ClientResponse, status_code=status.HTTP_201_CREATED)
@limit_writes
async def create_client(
    request: Request,
    body: ClientCreate,
    current_user: CurrentUserDep,
    service: ClientServiceDep,
):
    client = await service.create_client(current_user.tenant_id, current_user.uid, body)
    return ClientResponse.model_validate(client)


@router.get("/{client_id}", response_model=ClientResponse)
async def get_client(client_id: str, current_user: CurrentUserDep, service: ClientServiceDep):
    client = await service.get_client(current_user.tenant_id, client_id)
    return ClientResponse.model_validate(client)


@router.patch("/{client_id}", response_model=ClientResponse)
@limit_writes
async def update_client(
    request: Request,
    client_id: str,
    body: ClientUpdate,
    current_user: CurrentUserDep,
    service: ClientServiceDep,
):
    """Update only the fields present in the body."""
    client = await service.update_client(current_user.tenant_id, client_id, body)
    return ClientResponse.model_validate(client)


@router.post("/{client_id}/deactivate", response_model=ClientResponse)
@limit_writes
async def deactivate_client(
    request: Request,
    client_id: str,
    current_user: CurrentUserDep,
    service: ClientServiceDep,
):
    client = await service.set_client_active(current_user.tenant_id, client_id, False)
    return ClientResponse.model_validate(client)


@router.post("/{client_id}/activate", response_model=ClientResponse)
@limit_writes
async def activate_client(
    request: Request,
    client_id: str,
    current_user: CurrentUserDep,
    service: ClientServiceDep,
):
    client = await service.set_client_active(current_user.tenant_id, client_id, True)
    return ClientResponse.model_validate(client)


@router.delete("/{client_id}", status_code=status.HTTP_204_NO_CONTENT)
@limit_writes
async def delete_client(
    request: Request,
    client_id: str,
    current_user: CurrentUserDep,
    service: ClientServiceDep,
):
    """Hard delete. Jobs referencing the client are kept."""
    await service.delete_client(current_user.tenant_id, client_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
