"""Users API: first-login initialization and the caller's profile."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from bizdesk.api.v1.dependencies import (
    VerifiedToken,
    get_current_user,
    get_user_initialization_service,
    get_verified_token,
)
from bizdesk.application.dtos.user import CurrentUser
from bizdesk.application.services import UserInitializationService
from bizdesk.core.limiter import limit_writes
from bizdesk.schemas.user import CurrentUserResponse, InitializeUserResponse

router = APIRouter()


@router.post("/initialize", response_model=InitializeUserResponse)
@limit_writes
async def initialize_user(
    request: Request,
    token: Annotated[VerifiedToken, Depends(get_verified_token)],
    service: Annotated[
        UserInitializationService, Depends(get_user_initialization_service)
    ],
):
    """Create the tenant for the token's user if they have none yet (idempotent)."""
    result = await service.initialize_new_user(token.uid, token.email)
    return InitializeUserResponse(
        uid=result.uid, tenant_id=result.tenant_id, created=result.created
    )


@router.get("/me", response_model=CurrentUserResponse)
async def get_me(current_user: Annotated[CurrentUser, Depends(get_current_user)]):
    """Return the caller's uid, email, tenant and role."""
    return CurrentUserResponse(
        uid=current_user.uid,
        email=current_user.email,
        tenant_id=current_user.tenant_id,
        role=current_user.role,
    )
