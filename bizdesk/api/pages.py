"""HTML routes: landing page and workspace pages.

Workspace pages authenticate with the ID token cookie set by the landing
page's sign-in script; without a valid session they redirect to "/".
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from bizdesk.api.v1.dependencies import (
    get_auth_client,
    get_client_service,
    get_job_service,
    get_user_initialization_service,
    verify_token,
)
from bizdesk.application.dtos.user import CurrentUser
from bizdesk.application.services import (
    ClientService,
    JobService,
    UserInitializationService,
)
from bizdesk.core.config import get_settings
from bizdesk.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    TenantNotFoundException,
)
from bizdesk.infrastructure.firebase.auth import FirebaseAuthClient
from bizdesk.pages import render_clients_page, render_jobs_page, render_root_page
from bizdesk.pages._layout import ID_TOKEN_COOKIE

logger = logging.getLogger(__name__)

router = APIRouter(include_in_schema=False)


async def get_page_user(
    request: Request,
    auth: Annotated[FirebaseAuthClient, Depends(get_auth_client)],
    service: Annotated[
        UserInitializationService, Depends(get_user_initialization_service)
    ],
) -> CurrentUser | None:
    """Signed-in user from the session cookie, or None."""
    raw = request.cookies.get(ID_TOKEN_COOKIE)
    if not raw:
        return None
    try:
        token = await verify_token(auth, raw)
        return await service.resolve_current_user(token.uid, token.email)
    except (
        AuthenticationException,
        AuthorizationException,
        TenantNotFoundException,
    ) as e:
        logger.info("Workspace page without a valid session: %s", e.message)
        return None


PageUserDep = Annotated[CurrentUser | None, Depends(get_page_user)]


def _to_sign_in() -> RedirectResponse:
    return RedirectResponse("/", status_code=303)


@router.get("/", response_class=HTMLResponse)
def root() -> HTMLResponse:
    """Landing page with the sign-in card."""
    return HTMLResponse(content=render_root_page(get_settings().app_name))


@router.get("/workspace/clients", response_class=HTMLResponse)
async def clients_page(
    user: PageUserDep,
    service: Annotated[ClientService, Depends(get_client_service)],
    q: Annotated[str | None, Query(max_length=255)] = None,
):
    if user is None:
        return _to_sign_in()
    clients = await service.list_clients(user.tenant_id, q)
    return HTMLResponse(render_clients_page(get_settings().app_name, user, clients, q))


@router.get("/workspace/jobs", response_class=HTMLResponse)
async def jobs_page(
    user: PageUserDep,
    service: Annotated[JobService, Depends(get_job_service)],
):
    if user is None:
        return _to_sign_in()
    jobs = await service.list_jobs(user.tenant_id)
    return HTMLResponse(render_jobs_page(get_settings().app_name, user, jobs))
