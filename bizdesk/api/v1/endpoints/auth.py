"""Auth API: email/password sign-up, login and password reset via Firebase Auth.

Sign-up also creates the caller's tenant (see UserInitializationService).
All routes are public and rate limited per client address.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, status

from bizdesk.api.v1.dependencies import (
    get_auth_client,
    get_user_initialization_service,
)
from bizdesk.application.services import UserInitializationService
from bizdesk.core.limiter import limit_auth
from bizdesk.infrastructure.exceptions import FirebaseAuthError
from bizdesk.infrastructure.firebase.auth import AuthSession, FirebaseAuthClient
from bizdesk.schemas.auth import (
    LoginRequest,
    PasswordResetRequest,
    SignupRequest,
    TokenResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _token_response(session: AuthSession) -> TokenResponse:
    return TokenResponse(
        uid=session.uid,
        email=session.email,
        id_token=session.id_token,
        refresh_token=session.refresh_token,
        expires_in=session.expires_in,
    )


@router.post("/signup", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
@limit_auth
async def signup(
    request: Request,
    body: SignupRequest,
    auth: Annotated[FirebaseAuthClient, Depends(get_auth_client)],
    user_init: Annotated[
        UserInitializationService, Depends(get_user_initialization_service)
    ],
):
    """Create a Firebase user and its tenant; return tokens for the new session."""
    session = await auth.sign_up(body.email, body.password.get_secret_value())
    await user_init.initialize_new_user(session.uid, session.email)
    return _token_response(session)


@router.post("/login", response_model=TokenResponse)
@limit_auth
async def login(
    request: Request,
    body: LoginRequest,
    auth: Annotated[FirebaseAuthClient, Depends(get_auth_client)],
):
    """Exchange email and password for a Firebase ID token (send it as Bearer)."""
    session = await auth.sign_in_with_password(
        body.email, body.password.get_secret_value()
    )
    return _token_response(session)


@router.post("/password-reset", status_code=status.HTTP_202_ACCEPTED)
@limit_auth
async def password_reset(
    request: Request,
    body: PasswordResetRequest,
    auth: Annotated[FirebaseAuthClient, Depends(get_auth_client)],
) -> dict[str, str]:
    """Send a reset email. Always 202 so callers cannot probe which emails exist."""
    try:
        await auth.send_password_reset(body.email)
    except FirebaseAuthError as e:
        logger.info("Password reset not sent (%s)", e.code)
    return {"status": "accepted"}
