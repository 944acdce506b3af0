"""Auth API schemas (email/password against Firebase Auth)."""

from typing import Annotated

from pydantic import BaseModel, Field, SecretStr, StringConstraints

Email = Annotated[
    str,
    StringConstraints(
        strip_whitespace=True, min_length=3, max_length=320, pattern=r"^[^@\s]+@[^@\s]+$"
    ),
]


class SignupRequest(BaseModel):
    """Create an account; a new tenant is created with the user as owner."""

    email: Email
    password: SecretStr = Field(..., description="At least 6 characters (Firebase minimum)")


class LoginRequest(BaseModel):
    email: Email
    password: SecretStr


class PasswordResetRequest(BaseModel):
    email: Email


class TokenResponse(BaseModel):
    """Firebase tokens for the signed-in user. Send id_token as Bearer."""

    uid: str
    email: str
    id_token: str
    refresh_token: str
    expires_in: int
    token_type: str = "bearer"
