"""Tests for domain exceptions and their HTTP status mapping."""

import pytest

from bizdesk.core.exception_handlers import status_for
from bizdesk.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    BizdeskException,
    ResourceAlreadyExistsException,
    ResourceNotFoundException,
    TenantNotFoundException,
    ValidationException,
)
from bizdesk.infrastructure.exceptions import (
    DocumentExistsError,
    EmulatorAlreadyConnectedError,
    FirebaseAuthError,
    InvalidDocumentIdError,
)


def test_base_exception_defaults_error_code_to_class_name() -> None:
    exc = BizdeskException("Something failed")
    assert exc.error_code == "BizdeskException"
    assert exc.details == {}
    assert exc.to_dict() == {
        "error": "BizdeskException",
        "message": "Something failed",
        "details": {},
    }


def test_validation_exception_records_field() -> None:
    exc = ValidationException("end_date must not be before start_date", field="end_date")
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.details == {"field": "end_date"}


def test_resource_not_found_details() -> None:
    exc = ResourceNotFoundException("client", "c1")
    assert exc.message == "client not found: c1"
    assert exc.details == {"resource_type": "client", "resource_id": "c1"}


def test_authorization_exception_message_from_resource_and_action() -> None:
    exc = AuthorizationException("client", "delete")
    assert exc.message == "Permission denied: delete on client"
    assert exc.error_code == "PERMISSION_DENIED"


def test_firebase_auth_error_keeps_code_and_reason() -> None:
    exc = FirebaseAuthError("WEAK_PASSWORD", "too short")
    assert exc.code == "WEAK_PASSWORD"
    assert exc.details == {"code": "WEAK_PASSWORD", "reason": "too short"}
    assert FirebaseAuthError("EMAIL_EXISTS").details == {"code": "EMAIL_EXISTS"}


@pytest.mark.parametrize(
    ("exc", "status"),
    [
        (ResourceNotFoundException("job", "j1"), 404),
        (TenantNotFoundException("user:u1"), 404),
        (AuthenticationException(), 401),
        (AuthorizationException(), 403),
        (ValidationException("bad"), 400),
        (ResourceAlreadyExistsException("tenant", "t1"), 409),
        (DocumentExistsError("users/u1"), 409),
        (InvalidDocumentIdError(".."), 404),
        (FirebaseAuthError("EMAIL_EXISTS"), 409),
        (FirebaseAuthError("INVALID_LOGIN_CREDENTIALS"), 401),
        (FirebaseAuthError("INVALID_ID_TOKEN"), 401),
        (FirebaseAuthError("WEAK_PASSWORD"), 400),
        (FirebaseAuthError("TOO_MANY_ATTEMPTS_TRY_LATER"), 429),
        (EmulatorAlreadyConnectedError("auth", "localhost:9099"), 400),
        (BizdeskException("other"), 400),
    ],
)
def test_status_for(exc, status) -> None:
    assert status_for(exc) == status
