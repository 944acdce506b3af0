"""Shared rules for create/update projections of tenant-scoped entities.

Create payloads are the entity minus SERVER_ASSIGNED_FIELDS. Update payloads
carry the same fields, all optional; only fields the caller actually sent
are applied.
"""

from typing import Any

from pydantic import BaseModel

# Assigned by the server at creation time (updated_at is stamped on every write).
SERVER_ASSIGNED_FIELDS = frozenset(
    {"id", "tenant_id", "created_at", "updated_at", "created_by"}
)


def apply_update(update: BaseModel) -> dict[str, Any]:
    """Return only the fields explicitly set on an update payload (snake_case, JSON-ready models)."""
    return update.model_dump(exclude_unset=True)


def reject_explicit_nulls(update: BaseModel, fields: tuple[str, ...]) -> None:
    """Raise ValueError if a field that is required on create was sent as null.

    Call from an update model's ``model_validator(mode="after")``.
    """
    for name in fields:
        if name in update.model_fields_set and getattr(update, name) is None:
            raise ValueError(f"{name} cannot be null")
