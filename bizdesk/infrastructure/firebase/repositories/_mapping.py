"""snake_case field names <-> camelCase Firestore document keys."""

from typing import Any

AUDIT_FIELD_KEYS: dict[str, str] = {
    "tenant_id": "tenantId",
    "created_at": "createdAt",
    "updated_at": "updatedAt",
    "created_by": "createdBy",
}


def to_document(fields: dict[str, Any], keys: dict[str, str]) -> dict[str, Any]:
    """Rename known fields to their stored keys; unknown fields are rejected."""
    unknown = set(fields) - set(keys)
    if unknown:
        raise ValueError(f"Unknown fields: {sorted(unknown)}")
    return {keys[name]: value for name, value in fields.items()}


def from_document(data: dict[str, Any], keys: dict[str, str]) -> dict[str, Any]:
    """Pick stored keys present in data and return them under field names."""
    return {name: data[key] for name, key in keys.items() if key in data}
