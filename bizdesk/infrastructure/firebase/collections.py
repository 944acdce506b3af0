"""Firestore collection paths (schema-in-code).

Firestore has no DDL or migrations; collections appear on first write.
Tenant-scoped entities live in subcollections under tenants/{tenantId}.
"""

COLLECTION_USERS = "users"
COLLECTION_TENANTS = "tenants"

# Subcollections of tenants/{tenantId}
SUBCOLLECTION_CLIENTS = "clients"
SUBCOLLECTION_JOBS = "jobs"
SUBCOLLECTION_TENANT_USERS = "users"


def tenant_collection(tenant_id: str, subcollection: str) -> str:
    """Return 'tenants/{tenant_id}/{subcollection}'."""
    if not tenant_id or "/" in tenant_id:
        raise ValueError(f"Invalid tenant id: {tenant_id!r}")
    return f"{COLLECTION_TENANTS}/{tenant_id}/{subcollection}"
