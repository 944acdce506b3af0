"""Firestore-backed repository implementations."""

from bizdesk.infrastructure.firebase.repositories.client_repo_firestore import (
    FirestoreClientRepository,
)
from bizdesk.infrastructure.firebase.repositories.job_repo_firestore import (
    FirestoreJobRepository,
)
from bizdesk.infrastructure.firebase.repositories.tenant_repo_firestore import (
    FirestoreTenantRepository,
)

__all__ = [
    "FirestoreClientRepository",
    "FirestoreJobRepository",
    "FirestoreTenantRepository",
]
