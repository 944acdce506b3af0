"""DTOs for client use cases."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class ClientResult:
    """Client read-model. address and contacts are plain dicts as stored."""

    id: str
    tenant_id: str
    name: str
    email: str | None = None
    phone: str | None = None
    abn: str | None = None
    address: dict[str, Any] | None = None
    contacts: list[dict[str, Any]] = field(default_factory=list)
    notes: str | None = None
    is_active: bool = True
    created_at: datetime | None = None
    updated_at: datetime | None = None
    created_by: str = ""
