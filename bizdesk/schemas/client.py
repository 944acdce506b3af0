"""Client API schemas: create/update projections and responses."""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, model_validator

from bizdesk.schemas.projections import reject_explicit_nulls

ClientName = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)
]
ShortText = Annotated[str, StringConstraints(strip_whitespace=True, max_length=255)]
LongText = Annotated[str, StringConstraints(max_length=5000)]


class ClientContact(BaseModel):
    """Additional contact person at a client."""

    name: ClientName
    email: ShortText | None = None
    phone: ShortText | None = None
    position: ShortText | None = None


class ClientAddress(BaseModel):
    """Postal address; every part optional."""

    street: ShortText | None = None
    city: ShortText | None = None
    state: ShortText | None = None
    postcode: ShortText | None = None
    country: ShortText | None = None


class ClientCreate(BaseModel):
    """Form data for creating a client (no server-assigned fields)."""

    name: ClientName
    email: ShortText | None = None
    phone: ShortText | None = None
    abn: ShortText | None = Field(default=None, description="Australian Business Number")
    address: ClientAddress | None = None
    contacts: list[ClientContact] = Field(default_factory=list)
    notes: LongText | None = None
    is_active: bool = True


class ClientUpdate(BaseModel):
    """Partial update: the ClientCreate fields, all optional."""

    name: ClientName | None = None
    email: ShortText | None = None
    phone: ShortText | None = None
    abn: ShortText | None = None
    address: ClientAddress | None = None
    contacts: list[ClientContact] | None = None
    notes: LongText | None = None
    is_active: bool | None = None

    @model_validator(mode="after")
    def check_required_not_null(self) -> "ClientUpdate":
        reject_explicit_nulls(self, ("name", "contacts", "is_active"))
        return self


class ClientResponse(ClientCreate):
    """Client as stored, including server-assigned fields."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    tenant_id: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
    created_by: str = ""
