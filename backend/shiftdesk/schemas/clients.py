from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from shiftdesk.schemas.parsing import CLIENT_FIELD_ALIASES, check_email, rename_legacy_fields


class ClientCreateIn(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=200)
    address: str | None = Field(default=None, max_length=200)
    suburb: str | None = Field(default=None, max_length=100)
    state: str | None = Field(default=None, max_length=50)
    postcode: str | None = Field(default=None, max_length=10)
    clientTypeId: str | None = Field(default=None, max_length=50)
    phoneNumber: str | None = Field(default=None, max_length=20)
    contactPerson: str | None = Field(default=None, max_length=100)
    contactPhone: str | None = Field(default=None, max_length=20)
    email: str | None = Field(default=None, max_length=200)
    note: str | None = Field(default=None, max_length=1000)
    active: bool = True

    rename_legacy = rename_legacy_fields(CLIENT_FIELD_ALIASES)
    validate_email = field_validator("email")(check_email)


class ClientUpdateIn(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str | None = Field(default=None, min_length=1, max_length=200)
    address: str | None = Field(default=None, max_length=200)
    suburb: str | None = Field(default=None, max_length=100)
    state: str | None = Field(default=None, max_length=50)
    postcode: str | None = Field(default=None, max_length=10)
    clientTypeId: str | None = Field(default=None, max_length=50)
    phoneNumber: str | None = Field(default=None, max_length=20)
    contactPerson: str | None = Field(default=None, max_length=100)
    contactPhone: str | None = Field(default=None, max_length=20)
    email: str | None = Field(default=None, max_length=200)
    note: str | None = Field(default=None, max_length=1000)
    active: bool | None = None

    rename_legacy = rename_legacy_fields(CLIENT_FIELD_ALIASES)
    validate_email = field_validator("email")(check_email)

    @field_validator("name", "active", mode="before")
    @classmethod
    def reject_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be cleared")
        return v
