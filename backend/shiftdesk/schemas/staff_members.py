from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from shiftdesk.schemas.parsing import STAFF_MEMBER_FIELD_ALIASES, check_email, rename_legacy_fields


class StaffMemberCreateIn(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=200)
    phone: str | None = Field(default=None, max_length=20)
    idTypeId: str | None = Field(default=None, max_length=50)
    idNumber: str | None = Field(default=None, max_length=100)
    address: str | None = Field(default=None, max_length=200)
    suburb: str | None = Field(default=None, max_length=100)
    state: str | None = Field(default=None, max_length=50)
    postcode: str | None = Field(default=None, max_length=10)

    rename_legacy = rename_legacy_fields(STAFF_MEMBER_FIELD_ALIASES)
    validate_email = field_validator("email")(check_email)


class StaffMemberUpdateIn(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str | None = Field(default=None, min_length=1, max_length=100)
    email: str | None = Field(default=None, min_length=3, max_length=200)
    phone: str | None = Field(default=None, max_length=20)
    idTypeId: str | None = Field(default=None, max_length=50)
    idNumber: str | None = Field(default=None, max_length=100)
    address: str | None = Field(default=None, max_length=200)
    suburb: str | None = Field(default=None, max_length=100)
    state: str | None = Field(default=None, max_length=50)
    postcode: str | None = Field(default=None, max_length=10)

    rename_legacy = rename_legacy_fields(STAFF_MEMBER_FIELD_ALIASES)
    validate_email = field_validator("email")(check_email)

    @field_validator("name", "email", mode="before")
    @classmethod
    def reject_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be cleared")
        return v
