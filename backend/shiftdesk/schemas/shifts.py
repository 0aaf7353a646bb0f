from __future__ import annotations

from datetime import date, time
from typing import Annotated, Optional, List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from shiftdesk.models.enums import ShiftStatus
from shiftdesk.schemas.parsing import SHIFT_FIELD_ALIASES, check_hh_mm, rename_legacy_fields

StaffId = Annotated[str, Field(min_length=1, max_length=100)]


def _break_minutes(v):
    if v is None or v == "":
        return 0
    return v


class ShiftCreateIn(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    serviceDate: date
    startTime: time
    endTime: time
    breakDuration: int = Field(0, ge=0)
    serviceType: str | None = Field(default=None, max_length=100)
    clientId: str = Field(..., min_length=1, max_length=100)
    staffMemberId: str | None = Field(default=None, max_length=100)
    notifiedStaffMemberIds: Optional[List[StaffId]] = None
    status: ShiftStatus | None = None
    note: str | None = Field(default=None, max_length=1000)

    rename_legacy = rename_legacy_fields(SHIFT_FIELD_ALIASES)
    normalize_break = field_validator("breakDuration", mode="before")(_break_minutes)
    minutes_only = field_validator("startTime", "endTime", mode="before")(check_hh_mm)


class ShiftUpdateIn(BaseModel):
    """Merge-patch: only fields present in the payload (model_fields_set) apply."""

    model_config = ConfigDict(str_strip_whitespace=True)

    serviceDate: date | None = None
    startTime: time | None = None
    endTime: time | None = None
    breakDuration: int | None = Field(default=None, ge=0)
    serviceType: str | None = Field(default=None, max_length=100)
    clientId: str | None = Field(default=None, max_length=100)
    staffMemberId: str | None = Field(default=None, max_length=100)
    notifiedStaffMemberIds: Optional[List[StaffId]] = None
    status: ShiftStatus | None = None
    note: str | None = Field(default=None, max_length=1000)

    rename_legacy = rename_legacy_fields(SHIFT_FIELD_ALIASES)
    normalize_break = field_validator("breakDuration", mode="before")(_break_minutes)
    minutes_only = field_validator("startTime", "endTime", mode="before")(check_hh_mm)

    @field_validator("serviceDate", "startTime", "endTime", "clientId", "status", mode="before")
    @classmethod
    def reject_null(cls, v, info):
        if v is None or v == "":
            raise ValueError(f"{info.field_name} cannot be cleared")
        return v

    @field_validator("notifiedStaffMemberIds", mode="before")
    @classmethod
    def null_list_is_empty(cls, v):
        return [] if v is None else v
