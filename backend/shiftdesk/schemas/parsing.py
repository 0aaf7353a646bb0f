from __future__ import annotations

import re
from typing import Any, Mapping, TypeVar

from pydantic import BaseModel, ValidationError, model_validator

from shiftdesk.core.errors import InvalidInput, invalid_input_from

M = TypeVar("M", bound=BaseModel)

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

# legacy name -> current name
SHIFT_FIELD_ALIASES: dict[str, str] = {
    "teamMemberId": "staffMemberId",
    "notifiedTeamMemberIds": "notifiedStaffMemberIds",
    "teamMemberIds": "notifiedStaffMemberIds",
    "breakDurationMinutes": "breakDuration",
}
CLIENT_FIELD_ALIASES: dict[str, str] = {
    "clientType": "clientTypeId",
}
STAFF_MEMBER_FIELD_ALIASES: dict[str, str] = {
    "idType": "idTypeId",
}


def normalize_payload(raw: Mapping[str, Any], aliases: Mapping[str, str]) -> dict[str, Any]:
    """Map legacy keys onto their current names.

    A legacy key is dropped; its value is used only when the current key is
    absent from the payload. Pure: the input mapping is not modified.
    """
    out = dict(raw)
    for legacy, current in aliases.items():
        if legacy not in out:
            continue
        value = out.pop(legacy)
        if current not in raw:
            out[current] = value
    return out


def rename_legacy_fields(aliases: Mapping[str, str]):
    """Build a mode="before" model validator applying normalize_payload."""

    def validator(cls, data: Any) -> Any:
        if isinstance(data, Mapping):
            return normalize_payload(data, aliases)
        return data

    return model_validator(mode="before")(classmethod(validator))


def parse_payload(schema: type[M], raw: Any) -> M:
    """Validate a service payload; schemas rename their own legacy fields."""
    if isinstance(raw, schema):
        return raw
    if not isinstance(raw, Mapping):
        raise InvalidInput("Invalid input: expected a JSON object")
    try:
        return schema.model_validate(raw)
    except ValidationError as e:
        raise invalid_input_from(e) from e


def blank_to_none(v: str | None) -> str | None:
    if v is None:
        return None
    v = v.strip()
    return v or None


def check_email(v: str | None) -> str | None:
    if v and not EMAIL_RE.match(v):
        raise ValueError("Invalid email address")
    return v


HH_MM_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def check_hh_mm(v):
    if isinstance(v, str):
        v = v.strip()
        if not HH_MM_RE.match(v):
            raise ValueError("Time must be HH:MM")
    return v
