import pytest
from pydantic import BaseModel

from shiftdesk.core.errors import InvalidInput
from shiftdesk.schemas.parsing import (
    CLIENT_FIELD_ALIASES,
    SHIFT_FIELD_ALIASES,
    STAFF_MEMBER_FIELD_ALIASES,
    blank_to_none,
    normalize_payload,
    parse_payload,
)
from shiftdesk.schemas.shifts import ShiftCreateIn, ShiftUpdateIn


def test_legacy_keys_are_renamed():
    out = normalize_payload({"teamMemberId": "s1", "teamMemberIds": ["s2"], "note": "n"}, SHIFT_FIELD_ALIASES)
    assert out == {"staffMemberId": "s1", "notifiedStaffMemberIds": ["s2"], "note": "n"}


def test_current_key_wins_and_legacy_is_dropped():
    raw = {"staffMemberId": "new", "teamMemberId": "old"}
    out = normalize_payload(raw, SHIFT_FIELD_ALIASES)
    assert out == {"staffMemberId": "new"}
    assert raw == {"staffMemberId": "new", "teamMemberId": "old"}


def test_legacy_null_still_counts_as_supplied():
    out = normalize_payload({"notifiedTeamMemberIds": None}, SHIFT_FIELD_ALIASES)
    assert out == {"notifiedStaffMemberIds": None}


def test_reference_aliases():
    assert normalize_payload({"clientType": "t1"}, CLIENT_FIELD_ALIASES) == {"clientTypeId": "t1"}
    assert normalize_payload({"idType": "i1"}, STAFF_MEMBER_FIELD_ALIASES) == {"idTypeId": "i1"}


def test_parse_payload_requires_object():
    with pytest.raises(InvalidInput, match="expected a JSON object"):
        parse_payload(ShiftUpdateIn, ["not", "a", "dict"])


def test_parse_payload_lists_offending_fields():
    with pytest.raises(InvalidInput) as exc:
        parse_payload(ShiftCreateIn, {"serviceDate": "nope", "startTime": "09:00", "endTime": "17:00"})
    assert "serviceDate" in exc.value.detail
    assert "clientId" in exc.value.detail


def test_parse_payload_passes_models_through():
    class Thing(BaseModel):
        x: int

    thing = Thing(x=1)
    assert parse_payload(Thing, thing) is thing


def test_update_schema_tracks_supplied_fields():
    data = parse_payload(ShiftUpdateIn, {"note": "", "notifiedStaffMemberIds": None})
    assert data.model_fields_set == {"note", "notifiedStaffMemberIds"}
    assert data.notifiedStaffMemberIds == []


@pytest.mark.parametrize("field", ["serviceDate", "startTime", "endTime", "clientId", "status"])
def test_update_schema_rejects_clearing_required_fields(field):
    with pytest.raises(InvalidInput):
        parse_payload(ShiftUpdateIn, {field: None})


def test_blank_break_duration_is_zero():
    data = parse_payload(
        ShiftCreateIn,
        {"serviceDate": "2024-06-01", "startTime": "09:00", "endTime": "17:00", "clientId": "c", "breakDuration": ""},
    )
    assert data.breakDuration == 0


def test_blank_to_none():
    assert blank_to_none(None) is None
    assert blank_to_none("   ") is None
    assert blank_to_none(" x ") == "x"


def test_schemas_rename_legacy_fields_themselves():
    data = ShiftUpdateIn.model_validate({"teamMemberId": "s1", "breakDurationMinutes": 20})
    assert data.staffMemberId == "s1"
    assert data.breakDuration == 20
    assert data.model_fields_set == {"staffMemberId", "breakDuration"}


@pytest.mark.parametrize("value", ["09:00:30", "9:00", "24:00", "0900"])
def test_times_must_be_hours_and_minutes(value):
    body = {"serviceDate": "2024-06-01", "startTime": value, "endTime": "17:00", "clientId": "c"}
    with pytest.raises(InvalidInput, match="HH:MM"):
        parse_payload(ShiftCreateIn, body)
    with pytest.raises(InvalidInput, match="HH:MM"):
        parse_payload(ShiftUpdateIn, {"endTime": value})
