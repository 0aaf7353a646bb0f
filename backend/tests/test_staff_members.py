import pytest

from shiftdesk.core.errors import Conflict, InvalidInput, NotFound
from shiftdesk.services.reference import list_id_types

from conftest import OTHER_OWNER, OWNER


def test_create_with_id_type(staff, id_types):
    view = staff.create_staff_member(
        OWNER, {"name": "Sam", "email": "sam@x.com", "idTypeId": id_types["Passport"], "idNumber": "PA123"}
    )
    assert view["idType"] == "Passport"
    assert view["idNumber"] == "PA123"
    assert view["active"] is True


def test_legacy_id_type_alias(staff, id_types):
    view = staff.create_staff_member(OWNER, {"name": "Sam", "email": "sam@x.com", "idType": id_types["Passport"]})
    assert view["idTypeId"] == id_types["Passport"]


def test_unknown_id_type_rejected(staff):
    with pytest.raises(InvalidInput):
        staff.create_staff_member(OWNER, {"name": "Sam", "email": "sam@x.com", "idTypeId": "nope"})


def test_email_required_and_checked(staff):
    with pytest.raises(InvalidInput):
        staff.create_staff_member(OWNER, {"name": "Sam"})
    with pytest.raises(InvalidInput):
        staff.create_staff_member(OWNER, {"name": "Sam", "email": "sam"})


def test_email_unique_per_owner(staff):
    staff.create_staff_member(OWNER, {"name": "Sam", "email": "sam@x.com"})
    staff.create_staff_member(OTHER_OWNER, {"name": "Sam", "email": "sam@x.com"})

    with pytest.raises(Conflict):
        staff.create_staff_member(OWNER, {"name": "Samuel", "email": "sam@x.com"})


def test_email_change_onto_existing_conflicts(staff):
    staff.create_staff_member(OWNER, {"name": "Sam", "email": "sam@x.com"})
    other = staff.create_staff_member(OWNER, {"name": "Sue", "email": "sue@x.com"})["id"]

    with pytest.raises(Conflict):
        staff.update_staff_member(OWNER, other, {"email": "sam@x.com"})

    view = staff.update_staff_member(OWNER, other, {"email": "sue.new@x.com", "phone": "0400"})
    assert view["email"] == "sue.new@x.com"
    assert view["phone"] == "0400"
    assert view["name"] == "Sue"


def test_lifecycle(staff):
    member_id = staff.create_staff_member(OWNER, {"name": "Sam", "email": "sam@x.com"})["id"]

    assert staff.toggle_staff_member_active(OWNER, member_id)["active"] is False
    with pytest.raises(InvalidInput, match="Only archived staff members"):
        staff.delete_staff_member_permanently(OWNER, member_id)

    staff.archive_staff_member(OWNER, member_id)
    assert staff.list_staff_members(OWNER) == []
    staff.restore_staff_member(OWNER, member_id)
    assert [m["id"] for m in staff.list_staff_members(OWNER)] == [member_id]

    staff.archive_staff_member(OWNER, member_id)
    staff.delete_staff_member_permanently(OWNER, member_id)
    with pytest.raises(NotFound):
        staff.get_staff_member(OWNER, member_id)


def test_other_owner_cannot_touch_member(staff):
    member_id = staff.create_staff_member(OWNER, {"name": "Sam", "email": "sam@x.com"})["id"]

    with pytest.raises(NotFound):
        staff.archive_staff_member(OTHER_OWNER, member_id)


def test_list_id_types_in_order(db, id_types):
    assert [t["name"] for t in list_id_types(db)] == ["Driver Licence", "Passport"]
