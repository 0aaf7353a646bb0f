import pytest

from shiftdesk.core.errors import Conflict, InvalidInput, NotFound
from shiftdesk.services.reference import list_client_types

from conftest import OTHER_OWNER, OWNER


def test_create_and_get(clients, client_types):
    created = clients.create_client(
        OWNER,
        {"name": "Acme", "clientTypeId": client_types["NDIS"], "email": "ops@acme.com", "postcode": "3000"},
    )
    assert created["clientType"] == "NDIS"
    assert created["active"] is True
    assert created["archived"] is False
    assert clients.get_client(OWNER, created["id"]) == created


def test_name_is_unique_per_owner(clients):
    clients.create_client(OWNER, {"name": "Acme"})
    clients.create_client(OTHER_OWNER, {"name": "Acme"})

    with pytest.raises(Conflict):
        clients.create_client(OWNER, {"name": "Acme"})


def test_rename_onto_existing_name_conflicts(clients):
    clients.create_client(OWNER, {"name": "Acme"})
    other = clients.create_client(OWNER, {"name": "Beta"})["id"]

    with pytest.raises(Conflict):
        clients.update_client(OWNER, other, {"name": "Acme"})
    assert clients.update_client(OWNER, other, {"name": "Beta"})["name"] == "Beta"


def test_client_type_must_exist(clients, client_types):
    with pytest.raises(InvalidInput, match="client type"):
        clients.create_client(OWNER, {"name": "Acme", "clientTypeId": "missing"})


def test_legacy_client_type_alias(clients, client_types):
    created = clients.create_client(OWNER, {"name": "Acme", "clientType": client_types["Aged Care"]})
    assert created["clientTypeId"] == client_types["Aged Care"]
    assert created["clientType"] == "Aged Care"


def test_blank_client_type_clears_it(clients, client_types):
    client_id = clients.create_client(OWNER, {"name": "Acme", "clientTypeId": client_types["NDIS"]})["id"]

    view = clients.update_client(OWNER, client_id, {"clientTypeId": ""})
    assert view["clientTypeId"] == ""
    assert view["clientType"] == ""


def test_invalid_email_rejected(clients):
    with pytest.raises(InvalidInput):
        clients.create_client(OWNER, {"name": "Acme", "email": "not-an-email"})


def test_update_is_merge_patch(clients):
    client_id = clients.create_client(OWNER, {"name": "Acme", "suburb": "Carlton", "note": "gate code 12"})["id"]

    view = clients.update_client(OWNER, client_id, {"suburb": "Fitzroy"})
    assert view["suburb"] == "Fitzroy"
    assert view["note"] == "gate code 12"


def test_update_cannot_clear_name(clients):
    client_id = clients.create_client(OWNER, {"name": "Acme"})["id"]
    with pytest.raises(InvalidInput):
        clients.update_client(OWNER, client_id, {"name": None})


def test_toggle_active_is_independent_of_archive(clients):
    client_id = clients.create_client(OWNER, {"name": "Acme"})["id"]

    assert clients.toggle_client_active(OWNER, client_id) == {"id": client_id, "active": False}
    listed = clients.list_clients(OWNER)
    assert [c["id"] for c in listed] == [client_id]
    assert listed[0]["active"] is False

    clients.archive_client(OWNER, client_id)
    assert clients.list_clients(OWNER) == []
    assert clients.toggle_client_active(OWNER, client_id)["active"] is True


def test_archive_restore_delete(clients):
    client_id = clients.create_client(OWNER, {"name": "Acme"})["id"]

    with pytest.raises(InvalidInput, match="Only archived clients"):
        clients.delete_client_permanently(OWNER, client_id)

    first = clients.archive_client(OWNER, client_id)
    assert clients.archive_client(OWNER, client_id)["archivedAt"] == first["archivedAt"]
    assert [c["id"] for c in clients.list_clients(OWNER, include_archived=True)] == [client_id]

    assert clients.restore_client(OWNER, client_id) == {"id": client_id, "archived": False, "archivedAt": None}
    clients.archive_client(OWNER, client_id)
    assert clients.delete_client_permanently(OWNER, client_id)["deleted"] is True

    with pytest.raises(NotFound):
        clients.get_client(OWNER, client_id)


def test_other_owner_cannot_see_client(clients):
    client_id = clients.create_client(OWNER, {"name": "Acme"})["id"]

    with pytest.raises(NotFound):
        clients.get_client(OTHER_OWNER, client_id)
    with pytest.raises(NotFound):
        clients.update_client(OTHER_OWNER, client_id, {"note": "x"})
    assert clients.list_clients(OTHER_OWNER) == []


def test_list_client_types_only_active_in_order(db, client_types):
    assert list_client_types(db) == [
        {"id": client_types["Aged Care"], "name": "Aged Care", "order": 1},
        {"id": client_types["NDIS"], "name": "NDIS", "order": 2},
    ]


def test_inactive_client_type_rejected(clients, client_types):
    with pytest.raises(InvalidInput):
        clients.create_client(OWNER, {"name": "Acme", "clientTypeId": client_types["Retired"]})
