import pytest

from shiftdesk.auth.deps import get_jwt_config
from shiftdesk.auth.jwt_tokens import JwtConfig, create_access_token, decode_access_token
from shiftdesk.core.config import settings

from conftest import OTHER_OWNER, OWNER


def _auth(email=OWNER):
    return {"Authorization": f"Bearer {create_access_token(get_jwt_config(), email)}"}


def test_health(api):
    assert api.get("/health").json() == {"status": "ok"}


def test_requires_authentication(api):
    r = api.get("/shifts")
    assert r.status_code == 401
    assert r.json() == {"detail": "Not authenticated"}


def test_rejects_bad_token(api):
    r = api.get("/shifts", headers={"Authorization": "Bearer garbage"})
    assert r.status_code == 401
    assert r.json()["detail"] == "Invalid token"


def test_rejects_token_signed_with_other_secret(api):
    cfg = JwtConfig(secret="other", issuer=settings.JWT_ISS, audience=settings.JWT_AUD, ttl_seconds=60)
    r = api.get("/shifts", headers={"Authorization": f"Bearer {create_access_token(cfg, OWNER)}"})
    assert r.status_code == 401


def test_token_round_trip_carries_owner_email():
    cfg = get_jwt_config()
    assert decode_access_token(cfg, create_access_token(cfg, OWNER))["sub"] == OWNER


def test_cookie_auth(api):
    token = create_access_token(get_jwt_config(), OWNER)
    assert api.get("/clients", headers={"Cookie": f"access_token={token}"}).status_code == 200


def test_email_header_ignored_unless_trusted(api, monkeypatch):
    assert api.get("/clients", headers={"x-user-email": OWNER}).status_code == 401

    monkeypatch.setattr(settings, "TRUST_EMAIL_HEADER", True)
    assert api.get("/clients", headers={"x-user-email": OWNER}).status_code == 200


def test_shift_flow_over_http(api):
    client_id = api.post("/clients", json={"name": "C1"}, headers=_auth()).json()["id"]
    member_id = api.post("/staff-members", json={"name": "Sam", "email": "sam@x.com"}, headers=_auth()).json()["id"]

    r = api.post(
        "/shifts",
        json={"serviceDate": "2024-06-01", "startTime": "09:00", "endTime": "17:00", "clientId": client_id},
        headers=_auth(),
    )
    assert r.status_code == 201
    shift = r.json()
    assert shift["status"] == "Drafted"

    r = api.patch(f"/shifts/{shift['id']}", json={"teamMemberId": member_id}, headers=_auth())
    assert r.status_code == 200
    assert r.json()["status"] == "Assigned"
    assert r.json()["staffMemberName"] == "Sam"

    assert api.delete(f"/shifts/{shift['id']}", headers=_auth()).status_code == 400
    assert api.post(f"/shifts/{shift['id']}/archive", headers=_auth()).json()["archived"] is True
    assert api.get("/shifts", headers=_auth()).json() == []
    assert len(api.get("/shifts?includeArchived=true", headers=_auth()).json()) == 1
    assert api.post(f"/shifts/{shift['id']}/restore", headers=_auth()).json()["archived"] is False

    api.post(f"/shifts/{shift['id']}/archive", headers=_auth())
    assert api.delete(f"/shifts/{shift['id']}", headers=_auth()).json() == {"id": shift["id"], "deleted": True}
    assert api.get(f"/shifts/{shift['id']}", headers=_auth()).status_code == 404


def test_service_errors_map_to_status_codes(api):
    r = api.post("/shifts", json={"serviceDate": "2024-06-01", "startTime": "09:00", "endTime": "17:00", "clientId": "nope"}, headers=_auth())
    assert r.status_code == 400
    assert r.json() == {"detail": "Client not found"}

    assert api.get("/shifts/nope", headers=_auth()).status_code == 404

    api.post("/clients", json={"name": "C1"}, headers=_auth())
    r = api.post("/clients", json={"name": "C1"}, headers=_auth())
    assert r.status_code == 409

    r = api.post("/shifts", json=["not", "an", "object"], headers=_auth())
    assert r.status_code == 400


def test_http_tenant_isolation(api):
    client_id = api.post("/clients", json={"name": "C1"}, headers=_auth()).json()["id"]

    assert api.get(f"/clients/{client_id}", headers=_auth(OTHER_OWNER)).status_code == 404
    assert api.get("/clients", headers=_auth(OTHER_OWNER)).json() == []


@pytest.mark.parametrize("query", ["page=0", "pageSize=0", "pageSize=100000"])
def test_bad_paging_is_400(api, query):
    assert api.get(f"/shifts?{query}", headers=_auth()).status_code == 400


def test_reference_lists(api, client_types, id_types):
    assert [t["name"] for t in api.get("/client-types").json()] == ["Aged Care", "NDIS"]
    assert [t["name"] for t in api.get("/id-types").json()] == ["Driver Licence", "Passport"]


def test_toggle_active_routes(api):
    client_id = api.post("/clients", json={"name": "C1"}, headers=_auth()).json()["id"]
    member_id = api.post("/staff-members", json={"name": "Sam", "email": "sam@x.com"}, headers=_auth()).json()["id"]

    assert api.post(f"/clients/{client_id}/toggle-active", headers=_auth()).json()["active"] is False
    assert api.post(f"/staff-members/{member_id}/toggle-active", headers=_auth()).json()["active"] is False


def test_request_bodies_are_typed_in_openapi(api):
    spec = api.get("/openapi.json").json()
    body = spec["paths"]["/shifts"]["post"]["requestBody"]["content"]["application/json"]["schema"]
    assert body["$ref"].endswith("/ShiftCreateIn")
    assert "ShiftUpdateIn" in spec["components"]["schemas"]
    assert "ClientCreateIn" in spec["components"]["schemas"]
    assert "StaffMemberUpdateIn" in spec["components"]["schemas"]


def test_body_validation_errors_are_400(api):
    client_id = api.post("/clients", json={"name": "C1"}, headers=_auth()).json()["id"]

    r = api.post(
        "/shifts",
        json={"serviceDate": "2024-06-01", "startTime": "09:00:30", "endTime": "17:00", "clientId": client_id},
        headers=_auth(),
    )
    assert r.status_code == 400
    assert r.json()["detail"].startswith("Invalid input: startTime")


def test_legacy_client_type_over_http(api, client_types):
    r = api.post("/clients", json={"name": "C1", "clientType": client_types["NDIS"]}, headers=_auth())
    assert r.status_code == 201
    assert r.json()["clientType"] == "NDIS"
