from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable

from sqlalchemy.orm import Session

from shiftdesk.core.clock import iso, utcnow
from shiftdesk.core.errors import Conflict, InvalidInput, NotFound
from shiftdesk.models.client import Client
from shiftdesk.schemas.clients import ClientCreateIn, ClientUpdateIn
from shiftdesk.schemas.parsing import blank_to_none, parse_payload
from shiftdesk.stores.clients import ClientStore
from shiftdesk.stores.reference import ClientTypeStore

log = logging.getLogger("shiftdesk.clients")

# optional text fields: payload name -> column
_TEXT_FIELDS = {
    "address": "address",
    "suburb": "suburb",
    "state": "state",
    "postcode": "postcode",
    "phoneNumber": "phone_number",
    "contactPerson": "contact_person",
    "contactPhone": "contact_phone",
    "email": "email",
    "note": "note",
}


class ClientService:
    def __init__(
        self,
        db: Session,
        *,
        clients: ClientStore | None = None,
        client_types: ClientTypeStore | None = None,
        now_fn: Callable[[], datetime] = utcnow,
    ):
        self.db = db
        self.clients = clients or ClientStore(db)
        self.client_types = client_types or ClientTypeStore(db)
        self.now_fn = now_fn

    def list_clients(self, owner_email: str, *, include_archived: bool = False) -> list[dict[str, Any]]:
        rows = self.clients.find(owner_email, include_archived=include_archived)
        type_names = self._type_names(rows)
        return [self._client_payload(c, type_names) for c in rows]

    def get_client(self, owner_email: str, client_id: str) -> dict[str, Any]:
        client = self._get_or_404(owner_email, client_id)
        return self._client_payload(client, self._type_names([client]))

    def create_client(self, owner_email: str, payload: Any) -> dict[str, Any]:
        data = parse_payload(ClientCreateIn, payload)

        if self.clients.find_by_name(owner_email, data.name):
            raise Conflict("A client with this name already exists")

        client_type_id = self._check_client_type(data.clientTypeId)

        now = self.now_fn()
        client = Client(
            owner_email=owner_email,
            name=data.name,
            client_type_id=client_type_id,
            active=data.active,
            archived=False,
            created_at=now,
            updated_at=now,
        )
        for name, column in _TEXT_FIELDS.items():
            setattr(client, column, blank_to_none(getattr(data, name)))

        self.clients.add(client)
        self.db.commit()
        log.info("client created owner=%s id=%s", owner_email, client.id)
        return self._client_payload(client, self._type_names([client]))

    def update_client(self, owner_email: str, client_id: str, payload: Any) -> dict[str, Any]:
        data = parse_payload(ClientUpdateIn, payload)
        supplied = data.model_fields_set

        client = self._get_or_404(owner_email, client_id)

        if "name" in supplied and data.name != client.name:
            if self.clients.find_by_name(owner_email, data.name, exclude_id=client.id):
                raise Conflict("A client with this name already exists")
            client.name = data.name

        if "clientTypeId" in supplied:
            client.client_type_id = self._check_client_type(data.clientTypeId)
            client.client_type = None

        for name, column in _TEXT_FIELDS.items():
            if name in supplied:
                setattr(client, column, blank_to_none(getattr(data, name)))

        if "active" in supplied:
            client.active = data.active

        client.updated_at = self.now_fn()
        self.db.commit()
        log.info("client updated owner=%s id=%s", owner_email, client.id)
        return self._client_payload(client, self._type_names([client]))

    def archive_client(self, owner_email: str, client_id: str) -> dict[str, Any]:
        client = self._get_or_404(owner_email, client_id)
        if not client.archived:
            now = self.now_fn()
            client.archived = True
            client.archived_at = now
            client.updated_at = now
            self.db.commit()
            log.info("client archived owner=%s id=%s", owner_email, client.id)
        return {"id": client.id, "archived": True, "archivedAt": iso(client.archived_at)}

    def restore_client(self, owner_email: str, client_id: str) -> dict[str, Any]:
        client = self._get_or_404(owner_email, client_id)
        if client.archived:
            client.archived = False
            client.archived_at = None
            client.updated_at = self.now_fn()
            self.db.commit()
            log.info("client restored owner=%s id=%s", owner_email, client.id)
        return {"id": client.id, "archived": False, "archivedAt": None}

    def toggle_client_active(self, owner_email: str, client_id: str) -> dict[str, Any]:
        client = self._get_or_404(owner_email, client_id)
        client.active = not client.active
        client.updated_at = self.now_fn()
        self.db.commit()
        return {"id": client.id, "active": client.active}

    def delete_client_permanently(self, owner_email: str, client_id: str) -> dict[str, Any]:
        client = self._get_or_404(owner_email, client_id)
        if not client.archived:
            raise InvalidInput("Only archived clients can be permanently deleted")
        self.clients.delete(client)
        self.db.commit()
        log.info("client deleted owner=%s id=%s", owner_email, client_id)
        return {"id": client_id, "deleted": True}

    # ---------- Helpers ----------

    def _get_or_404(self, owner_email: str, client_id: str) -> Client:
        client = self.clients.find_by_id(owner_email, client_id)
        if client is None:
            raise NotFound("Client not found")
        return client

    def _check_client_type(self, client_type_id: str | None) -> str | None:
        client_type_id = blank_to_none(client_type_id)
        if client_type_id is None:
            return None
        client_type = self.client_types.find_by_id(client_type_id)
        if client_type is None or not client_type.active:
            raise InvalidInput("Invalid client type reference")
        return client_type_id

    def _type_names(self, clients: list[Client]) -> dict[str, str]:
        ids = {c.client_type_id for c in clients if c.client_type_id}
        return {t.id: t.name for t in self.client_types.find_by_ids(ids)}

    @staticmethod
    def _client_payload(c: Client, type_names: dict[str, str]) -> dict[str, Any]:
        if c.client_type_id:
            client_type = type_names.get(c.client_type_id, "")
        else:
            client_type = c.client_type or ""
        return {
            "id": c.id,
            "name": c.name,
            "address": c.address or "",
            "suburb": c.suburb or "",
            "state": c.state or "",
            "postcode": c.postcode or "",
            "clientTypeId": c.client_type_id or "",
            "clientType": client_type,
            "phoneNumber": c.phone_number or "",
            "contactPerson": c.contact_person or "",
            "contactPhone": c.contact_phone or "",
            "email": c.email or "",
            "note": c.note or "",
            "active": bool(c.active),
            "archived": bool(c.archived),
            "archivedAt": iso(c.archived_at),
            "createdAt": iso(c.created_at),
            "updatedAt": iso(c.updated_at),
        }
