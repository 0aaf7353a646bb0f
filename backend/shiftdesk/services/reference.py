from __future__ import annotations

from sqlalchemy.orm import Session

from shiftdesk.stores.reference import ClientTypeStore, IdTypeStore


def list_client_types(db: Session) -> list[dict]:
    return [{"id": t.id, "name": t.name, "order": t.order} for t in ClientTypeStore(db).find_active()]


def list_id_types(db: Session) -> list[dict]:
    return [{"id": t.id, "name": t.name, "order": t.order} for t in IdTypeStore(db).find_active()]
