from __future__ import annotations

from typing import Iterable

from sqlalchemy import select
from sqlalchemy.orm import Session

from shiftdesk.models.reference import ClientType, IdType


class _LookupStore:
    model: type[ClientType] | type[IdType]

    def __init__(self, db: Session):
        self.db = db

    def find_active(self):
        return self.db.execute(
            select(self.model).where(self.model.active.is_(True)).order_by(self.model.order.asc(), self.model.name.asc())
        ).scalars().all()

    def find_by_id(self, type_id: str):
        return self.db.execute(select(self.model).where(self.model.id == type_id)).scalar_one_or_none()

    def find_by_ids(self, ids: Iterable[str]):
        wanted = {i for i in ids if i}
        if not wanted:
            return []
        return self.db.execute(select(self.model).where(self.model.id.in_(wanted))).scalars().all()


class ClientTypeStore(_LookupStore):
    model = ClientType


class IdTypeStore(_LookupStore):
    model = IdType
