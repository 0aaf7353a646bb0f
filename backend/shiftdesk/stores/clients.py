from __future__ import annotations

from typing import Iterable

from sqlalchemy import select

from shiftdesk.models.client import Client
from shiftdesk.stores.base import OwnedStore


class ClientStore(OwnedStore[Client]):
    model = Client

    def find(self, owner_email: str, *, include_archived: bool = False) -> list[Client]:
        stmt = select(Client).where(Client.owner_email == owner_email)
        if not include_archived:
            stmt = stmt.where(Client.archived.is_(False))
        return list(self.db.execute(stmt.order_by(Client.created_at.desc())).scalars().all())

    def find_by_name(self, owner_email: str, name: str, *, exclude_id: str | None = None) -> Client | None:
        stmt = select(Client).where(Client.owner_email == owner_email, Client.name == name)
        if exclude_id:
            stmt = stmt.where(Client.id != exclude_id)
        return self.db.execute(stmt).scalars().first()

    def find_by_names(self, owner_email: str, names: Iterable[str]) -> list[Client]:
        wanted = {n for n in names if n}
        if not wanted:
            return []
        return list(
            self.db.execute(
                select(Client).where(Client.owner_email == owner_email, Client.name.in_(wanted))
            ).scalars().all()
        )
