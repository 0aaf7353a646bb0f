from __future__ import annotations

from sqlalchemy import select

from shiftdesk.models.shift import Shift
from shiftdesk.stores.base import OwnedStore


class ShiftStore(OwnedStore[Shift]):
    model = Shift

    def find_page(
        self,
        owner_email: str,
        *,
        include_archived: bool = False,
        offset: int = 0,
        limit: int = 100,
    ) -> list[Shift]:
        stmt = select(Shift).where(Shift.owner_email == owner_email)
        if not include_archived:
            stmt = stmt.where(Shift.archived.is_(False))
        stmt = (
            stmt.order_by(Shift.service_date.desc(), Shift.start_time.desc(), Shift.id.asc())
            .offset(offset)
            .limit(limit)
        )
        return list(self.db.execute(stmt).scalars().all())
