from __future__ import annotations

from sqlalchemy import select

from shiftdesk.models.staff_member import StaffMember
from shiftdesk.stores.base import OwnedStore


class StaffMemberStore(OwnedStore[StaffMember]):
    model = StaffMember

    def find(self, owner_email: str, *, include_archived: bool = False) -> list[StaffMember]:
        stmt = select(StaffMember).where(StaffMember.owner_email == owner_email)
        if not include_archived:
            stmt = stmt.where(StaffMember.archived.is_(False))
        return list(self.db.execute(stmt.order_by(StaffMember.created_at.desc())).scalars().all())

    def find_by_email(self, owner_email: str, email: str, *, exclude_id: str | None = None) -> StaffMember | None:
        stmt = select(StaffMember).where(StaffMember.owner_email == owner_email, StaffMember.email == email)
        if exclude_id:
            stmt = stmt.where(StaffMember.id != exclude_id)
        return self.db.execute(stmt).scalars().first()
