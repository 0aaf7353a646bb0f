from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable

from sqlalchemy.orm import Session

from shiftdesk.core.clock import iso, utcnow
from shiftdesk.core.errors import Conflict, InvalidInput, NotFound
from shiftdesk.models.staff_member import StaffMember
from shiftdesk.schemas.parsing import blank_to_none, parse_payload
from shiftdesk.schemas.staff_members import StaffMemberCreateIn, StaffMemberUpdateIn
from shiftdesk.stores.reference import IdTypeStore
from shiftdesk.stores.staff_members import StaffMemberStore

log = logging.getLogger("shiftdesk.staff_members")

_TEXT_FIELDS = {
    "phone": "phone",
    "idNumber": "id_number",
    "address": "address",
    "suburb": "suburb",
    "state": "state",
    "postcode": "postcode",
}


class StaffMemberService:
    def __init__(
        self,
        db: Session,
        *,
        staff_members: StaffMemberStore | None = None,
        id_types: IdTypeStore | None = None,
        now_fn: Callable[[], datetime] = utcnow,
    ):
        self.db = db
        self.staff_members = staff_members or StaffMemberStore(db)
        self.id_types = id_types or IdTypeStore(db)
        self.now_fn = now_fn

    def list_staff_members(self, owner_email: str, *, include_archived: bool = False) -> list[dict[str, Any]]:
        rows = self.staff_members.find(owner_email, include_archived=include_archived)
        type_names = self._type_names(rows)
        return [self._member_payload(m, type_names) for m in rows]

    def get_staff_member(self, owner_email: str, member_id: str) -> dict[str, Any]:
        member = self._get_or_404(owner_email, member_id)
        return self._member_payload(member, self._type_names([member]))

    def create_staff_member(self, owner_email: str, payload: Any) -> dict[str, Any]:
        data = parse_payload(StaffMemberCreateIn, payload)

        if self.staff_members.find_by_email(owner_email, data.email):
            raise Conflict("A staff member with this email already exists")

        now = self.now_fn()
        member = StaffMember(
            owner_email=owner_email,
            name=data.name,
            email=data.email,
            id_type_id=self._check_id_type(data.idTypeId),
            active=True,
            archived=False,
            created_at=now,
            updated_at=now,
        )
        for name, column in _TEXT_FIELDS.items():
            setattr(member, column, blank_to_none(getattr(data, name)))

        self.staff_members.add(member)
        self.db.commit()
        log.info("staff member created owner=%s id=%s", owner_email, member.id)
        return self._member_payload(member, self._type_names([member]))

    def update_staff_member(self, owner_email: str, member_id: str, payload: Any) -> dict[str, Any]:
        data = parse_payload(StaffMemberUpdateIn, payload)
        supplied = data.model_fields_set

        member = self._get_or_404(owner_email, member_id)

        if "email" in supplied and data.email != member.email:
            if self.staff_members.find_by_email(owner_email, data.email, exclude_id=member.id):
                raise Conflict("A staff member with this email already exists")
            member.email = data.email

        if "name" in supplied:
            member.name = data.name

        if "idTypeId" in supplied:
            member.id_type_id = self._check_id_type(data.idTypeId)

        for name, column in _TEXT_FIELDS.items():
            if name in supplied:
                setattr(member, column, blank_to_none(getattr(data, name)))

        member.updated_at = self.now_fn()
        self.db.commit()
        log.info("staff member updated owner=%s id=%s", owner_email, member.id)
        return self._member_payload(member, self._type_names([member]))

    def archive_staff_member(self, owner_email: str, member_id: str) -> dict[str, Any]:
        member = self._get_or_404(owner_email, member_id)
        if not member.archived:
            now = self.now_fn()
            member.archived = True
            member.archived_at = now
            member.updated_at = now
            self.db.commit()
            log.info("staff member archived owner=%s id=%s", owner_email, member.id)
        return {"id": member.id, "archived": True, "archivedAt": iso(member.archived_at)}

    def restore_staff_member(self, owner_email: str, member_id: str) -> dict[str, Any]:
        member = self._get_or_404(owner_email, member_id)
        if member.archived:
            member.archived = False
            member.archived_at = None
            member.updated_at = self.now_fn()
            self.db.commit()
        return {"id": member.id, "archived": False, "archivedAt": None}

    def toggle_staff_member_active(self, owner_email: str, member_id: str) -> dict[str, Any]:
        member = self._get_or_404(owner_email, member_id)
        member.active = not member.active
        member.updated_at = self.now_fn()
        self.db.commit()
        return {"id": member.id, "active": member.active}

    def delete_staff_member_permanently(self, owner_email: str, member_id: str) -> dict[str, Any]:
        member = self._get_or_404(owner_email, member_id)
        if not member.archived:
            raise InvalidInput("Only archived staff members can be permanently deleted")
        self.staff_members.delete(member)
        self.db.commit()
        log.info("staff member deleted owner=%s id=%s", owner_email, member_id)
        return {"id": member_id, "deleted": True}

    def _get_or_404(self, owner_email: str, member_id: str) -> StaffMember:
        member = self.staff_members.find_by_id(owner_email, member_id)
        if member is None:
            raise NotFound("Staff member not found")
        return member

    def _check_id_type(self, id_type_id: str | None) -> str | None:
        id_type_id = blank_to_none(id_type_id)
        if id_type_id is None:
            return None
        id_type = self.id_types.find_by_id(id_type_id)
        if id_type is None or not id_type.active:
            raise InvalidInput("Invalid ID type reference")
        return id_type_id

    def _type_names(self, members: list[StaffMember]) -> dict[str, str]:
        ids = {m.id_type_id for m in members if m.id_type_id}
        return {t.id: t.name for t in self.id_types.find_by_ids(ids)}

    @staticmethod
    def _member_payload(m: StaffMember, type_names: dict[str, str]) -> dict[str, Any]:
        return {
            "id": m.id,
            "name": m.name,
            "email": m.email,
            "phone": m.phone or "",
            "idTypeId": m.id_type_id or "",
            "idType": type_names.get(m.id_type_id, "") if m.id_type_id else "",
            "idNumber": m.id_number or "",
            "address": m.address or "",
            "suburb": m.suburb or "",
            "state": m.state or "",
            "postcode": m.postcode or "",
            "active": bool(m.active),
            "archived": bool(m.archived),
            "archivedAt": iso(m.archived_at),
            "createdAt": iso(m.created_at),
            "updatedAt": iso(m.updated_at),
        }
