from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from itertools import chain
from typing import Any, Callable, Iterable

from sqlalchemy.orm import Session

from shiftdesk.core.clock import iso, utcnow
from shiftdesk.core.config import settings
from shiftdesk.core.errors import InvalidInput, NotFound
from shiftdesk.models.client import Client
from shiftdesk.models.enums import STATUS_TIMESTAMP_ATTRS, ShiftStatus
from shiftdesk.models.shift import Shift
from shiftdesk.models.staff_member import StaffMember
from shiftdesk.schemas.parsing import blank_to_none, parse_payload
from shiftdesk.schemas.shifts import ShiftCreateIn, ShiftUpdateIn
from shiftdesk.stores.clients import ClientStore
from shiftdesk.stores.reference import ClientTypeStore
from shiftdesk.stores.shifts import ShiftStore
from shiftdesk.stores.staff_members import StaffMemberStore

log = logging.getLogger("shiftdesk.shifts")

# payload field -> Shift column, copied as-is
_SCHEDULE_FIELDS = {
    "serviceDate": "service_date",
    "startTime": "start_time",
    "endTime": "end_time",
    "breakDuration": "break_duration",
}
# payload field -> Shift column, "" stored as NULL
_TEXT_FIELDS = {
    "serviceType": "service_type",
    "note": "note",
}


@dataclass
class _Refs:
    """Everything a page of shifts points at, loaded with one query per store."""

    clients_by_id: dict[str, Client] = field(default_factory=dict)
    clients_by_name: dict[str, Client] = field(default_factory=dict)
    staff_by_id: dict[str, StaffMember] = field(default_factory=dict)
    client_type_names: dict[str, str] = field(default_factory=dict)


def _client_by_id(shift: Shift, refs: _Refs) -> Client | None:
    return refs.clients_by_id.get(shift.client_id) if shift.client_id else None


def _client_by_legacy_name(shift: Shift, refs: _Refs) -> Client | None:
    if shift.client_id or not shift.client_name:
        return None
    return refs.clients_by_name.get(shift.client_name)


# tried in order; the first hit wins
CLIENT_RESOLVERS: tuple[Callable[[Shift, _Refs], Client | None], ...] = (
    _client_by_id,
    _client_by_legacy_name,
)


def _unique(ids: Iterable[str | None]) -> list[str]:
    # keep first-seen order, drop blanks
    return list(dict.fromkeys(i for i in ids if i))


class ShiftRecordService:
    """Owner-scoped shift reads and writes.

    Reads always rebuild client and staff display data from the referenced
    rows; nothing denormalized on the shift is trusted once a reference
    exists.
    """

    def __init__(
        self,
        db: Session,
        *,
        shifts: ShiftStore | None = None,
        clients: ClientStore | None = None,
        staff_members: StaffMemberStore | None = None,
        client_types: ClientTypeStore | None = None,
        now_fn: Callable[[], datetime] = utcnow,
    ):
        self.db = db
        self.shifts = shifts or ShiftStore(db)
        self.clients = clients or ClientStore(db)
        self.staff_members = staff_members or StaffMemberStore(db)
        self.client_types = client_types or ClientTypeStore(db)
        self.now_fn = now_fn

    # ---------- Reads ----------

    def list_shifts(
        self,
        owner_email: str,
        *,
        include_archived: bool = False,
        page: int = 1,
        page_size: int | None = None,
    ) -> list[dict[str, Any]]:
        if page_size is None:
            page_size = settings.DEFAULT_PAGE_SIZE
        if page < 1:
            raise InvalidInput("page must be >= 1")
        if page_size < 1 or page_size > settings.MAX_PAGE_SIZE:
            raise InvalidInput(f"pageSize must be between 1 and {settings.MAX_PAGE_SIZE}")

        rows = self.shifts.find_page(
            owner_email,
            include_archived=include_archived,
            offset=(page - 1) * page_size,
            limit=page_size,
        )
        return self._render(owner_email, rows)

    def get_shift(self, owner_email: str, shift_id: str) -> dict[str, Any]:
        shift = self._get_or_404(owner_email, shift_id)
        return self._render(owner_email, [shift])[0]

    # ---------- Writes ----------

    def create_shift(self, owner_email: str, payload: Any) -> dict[str, Any]:
        data = parse_payload(ShiftCreateIn, payload)

        client = self._require_client(owner_email, data.clientId)
        assigned_id = blank_to_none(data.staffMemberId)
        notified_ids = _unique(data.notifiedStaffMemberIds or [])
        self._require_staff_members(owner_email, [assigned_id, *notified_ids])

        if data.status is not None:
            status = data.status
        elif assigned_id or notified_ids:
            status = ShiftStatus.ASSIGNED
        else:
            status = ShiftStatus.DRAFTED

        now = self.now_fn()
        shift = Shift(
            owner_email=owner_email,
            service_date=data.serviceDate,
            start_time=data.startTime,
            end_time=data.endTime,
            break_duration=data.breakDuration,
            service_type=blank_to_none(data.serviceType),
            client_id=client.id,
            assigned_staff_member_id=assigned_id,
            notified_staff_member_ids=notified_ids,
            status=status.value,
            note=blank_to_none(data.note),
            archived=False,
            created_at=now,
            updated_at=now,
        )
        attr = STATUS_TIMESTAMP_ATTRS.get(status)
        if attr:
            setattr(shift, attr, now)

        self.shifts.add(shift)
        self.db.commit()
        log.info("shift created owner=%s id=%s status=%s", owner_email, shift.id, shift.status)
        return self._render(owner_email, [shift])[0]

    def update_shift(self, owner_email: str, shift_id: str, payload: Any) -> dict[str, Any]:
        data = parse_payload(ShiftUpdateIn, payload)
        supplied = data.model_fields_set

        shift = self._get_or_404(owner_email, shift_id)

        # validate every reference before touching the row
        client = self._require_client(owner_email, data.clientId) if "clientId" in supplied else None
        assigned_id = blank_to_none(data.staffMemberId) if "staffMemberId" in supplied else None
        notified_ids = _unique(data.notifiedStaffMemberIds or []) if "notifiedStaffMemberIds" in supplied else None
        self._require_staff_members(owner_email, [assigned_id, *(notified_ids or [])])

        now = self.now_fn()

        for name, column in _SCHEDULE_FIELDS.items():
            if name in supplied:
                setattr(shift, column, getattr(data, name))
        for name, column in _TEXT_FIELDS.items():
            if name in supplied:
                setattr(shift, column, blank_to_none(getattr(data, name)))

        if client is not None:
            shift.client_id = client.id
            shift.client_name = None

        if "staffMemberId" in supplied:
            shift.assigned_staff_member_id = assigned_id
        if notified_ids is not None:
            shift.notified_staff_member_ids = notified_ids

        if "status" in supplied:
            target = data.status
        elif assigned_id:
            target = ShiftStatus.ASSIGNED
        else:
            target = None

        if target is not None:
            if target.value != shift.status:
                attr = STATUS_TIMESTAMP_ATTRS.get(target)
                if attr:
                    setattr(shift, attr, now)
                log.info(
                    "shift status owner=%s id=%s %s -> %s", owner_email, shift.id, shift.status, target.value
                )
            shift.status = target.value

        shift.updated_at = now
        self.db.commit()
        return self._render(owner_email, [shift])[0]

    def archive_shift(self, owner_email: str, shift_id: str) -> dict[str, Any]:
        shift = self._get_or_404(owner_email, shift_id)

        if not shift.archived:
            now = self.now_fn()
            shift.archived = True
            shift.archived_at = now
            shift.updated_at = now
            self.db.commit()
            log.info("shift archived owner=%s id=%s", owner_email, shift.id)

        return self._render(owner_email, [shift])[0]

    def restore_shift(self, owner_email: str, shift_id: str) -> dict[str, Any]:
        shift = self._get_or_404(owner_email, shift_id)

        if shift.archived:
            shift.archived = False
            shift.archived_at = None
            shift.updated_at = self.now_fn()
            self.db.commit()
            log.info("shift restored owner=%s id=%s", owner_email, shift.id)

        return self._render(owner_email, [shift])[0]

    def delete_shift_permanently(self, owner_email: str, shift_id: str) -> dict[str, Any]:
        shift = self._get_or_404(owner_email, shift_id)

        if not shift.archived:
            raise InvalidInput("Only archived shifts can be permanently deleted")

        self.shifts.delete(shift)
        self.db.commit()
        log.info("shift deleted owner=%s id=%s", owner_email, shift_id)
        return {"id": shift_id, "deleted": True}

    # ---------- Helpers ----------

    def _get_or_404(self, owner_email: str, shift_id: str) -> Shift:
        shift = self.shifts.find_by_id(owner_email, shift_id)
        if shift is None:
            raise NotFound("Shift not found")
        return shift

    def _require_client(self, owner_email: str, client_id: str | None) -> Client:
        client = self.clients.find_by_id(owner_email, client_id) if client_id else None
        if client is None:
            log.warning("rejected client reference owner=%s client_id=%s", owner_email, client_id)
            raise InvalidInput("Client not found")
        return client

    def _require_staff_members(self, owner_email: str, ids: Iterable[str | None]) -> None:
        wanted = set(_unique(ids))
        if not wanted:
            return
        found = {m.id for m in self.staff_members.find_by_ids(owner_email, wanted)}
        missing = wanted - found
        if missing:
            log.warning("rejected staff references owner=%s ids=%s", owner_email, sorted(missing))
            raise InvalidInput("Staff member(s) not found: " + ", ".join(sorted(missing)))

    def _resolve(self, owner_email: str, shifts: list[Shift]) -> _Refs:
        refs = _Refs()
        if not shifts:
            return refs

        client_ids = {s.client_id for s in shifts if s.client_id}
        legacy_names = {s.client_name for s in shifts if not s.client_id and s.client_name}
        staff_ids = set()
        for s in shifts:
            if s.assigned_staff_member_id:
                staff_ids.add(s.assigned_staff_member_id)
            staff_ids.update(s.notified_staff_member_ids or [])

        if client_ids:
            refs.clients_by_id = {c.id: c for c in self.clients.find_by_ids(owner_email, client_ids)}
        if legacy_names:
            refs.clients_by_name = {c.name: c for c in self.clients.find_by_names(owner_email, legacy_names)}
        if staff_ids:
            refs.staff_by_id = {m.id: m for m in self.staff_members.find_by_ids(owner_email, staff_ids)}

        type_ids = {
            c.client_type_id
            for c in chain(refs.clients_by_id.values(), refs.clients_by_name.values())
            if c.client_type_id
        }
        if type_ids:
            refs.client_type_names = {t.id: t.name for t in self.client_types.find_by_ids(type_ids)}
        return refs

    def _render(self, owner_email: str, shifts: list[Shift]) -> list[dict[str, Any]]:
        refs = self._resolve(owner_email, shifts)
        return [self._shift_payload(s, refs) for s in shifts]

    @staticmethod
    def _shift_payload(s: Shift, refs: _Refs) -> dict[str, Any]:
        client = None
        for resolver in CLIENT_RESOLVERS:
            client = resolver(s, refs)
            if client is not None:
                break

        client_type = ""
        if client is not None:
            if client.client_type_id:
                client_type = refs.client_type_names.get(client.client_type_id, "")
            else:
                client_type = client.client_type or ""

        assigned = refs.staff_by_id.get(s.assigned_staff_member_id) if s.assigned_staff_member_id else None
        notified_ids = list(s.notified_staff_member_ids or [])

        def client_attr(name: str) -> str:
            return (getattr(client, name) or "") if client is not None else ""

        location = ", ".join(
            p
            for p in (
                client_attr("address"),
                client_attr("suburb"),
                " ".join(x for x in (client_attr("state"), client_attr("postcode")) if x),
            )
            if p
        )

        return {
            "id": s.id,
            "serviceDate": s.service_date.isoformat(),
            "startTime": s.start_time.strftime("%H:%M"),
            "endTime": s.end_time.strftime("%H:%M"),
            "breakDuration": int(s.break_duration or 0),
            "serviceType": s.service_type or "",
            "clientId": client.id if client is not None else (s.client_id or ""),
            "clientName": client.name if client is not None else (s.client_name or ""),
            "clientAddress": client_attr("address"),
            "clientSuburb": client_attr("suburb"),
            "clientState": client_attr("state"),
            "clientPostcode": client_attr("postcode"),
            "clientLocation": location,
            "clientTypeId": client_attr("client_type_id"),
            "clientType": client_type,
            "clientEmail": client_attr("email"),
            "clientPhoneNumber": client_attr("phone_number"),
            "clientContactPerson": client_attr("contact_person"),
            "clientContactPhone": client_attr("contact_phone"),
            "staffMemberId": s.assigned_staff_member_id,
            "assignedStaffMemberId": s.assigned_staff_member_id,
            "staffMemberName": assigned.name if assigned is not None else "",
            "notifiedStaffMemberIds": notified_ids,
            "staffMemberNames": [refs.staff_by_id[i].name for i in notified_ids if i in refs.staff_by_id],
            "status": s.status or ShiftStatus.DRAFTED.value,
            "note": s.note or "",
            "archived": bool(s.archived),
            "archivedAt": iso(s.archived_at),
            "publishedAt": iso(s.published_at),
            "assignedAt": iso(s.assigned_at),
            "confirmedAt": iso(s.confirmed_at),
            "declinedAt": iso(s.declined_at),
            "inProgressAt": iso(s.in_progress_at),
            "completedAt": iso(s.completed_at),
            "missedAt": iso(s.missed_at),
            "canceledAt": iso(s.canceled_at),
            "timesheetSubmittedAt": iso(s.timesheet_submitted_at),
            "approvedAt": iso(s.approved_at),
            "createdAt": iso(s.created_at),
            "updatedAt": iso(s.updated_at),
        }
