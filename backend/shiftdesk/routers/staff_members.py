from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from shiftdesk.auth.deps import get_owner_email
from shiftdesk.core.db import get_db
from shiftdesk.schemas.staff_members import StaffMemberCreateIn, StaffMemberUpdateIn
from shiftdesk.services.staff_members import StaffMemberService

router = APIRouter(prefix="/staff-members", tags=["staff-members"])


def get_staff_member_service(db: Session = Depends(get_db)) -> StaffMemberService:
    return StaffMemberService(db)


@router.get("")
def list_staff_members(
    include_archived: bool = Query(False, alias="includeArchived"),
    owner_email: str = Depends(get_owner_email),
    svc: StaffMemberService = Depends(get_staff_member_service),
):
    return svc.list_staff_members(owner_email, include_archived=include_archived)


@router.post("", status_code=201)
def create_staff_member(
    payload: StaffMemberCreateIn,
    owner_email: str = Depends(get_owner_email),
    svc: StaffMemberService = Depends(get_staff_member_service),
):
    return svc.create_staff_member(owner_email, payload)


@router.get("/{member_id}")
def get_staff_member(
    member_id: str,
    owner_email: str = Depends(get_owner_email),
    svc: StaffMemberService = Depends(get_staff_member_service),
):
    return svc.get_staff_member(owner_email, member_id)


@router.patch("/{member_id}")
def update_staff_member(
    member_id: str,
    payload: StaffMemberUpdateIn,
    owner_email: str = Depends(get_owner_email),
    svc: StaffMemberService = Depends(get_staff_member_service),
):
    return svc.update_staff_member(owner_email, member_id, payload)


@router.post("/{member_id}/archive")
def archive_staff_member(
    member_id: str,
    owner_email: str = Depends(get_owner_email),
    svc: StaffMemberService = Depends(get_staff_member_service),
):
    return svc.archive_staff_member(owner_email, member_id)


@router.post("/{member_id}/restore")
def restore_staff_member(
    member_id: str,
    owner_email: str = Depends(get_owner_email),
    svc: StaffMemberService = Depends(get_staff_member_service),
):
    return svc.restore_staff_member(owner_email, member_id)


@router.post("/{member_id}/toggle-active")
def toggle_staff_member_active(
    member_id: str,
    owner_email: str = Depends(get_owner_email),
    svc: StaffMemberService = Depends(get_staff_member_service),
):
    return svc.toggle_staff_member_active(owner_email, member_id)


@router.delete("/{member_id}")
def delete_staff_member(
    member_id: str,
    owner_email: str = Depends(get_owner_email),
    svc: StaffMemberService = Depends(get_staff_member_service),
):
    return svc.delete_staff_member_permanently(owner_email, member_id)
