from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from shiftdesk.auth.deps import get_owner_email
from shiftdesk.core.db import get_db
from shiftdesk.schemas.shifts import ShiftCreateIn, ShiftUpdateIn
from shiftdesk.services.shifts import ShiftRecordService

router = APIRouter(prefix="/shifts", tags=["shifts"])


def get_shift_service(db: Session = Depends(get_db)) -> ShiftRecordService:
    return ShiftRecordService(db)


@router.get("")
def list_shifts(
    include_archived: bool = Query(False, alias="includeArchived"),
    page: int = Query(1),
    page_size: int | None = Query(None, alias="pageSize"),
    owner_email: str = Depends(get_owner_email),
    svc: ShiftRecordService = Depends(get_shift_service),
):
    return svc.list_shifts(owner_email, include_archived=include_archived, page=page, page_size=page_size)


@router.post("", status_code=201)
def create_shift(
    payload: ShiftCreateIn,
    owner_email: str = Depends(get_owner_email),
    svc: ShiftRecordService = Depends(get_shift_service),
):
    return svc.create_shift(owner_email, payload)


@router.get("/{shift_id}")
def get_shift(
    shift_id: str,
    owner_email: str = Depends(get_owner_email),
    svc: ShiftRecordService = Depends(get_shift_service),
):
    return svc.get_shift(owner_email, shift_id)


@router.patch("/{shift_id}")
def update_shift(
    shift_id: str,
    payload: ShiftUpdateIn,
    owner_email: str = Depends(get_owner_email),
    svc: ShiftRecordService = Depends(get_shift_service),
):
    return svc.update_shift(owner_email, shift_id, payload)


@router.post("/{shift_id}/archive")
def archive_shift(
    shift_id: str,
    owner_email: str = Depends(get_owner_email),
    svc: ShiftRecordService = Depends(get_shift_service),
):
    return svc.archive_shift(owner_email, shift_id)


@router.post("/{shift_id}/restore")
def restore_shift(
    shift_id: str,
    owner_email: str = Depends(get_owner_email),
    svc: ShiftRecordService = Depends(get_shift_service),
):
    return svc.restore_shift(owner_email, shift_id)


@router.delete("/{shift_id}")
def delete_shift(
    shift_id: str,
    owner_email: str = Depends(get_owner_email),
    svc: ShiftRecordService = Depends(get_shift_service),
):
    return svc.delete_shift_permanently(owner_email, shift_id)
