from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from shiftdesk.auth.deps import get_owner_email
from shiftdesk.core.db import get_db
from shiftdesk.schemas.clients import ClientCreateIn, ClientUpdateIn
from shiftdesk.services.clients import ClientService

router = APIRouter(prefix="/clients", tags=["clients"])


def get_client_service(db: Session = Depends(get_db)) -> ClientService:
    return ClientService(db)


@router.get("")
def list_clients(
    include_archived: bool = Query(False, alias="includeArchived"),
    owner_email: str = Depends(get_owner_email),
    svc: ClientService = Depends(get_client_service),
):
    return svc.list_clients(owner_email, include_archived=include_archived)


@router.post("", status_code=201)
def create_client(
    payload: ClientCreateIn,
    owner_email: str = Depends(get_owner_email),
    svc: ClientService = Depends(get_client_service),
):
    return svc.create_client(owner_email, payload)


@router.get("/{client_id}")
def get_client(
    client_id: str,
    owner_email: str = Depends(get_owner_email),
    svc: ClientService = Depends(get_client_service),
):
    return svc.get_client(owner_email, client_id)


@router.patch("/{client_id}")
def update_client(
    client_id: str,
    payload: ClientUpdateIn,
    owner_email: str = Depends(get_owner_email),
    svc: ClientService = Depends(get_client_service),
):
    return svc.update_client(owner_email, client_id, payload)


@router.post("/{client_id}/archive")
def archive_client(
    client_id: str,
    owner_email: str = Depends(get_owner_email),
    svc: ClientService = Depends(get_client_service),
):
    return svc.archive_client(owner_email, client_id)


@router.post("/{client_id}/restore")
def restore_client(
    client_id: str,
    owner_email: str = Depends(get_owner_email),
    svc: ClientService = Depends(get_client_service),
):
    return svc.restore_client(owner_email, client_id)


@router.post("/{client_id}/toggle-active")
def toggle_client_active(
    client_id: str,
    owner_email: str = Depends(get_owner_email),
    svc: ClientService = Depends(get_client_service),
):
    return svc.toggle_client_active(owner_email, client_id)


@router.delete("/{client_id}")
def delete_client(
    client_id: str,
    owner_email: str = Depends(get_owner_email),
    svc: ClientService = Depends(get_client_service),
):
    return svc.delete_client_permanently(owner_email, client_id)
