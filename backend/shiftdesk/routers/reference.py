from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shiftdesk.core.db import get_db
from shiftdesk.services.reference import list_client_types, list_id_types

router = APIRouter(tags=["reference"])


@router.get("/client-types")
def client_types(db: Session = Depends(get_db)):
    return list_client_types(db)


@router.get("/id-types")
def id_types(db: Session = Depends(get_db)):
    return list_id_types(db)
