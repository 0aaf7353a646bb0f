from __future__ import annotations

from typing import Generic, Iterable, TypeVar

from sqlalchemy import select
from sqlalchemy.orm import Session

T = TypeVar("T")


class OwnedStore(Generic[T]):
    """Owner-scoped lookups shared by clients, staff members and shifts.

    Every query filters by owner_email; a row of another owner is never
    returned, so "not found" and "not mine" look the same to callers.
    """

    model: type[T]

    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, owner_email: str, obj_id: str) -> T | None:
        return self.db.execute(
            select(self.model).where(self.model.id == obj_id, self.model.owner_email == owner_email)
        ).scalar_one_or_none()

    def find_by_ids(self, owner_email: str, ids: Iterable[str]) -> list[T]:
        wanted = {i for i in ids if i}
        if not wanted:
            return []
        return list(
            self.db.execute(
                select(self.model).where(self.model.id.in_(wanted), self.model.owner_email == owner_email)
            ).scalars().all()
        )

    def add(self, obj: T) -> T:
        self.db.add(obj)
        self.db.flush()  # so obj.id is assigned
        return obj

    def delete(self, obj: T) -> None:
        self.db.delete(obj)
        self.db.flush()
