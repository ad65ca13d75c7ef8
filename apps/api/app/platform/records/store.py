from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import datetime, timezone
from typing import Any, Generic, TypeVar

from sqlalchemy import ColumnElement, Select, func, select
from sqlalchemy.orm import Session

from app.core.database import Base, atomic


ModelT = TypeVar("ModelT", bound=Base)
ResultT = TypeVar("ResultT")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RecordStore(Generic[ModelT]):
    """Query/write gateway for one table.

    Tables with a ``deleted_at`` column are soft-deleted: rows carrying a
    deletion timestamp never come back from ``find``, ``first``, ``get`` or the
    count helpers.
    """

    def __init__(self, model: type[ModelT]) -> None:
        self.model = model
        self.soft_deletes = hasattr(model, "deleted_at")

    def live(self, criteria: Sequence[ColumnElement[bool]] = ()) -> list[ColumnElement[bool]]:
        clauses = list(criteria)
        if self.soft_deletes:
            clauses.append(self.model.deleted_at.is_(None))  # type: ignore[attr-defined]
        return clauses

    def query(self, *criteria: ColumnElement[bool]) -> Select[tuple[ModelT]]:
        return select(self.model).where(*self.live(criteria))

    def find(
        self,
        session: Session,
        *criteria: ColumnElement[bool],
        order_by: Sequence[Any] = (),
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[ModelT]:
        stmt = self.query(*criteria)
        if order_by:
            stmt = stmt.order_by(*order_by)
        if limit is not None:
            stmt = stmt.limit(limit)
        if offset:
            stmt = stmt.offset(offset)
        return list(session.scalars(stmt).all())

    def first(self, session: Session, *criteria: ColumnElement[bool]) -> ModelT | None:
        return session.scalar(self.query(*criteria).limit(1))

    def get(self, session: Session, record_id: int) -> ModelT | None:
        return self.first(session, self.model.id == record_id)  # type: ignore[attr-defined]

    def count(self, session: Session, *criteria: ColumnElement[bool]) -> int:
        stmt = select(func.count()).select_from(self.model).where(*self.live(criteria))
        return int(session.scalar(stmt) or 0)

    def count_distinct(self, session: Session, column: Any, *criteria: ColumnElement[bool]) -> int:
        stmt = select(func.count(func.distinct(column))).select_from(self.model).where(*self.live(criteria))
        return int(session.scalar(stmt) or 0)

    def grouped_counts(self, session: Session, column: Any, *criteria: ColumnElement[bool]) -> list[tuple[Any, int]]:
        stmt = (
            select(column, func.count())
            .select_from(self.model)
            .where(*self.live(criteria))
            .group_by(column)
            .order_by(column)
        )
        return [(key, int(total)) for key, total in session.execute(stmt).all()]

    def insert(self, session: Session, values: dict[str, Any]) -> ModelT:
        record = self.model(**values)
        session.add(record)
        session.flush()
        return record

    def update(self, session: Session, record: ModelT, values: dict[str, Any]) -> ModelT:
        for key, value in values.items():
            setattr(record, key, value)
        if hasattr(record, "updated_at"):
            record.updated_at = utcnow()  # type: ignore[attr-defined]
        session.flush()
        return record

    def remove(self, session: Session, record: ModelT) -> None:
        if self.soft_deletes:
            record.deleted_at = utcnow()  # type: ignore[attr-defined]
        else:
            session.delete(record)
        session.flush()

    def run_atomic(self, session: Session, unit_of_work: Callable[[Session], ResultT]) -> ResultT:
        with atomic(session):
            result = unit_of_work(session)
        return result
