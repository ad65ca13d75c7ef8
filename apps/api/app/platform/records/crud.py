"""Generic list/create/read/update/delete surface shared by the plain record tables.

Routes are assembled per resource by ``build_record_router``. Annotations are
evaluated eagerly here because FastAPI resolves the per-resource schemas from
the closure at decoration time.
"""

import logging
from collections.abc import Callable
from typing import Any, Generic

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel
from sqlalchemy import ColumnElement
from sqlalchemy.orm import Session

from app.core.auth import Identity
from app.core.database import get_db
from app.core.errors import NotFoundError
from app.core.rbac import Capability, Role, require_capability, require_role
from app.metrics import observe_record_write
from app.platform.records.schemas import Envelope, MessageEnvelope
from app.platform.records.store import ModelT, RecordStore


logger = logging.getLogger("app.records")

FilterDependency = Callable[..., list[ColumnElement[bool]]]


def no_filters() -> list[ColumnElement[bool]]:
    return []


class RecordService(Generic[ModelT]):
    def __init__(
        self,
        model: type[ModelT],
        read_schema: type[BaseModel],
        *,
        entity: str,
        label: str,
    ) -> None:
        self.store: RecordStore[ModelT] = RecordStore(model)
        self.read_schema = read_schema
        self.entity = entity
        self.label = label

    def default_order(self) -> list[Any]:
        return [self.store.model.created_at.desc(), self.store.model.id.desc()]  # type: ignore[attr-defined]

    def list_records(
        self,
        session: Session,
        criteria: list[ColumnElement[bool]],
        *,
        limit: int,
        offset: int,
    ) -> list[BaseModel]:
        rows = self.store.find(session, *criteria, order_by=self.default_order(), limit=limit, offset=offset)
        return [self.read_schema.model_validate(row) for row in rows]

    def get_record(self, session: Session, record_id: int) -> BaseModel:
        return self.read_schema.model_validate(self._require(session, record_id))

    def create_record(self, session: Session, identity: Identity, dto: BaseModel) -> BaseModel:
        values = self.prepare_values(dto.model_dump(mode="python"))
        record = self.store.run_atomic(session, lambda db: self.store.insert(db, values))
        session.refresh(record)
        self._log_write("create", identity, record.id)  # type: ignore[attr-defined]
        return self.read_schema.model_validate(record)

    def update_record(self, session: Session, identity: Identity, record_id: int, dto: BaseModel) -> BaseModel:
        record = self._require(session, record_id)
        values = self.prepare_values(dto.model_dump(mode="python", exclude_none=True))
        self.store.run_atomic(session, lambda db: self.store.update(db, record, values))
        session.refresh(record)
        self._log_write("update", identity, record_id)
        return self.read_schema.model_validate(record)

    def delete_record(self, session: Session, identity: Identity, record_id: int) -> None:
        record = self._require(session, record_id)
        self.store.run_atomic(session, lambda db: self.store.remove(db, record))
        self._log_write("delete", identity, record_id)

    def prepare_values(self, values: dict[str, Any]) -> dict[str, Any]:
        return values

    def _require(self, session: Session, record_id: int) -> ModelT:
        record = self.store.get(session, record_id)
        if record is None:
            raise NotFoundError(f"{self.label} not found")
        return record

    def _log_write(self, action: str, identity: Identity, record_id: int) -> None:
        observe_record_write(self.entity, action)
        logger.info(
            f"record.{action}",
            extra={"entity": self.entity, "record_id": record_id, "user_id": identity.user_id},
        )


def build_record_router(
    *,
    prefix: str,
    tag: str,
    service: RecordService[Any],
    create_schema: type[BaseModel],
    update_schema: type[BaseModel],
    filters: FilterDependency = no_filters,
    default_limit: int = 50,
) -> APIRouter:
    router = APIRouter(prefix=prefix, tags=[tag])
    read_schema = service.read_schema
    label = service.label

    @router.get("", response_model=Envelope[list[read_schema]])
    def list_records(
        limit: int = Query(default=default_limit, ge=1, le=500),
        offset: int = Query(default=0, ge=0),
        criteria: list[ColumnElement[bool]] = Depends(filters),
        db: Session = Depends(get_db),
        identity: Identity = Depends(require_role(Role.VIEWER)),
    ) -> Envelope[list[read_schema]]:
        return Envelope(data=service.list_records(db, criteria, limit=limit, offset=offset))

    @router.post("", response_model=Envelope[read_schema], status_code=status.HTTP_201_CREATED)
    def create_record(
        payload: create_schema,
        db: Session = Depends(get_db),
        identity: Identity = Depends(require_capability(Capability.CREATE_RECORD)),
    ) -> Envelope[read_schema]:
        created = service.create_record(db, identity, payload)
        return Envelope(data=created, message=f"{label} created successfully")

    @router.get("/{record_id}", response_model=Envelope[read_schema])
    def get_record(
        record_id: int,
        db: Session = Depends(get_db),
        identity: Identity = Depends(require_role(Role.VIEWER)),
    ) -> Envelope[read_schema]:
        return Envelope(data=service.get_record(db, record_id))

    @router.put("/{record_id}", response_model=Envelope[read_schema])
    def update_record(
        record_id: int,
        payload: update_schema,
        db: Session = Depends(get_db),
        identity: Identity = Depends(require_capability(Capability.UPDATE_RECORD)),
    ) -> Envelope[read_schema]:
        updated = service.update_record(db, identity, record_id, payload)
        return Envelope(data=updated, message=f"{label} updated successfully")

    @router.delete("/{record_id}", response_model=MessageEnvelope)
    def delete_record(
        record_id: int,
        db: Session = Depends(get_db),
        identity: Identity = Depends(require_capability(Capability.DELETE_RECORD)),
    ) -> MessageEnvelope:
        service.delete_record(db, identity, record_id)
        return MessageEnvelope(message=f"{label} deleted successfully")

    return router
