from __future__ import annotations

import datetime as dt
import logging
from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel
from sqlalchemy import ColumnElement
from sqlalchemy.orm import Session

from app.core.auth import Identity
from app.core.errors import NotFoundError, RecordValidationError
from app.platform.records.crud import RecordService
from app.platform.records.store import RecordStore, utcnow
from app.tracking.models import Contact, LoginSignup, StoreVisit, WebsiteVisit
from app.tracking.schemas import ContactRead, LoginSignupRead, StoreVisitRead, WebsiteVisitRead
from app.tracking.validation import validate_date_range


logger = logging.getLogger("app.lifecycle")

contact_store: RecordStore[Contact] = RecordStore(Contact)


def upsert_contact(session: Session, identifier: str, stamp_column: str) -> Contact:
    """Create the contact on first sight and stamp ``stamp_column`` once.

    Runs inside the caller's unit of work; nothing is committed here.
    """
    contact = contact_store.first(session, Contact.contact_identifier == identifier)
    if contact is None:
        return contact_store.insert(session, {"contact_identifier": identifier, stamp_column: utcnow()})
    if getattr(contact, stamp_column) is None:
        contact_store.update(session, contact, {stamp_column: utcnow()})
    return contact


def event_window(
    model: Any,
    start_date: dt.date | None,
    end_date: dt.date | None,
) -> list[ColumnElement[bool]]:
    try:
        validate_date_range(start_date, end_date)
    except ValueError as exc:
        raise RecordValidationError("startDate", str(exc)) from None
    criteria: list[ColumnElement[bool]] = []
    if start_date is not None:
        criteria.append(model.date >= start_date)
    if end_date is not None:
        criteria.append(model.date <= end_date)
    return criteria


class TrackedEventService(RecordService[Any], ABC):
    """Soft-deleted event table whose inserts also maintain the contact registry."""

    stamp_column: str = ""

    @abstractmethod
    def contact_key(self, values: dict[str, Any]) -> str | None:
        """Contact identifier the new row belongs to, or None for anonymous rows."""

    def default_order(self) -> list[Any]:
        model = self.store.model
        return [model.date.desc(), model.time.desc(), model.id.desc()]

    def check_insert(self, session: Session, values: dict[str, Any]) -> None:
        return None

    def create_record(self, session: Session, identity: Identity, dto: BaseModel) -> BaseModel:
        values = self.prepare_values(dto.model_dump(mode="python"))
        self.check_insert(session, values)
        identifier = self.contact_key(values)

        def unit_of_work(db: Session) -> Any:
            record = self.store.insert(db, values)
            if identifier:
                upsert_contact(db, identifier, self.stamp_column)
            return record

        record = self.store.run_atomic(session, unit_of_work)
        session.refresh(record)
        self._log_write("create", identity, record.id)
        if identifier:
            logger.info("contact.touched", extra={"identifier": identifier, "entity": self.entity})
        return self.read_schema.model_validate(record)


class WebsiteVisitService(TrackedEventService):
    stamp_column = "first_website_visit"

    def __init__(self) -> None:
        super().__init__(WebsiteVisit, WebsiteVisitRead, entity="website_visit", label="Website visit")

    def contact_key(self, values: dict[str, Any]) -> str | None:
        return values.get("owner_contact")

    def check_insert(self, session: Session, values: dict[str, Any]) -> None:
        duplicate = self.store.first(
            session,
            WebsiteVisit.ip == values["ip"],
            WebsiteVisit.date == values["date"],
            WebsiteVisit.time == values["time"],
        )
        if duplicate is not None:
            raise RecordValidationError("ip", "A visit with this IP, date, and time already exists")


class StoreVisitService(TrackedEventService):
    stamp_column = "first_store_visit"

    def __init__(self) -> None:
        super().__init__(StoreVisit, StoreVisitRead, entity="store_visit", label="Store visit")

    def contact_key(self, values: dict[str, Any]) -> str | None:
        return values.get("owner_contact")


class LoginSignupService(TrackedEventService):
    stamp_column = "signup_date"

    def __init__(self) -> None:
        super().__init__(LoginSignup, LoginSignupRead, entity="login_signup", label="Signup")

    def contact_key(self, values: dict[str, Any]) -> str | None:
        return values.get("email")


class ContactService:
    def list_contacts(self, session: Session, identifier: str | None, *, limit: int, offset: int) -> list[ContactRead]:
        criteria = []
        if identifier:
            criteria.append(Contact.contact_identifier.ilike(f"%{identifier}%"))
        rows = contact_store.find(
            session,
            *criteria,
            order_by=(Contact.created_at.desc(), Contact.id.desc()),
            limit=limit,
            offset=offset,
        )
        return [ContactRead.model_validate(row) for row in rows]

    def get_contact(self, session: Session, identifier: str) -> Contact:
        contact = contact_store.first(session, Contact.contact_identifier == identifier)
        if contact is None:
            raise NotFoundError("Contact not found")
        return contact
