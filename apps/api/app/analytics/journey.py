"""Customer journey aggregation.

A journey is every website visit, store visit and signup recorded for one
contact identifier, merged into a single chronological list. Website and store
visits are keyed by ``owner_contact``; signups by ``email``.
"""

from __future__ import annotations

import datetime as dt
import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any, Literal

from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError
from app.metrics import observe_journey
from app.otel import get_tracer
from app.platform.records.store import RecordStore
from app.tracking.models import Contact, LoginSignup, StoreVisit, WebsiteVisit
from app.tracking.schemas import LoginSignupRead, StoreVisitRead, WebsiteVisitRead


logger = logging.getLogger("app.analytics")
tracer = get_tracer("app.analytics")

EventType = Literal["website_visit", "store_visit", "signup"]


@dataclass(frozen=True, slots=True)
class InteractionEvent:
    type: EventType
    date: dt.date | None
    time: dt.time | None
    data: dict[str, Any] = field(default_factory=dict)

    @property
    def occurred_at(self) -> dt.datetime:
        return dt.datetime.combine(self.date or dt.date.min, self.time or dt.time.min)


@dataclass(frozen=True, slots=True)
class ContactJourney:
    contact: Contact
    events: list[InteractionEvent]
    total_website_visits: int
    total_store_visits: int
    total_signups: int
    first_interaction: dt.date | None
    last_interaction: dt.date | None


def tag_events(
    event_type: EventType,
    rows: Iterable[Any],
    payload: Callable[[Any], dict[str, Any]] | None = None,
) -> list[InteractionEvent]:
    """Wrap raw rows as events. ``payload`` maps a row to its data dict."""
    events = []
    for row in rows:
        data = payload(row) if payload is not None else {}
        events.append(InteractionEvent(event_type, row.date, row.time, data))
    return events


def aggregate_journey(
    contact: Contact,
    website_visits: Sequence[InteractionEvent],
    store_visits: Sequence[InteractionEvent],
    signups: Sequence[InteractionEvent],
) -> ContactJourney:
    # sorted() is stable, so same-instant events keep website, store, signup order.
    events = sorted([*website_visits, *store_visits, *signups], key=lambda event: event.occurred_at)
    return ContactJourney(
        contact=contact,
        events=events,
        total_website_visits=len(website_visits),
        total_store_visits=len(store_visits),
        total_signups=len(signups),
        first_interaction=events[0].date if events else None,
        last_interaction=events[-1].date if events else None,
    )


def _dump(schema: type[BaseModel]) -> Callable[[Any], dict[str, Any]]:
    return lambda row: schema.model_validate(row).model_dump(mode="json")


class JourneyAggregator:
    def __init__(self) -> None:
        self.contacts: RecordStore[Contact] = RecordStore(Contact)
        self.website_visits: RecordStore[WebsiteVisit] = RecordStore(WebsiteVisit)
        self.store_visits: RecordStore[StoreVisit] = RecordStore(StoreVisit)
        self.signups: RecordStore[LoginSignup] = RecordStore(LoginSignup)

    def build(self, session: Session, identifier: str) -> ContactJourney:
        with tracer.start_as_current_span("analytics.journey") as span:
            span.set_attribute("journey.identifier", identifier)
            try:
                journey = self._build(session, identifier)
            except NotFoundError:
                observe_journey("not_found")
                logger.info("journey.contact_missing", extra={"identifier": identifier})
                raise
            except SQLAlchemyError:
                observe_journey("error")
                raise
            span.set_attribute("journey.event_count", len(journey.events))

        observe_journey("ok", len(journey.events))
        logger.info("journey.built", extra={"identifier": identifier, "event_count": len(journey.events)})
        return journey

    def _build(self, session: Session, identifier: str) -> ContactJourney:
        contact = self.contacts.first(session, Contact.contact_identifier == identifier)
        if contact is None:
            raise NotFoundError("Contact not found")

        website = self.website_visits.find(session, WebsiteVisit.owner_contact == identifier, order_by=(WebsiteVisit.id,))
        store = self.store_visits.find(session, StoreVisit.owner_contact == identifier, order_by=(StoreVisit.id,))
        signups = self.signups.find(session, LoginSignup.email == identifier, order_by=(LoginSignup.id,))
        return aggregate_journey(
            contact,
            tag_events("website_visit", website, _dump(WebsiteVisitRead)),
            tag_events("store_visit", store, _dump(StoreVisitRead)),
            tag_events("signup", signups, _dump(LoginSignupRead)),
        )
