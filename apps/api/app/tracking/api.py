from __future__ import annotations

import datetime as dt

from fastapi import APIRouter, Depends, Query
from sqlalchemy import ColumnElement
from sqlalchemy.orm import Session

from app.core.auth import Identity
from app.core.config import get_settings
from app.core.database import get_db
from app.core.rbac import Role, require_role
from app.platform.records.crud import build_record_router
from app.platform.records.schemas import Envelope
from app.tracking.models import LoginSignup, StoreVisit, WebsiteVisit
from app.tracking.schemas import (
    ContactRead,
    LoginSignupCreate,
    LoginSignupUpdate,
    StoreVisitCreate,
    StoreVisitUpdate,
    WebsiteVisitCreate,
    WebsiteVisitUpdate,
)
from app.tracking.service import (
    ContactService,
    LoginSignupService,
    StoreVisitService,
    WebsiteVisitService,
    event_window,
)


website_visit_service = WebsiteVisitService()
store_visit_service = StoreVisitService()
login_signup_service = LoginSignupService()
contact_service = ContactService()


def website_visit_filters(
    start_date: dt.date | None = Query(default=None, alias="startDate"),
    end_date: dt.date | None = Query(default=None, alias="endDate"),
    location: str | None = Query(default=None),
    contact: str | None = Query(default=None),
) -> list[ColumnElement[bool]]:
    criteria = event_window(WebsiteVisit, start_date, end_date)
    if location:
        criteria.append(WebsiteVisit.location.ilike(f"%{location}%"))
    if contact:
        criteria.append(WebsiteVisit.owner_contact.ilike(f"%{contact}%"))
    return criteria


def store_visit_filters(
    start_date: dt.date | None = Query(default=None, alias="startDate"),
    end_date: dt.date | None = Query(default=None, alias="endDate"),
    location: str | None = Query(default=None),
    contact: str | None = Query(default=None),
) -> list[ColumnElement[bool]]:
    criteria = event_window(StoreVisit, start_date, end_date)
    if location:
        criteria.append(StoreVisit.location.ilike(f"%{location}%"))
    if contact:
        criteria.append(StoreVisit.owner_contact.ilike(f"%{contact}%"))
    return criteria


def login_signup_filters(
    start_date: dt.date | None = Query(default=None, alias="startDate"),
    end_date: dt.date | None = Query(default=None, alias="endDate"),
    location: str | None = Query(default=None),
    email: str | None = Query(default=None),
) -> list[ColumnElement[bool]]:
    criteria = event_window(LoginSignup, start_date, end_date)
    if location:
        criteria.append(LoginSignup.location.ilike(f"%{location}%"))
    if email:
        criteria.append(LoginSignup.email.ilike(f"%{email}%"))
    return criteria


website_visits_router = build_record_router(
    prefix="/api/website-visits",
    tag="tracking.website_visits",
    service=website_visit_service,
    create_schema=WebsiteVisitCreate,
    update_schema=WebsiteVisitUpdate,
    filters=website_visit_filters,
)

store_visits_router = build_record_router(
    prefix="/api/store-visits",
    tag="tracking.store_visits",
    service=store_visit_service,
    create_schema=StoreVisitCreate,
    update_schema=StoreVisitUpdate,
    filters=store_visit_filters,
)

login_signups_router = build_record_router(
    prefix="/api/login-signups",
    tag="tracking.login_signups",
    service=login_signup_service,
    create_schema=LoginSignupCreate,
    update_schema=LoginSignupUpdate,
    filters=login_signup_filters,
)

contacts_router = APIRouter(prefix="/api/contacts", tags=["tracking.contacts"])


@contacts_router.get("", response_model=Envelope[list[ContactRead]])
def list_contacts(
    identifier: str | None = Query(default=None),
    limit: int = Query(default=get_settings().default_page_size, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_role(Role.VIEWER)),
) -> Envelope[list[ContactRead]]:
    return Envelope(data=contact_service.list_contacts(db, identifier, limit=limit, offset=offset))


@contacts_router.get("/{identifier}", response_model=Envelope[ContactRead])
def get_contact(
    identifier: str,
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_role(Role.VIEWER)),
) -> Envelope[ContactRead]:
    return Envelope(data=ContactRead.model_validate(contact_service.get_contact(db, identifier)))
