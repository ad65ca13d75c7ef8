from __future__ import annotations

import datetime as dt

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.analytics.journey import ContactJourney, JourneyAggregator
from app.analytics.schemas import (
    ContactJourneyRead,
    DashboardSummaryRead,
    FunnelRead,
    InteractionEventRead,
    JourneySummaryRead,
    TrendsRead,
)
from app.analytics.service import AnalyticsService, Granularity
from app.core.auth import Identity
from app.core.database import get_db
from app.core.rbac import Capability, Role, require_capability, require_role
from app.platform.records.schemas import Envelope
from app.tracking.schemas import ContactRead


journey_router = APIRouter(prefix="/api/contacts", tags=["analytics.journey"])
analytics_router = APIRouter(prefix="/api/analytics", tags=["analytics"])
dashboard_router = APIRouter(prefix="/api/dashboard", tags=["analytics.dashboard"])

journey_aggregator = JourneyAggregator()
analytics_service = AnalyticsService()


def _journey_read(journey: ContactJourney) -> ContactJourneyRead:
    return ContactJourneyRead(
        contact=ContactRead.model_validate(journey.contact),
        events=[
            InteractionEventRead(type=event.type, date=event.date, time=event.time, data=event.data)
            for event in journey.events
        ],
        summary=JourneySummaryRead(
            total_website_visits=journey.total_website_visits,
            total_store_visits=journey.total_store_visits,
            total_signups=journey.total_signups,
            first_interaction=journey.first_interaction,
            last_interaction=journey.last_interaction,
        ),
    )


@journey_router.get("/journey/{identifier}", response_model=Envelope[ContactJourneyRead])
def get_contact_journey(
    identifier: str,
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_role(Role.VIEWER)),
) -> Envelope[ContactJourneyRead]:
    return Envelope(data=_journey_read(journey_aggregator.build(db, identifier)))


@analytics_router.get("/funnel", response_model=Envelope[FunnelRead])
def get_funnel(
    start_date: dt.date | None = Query(default=None, alias="startDate"),
    end_date: dt.date | None = Query(default=None, alias="endDate"),
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_capability(Capability.VIEW_ANALYTICS)),
) -> Envelope[FunnelRead]:
    return Envelope(data=analytics_service.funnel(db, start_date, end_date))


@analytics_router.get("/trends", response_model=Envelope[TrendsRead])
def get_trends(
    start_date: dt.date | None = Query(default=None, alias="startDate"),
    end_date: dt.date | None = Query(default=None, alias="endDate"),
    granularity: Granularity = Query(default="daily"),
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_capability(Capability.VIEW_ANALYTICS)),
) -> Envelope[TrendsRead]:
    return Envelope(data=analytics_service.trends(db, start_date, end_date, granularity))


@dashboard_router.get("/summary", response_model=Envelope[DashboardSummaryRead])
def get_dashboard_summary(
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_role(Role.VIEWER)),
) -> Envelope[DashboardSummaryRead]:
    return Envelope(data=analytics_service.dashboard_summary(db))
