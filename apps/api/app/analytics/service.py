from __future__ import annotations

import datetime as dt
import logging
from collections.abc import Iterable
from typing import Any, Literal

from sqlalchemy.orm import Session

from app.analytics.conversion import StageCount, build_funnel_stages, conversion_rate, funnel_metrics
from app.analytics.schemas import (
    DashboardMetricsRead,
    DashboardSummaryRead,
    FunnelMetricsRead,
    FunnelRead,
    FunnelStageRead,
    RecentActivityRead,
    TrendPoint,
    TrendsRead,
)
from app.core.config import get_settings
from app.otel import get_tracer
from app.platform.records.store import RecordStore
from app.tracking.models import LoginSignup, StoreVisit, WebsiteVisit
from app.tracking.service import event_window


logger = logging.getLogger("app.analytics")
tracer = get_tracer("app.analytics")

Granularity = Literal["daily", "weekly", "monthly"]


def bucket_start(day: dt.date, granularity: Granularity) -> dt.date:
    if granularity == "weekly":
        return day - dt.timedelta(days=day.weekday())
    if granularity == "monthly":
        return day.replace(day=1)
    return day


def bucket_counts(daily: Iterable[tuple[dt.date, int]], granularity: Granularity) -> list[TrendPoint]:
    buckets: dict[dt.date, int] = {}
    for day, count in daily:
        key = bucket_start(day, granularity)
        buckets[key] = buckets.get(key, 0) + count
    return [TrendPoint(date=key, count=buckets[key]) for key in sorted(buckets)]


class AnalyticsService:
    def __init__(self) -> None:
        self.website_visits: RecordStore[WebsiteVisit] = RecordStore(WebsiteVisit)
        self.store_visits: RecordStore[StoreVisit] = RecordStore(StoreVisit)
        self.signups: RecordStore[LoginSignup] = RecordStore(LoginSignup)

    def funnel(self, session: Session, start_date: dt.date | None, end_date: dt.date | None) -> FunnelRead:
        with tracer.start_as_current_span("analytics.funnel"):
            website_window = event_window(WebsiteVisit, start_date, end_date)
            store_window = event_window(StoreVisit, start_date, end_date)
            signup_window = event_window(LoginSignup, start_date, end_date)
            counts = [
                StageCount(
                    "Website Visits",
                    self.website_visits.count_distinct(session, WebsiteVisit.owner_contact, *website_window),
                    self.website_visits.count(session, *website_window),
                ),
                StageCount(
                    "Store Visits",
                    self.store_visits.count_distinct(session, StoreVisit.owner_contact, *store_window),
                    self.store_visits.count(session, *store_window),
                ),
                StageCount(
                    "Signups",
                    self.signups.count_distinct(session, LoginSignup.email, *signup_window),
                    self.signups.count(session, *signup_window),
                ),
            ]

        stages = build_funnel_stages(counts)
        metrics = funnel_metrics(*(count.unique_visitors for count in counts))
        logger.info("analytics.funnel", extra={"event_count": sum(count.total_visits for count in counts)})
        return FunnelRead(
            stages=[
                FunnelStageRead(
                    name=stage.name,
                    unique_visitors=stage.unique_visitors,
                    total_visits=stage.total_visits,
                    conversion_rate=stage.conversion_rate,
                )
                for stage in stages
            ],
            metrics=FunnelMetricsRead.model_validate(metrics),
        )

    def trends(
        self,
        session: Session,
        start_date: dt.date | None,
        end_date: dt.date | None,
        granularity: Granularity = "daily",
    ) -> TrendsRead:
        def series(store: RecordStore[Any], model: Any) -> list[TrendPoint]:
            daily = store.grouped_counts(session, model.date, *event_window(model, start_date, end_date))
            return bucket_counts(daily, granularity)

        return TrendsRead(
            website_visits=series(self.website_visits, WebsiteVisit),
            store_visits=series(self.store_visits, StoreVisit),
            signups=series(self.signups, LoginSignup),
        )

    def dashboard_summary(self, session: Session) -> DashboardSummaryRead:
        settings = get_settings()
        with tracer.start_as_current_span("analytics.dashboard_summary"):
            total_website = self.website_visits.count(session)
            unique_website = self.website_visits.count_distinct(session, WebsiteVisit.owner_contact)
            total_store = self.store_visits.count(session)
            unique_store = self.store_visits.count_distinct(session, StoreVisit.owner_contact)
            total_signups = self.signups.count(session)
            unique_signups = self.signups.count_distinct(session, LoginSignup.email)
            activities = self._recent_activities(
                session,
                per_source=settings.recent_activity_per_source,
                limit=settings.recent_activity_limit,
            )

        return DashboardSummaryRead(
            metrics=DashboardMetricsRead(
                total_website_visits=total_website,
                unique_website_visitors=unique_website,
                total_store_visits=total_store,
                unique_store_visitors=unique_store,
                total_signups=total_signups,
                unique_signups=unique_signups,
                website_to_store_conversion=conversion_rate(unique_store, unique_website),
                store_to_signup_conversion=conversion_rate(unique_signups, unique_store),
            ),
            recent_activities=activities,
        )

    def _recent_activities(self, session: Session, *, per_source: int, limit: int) -> list[RecentActivityRead]:
        sources = (
            (self.website_visits, WebsiteVisit, "website_visit", "ip"),
            (self.store_visits, StoreVisit, "store_visit", "owner_contact"),
            (self.signups, LoginSignup, "signup", "email"),
        )
        activities: list[RecentActivityRead] = []
        for store, model, kind, identifier_column in sources:
            rows = store.find(session, order_by=(model.created_at.desc(), model.id.desc()), limit=per_source)
            activities.extend(
                RecentActivityRead(
                    type=kind,
                    identifier=getattr(row, identifier_column),
                    location=row.location,
                    date=row.date,
                    time=row.time,
                    created_at=row.created_at,
                )
                for row in rows
            )
        activities.sort(key=lambda activity: activity.created_at, reverse=True)
        return activities[:limit]
