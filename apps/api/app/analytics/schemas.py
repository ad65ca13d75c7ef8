from __future__ import annotations

import datetime as dt
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.tracking.schemas import ContactRead


class AnalyticsModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class InteractionEventRead(AnalyticsModel):
    type: Literal["website_visit", "store_visit", "signup"]
    date: dt.date | None
    time: dt.time | None
    data: dict[str, Any]


class JourneySummaryRead(AnalyticsModel):
    total_website_visits: int
    total_store_visits: int
    total_signups: int
    first_interaction: dt.date | None
    last_interaction: dt.date | None


class ContactJourneyRead(AnalyticsModel):
    contact: ContactRead
    events: list[InteractionEventRead]
    summary: JourneySummaryRead


class FunnelStageRead(AnalyticsModel):
    name: str
    unique_visitors: int
    total_visits: int
    conversion_rate: float


class FunnelMetricsRead(AnalyticsModel):
    website_to_store: float
    store_to_signup: float
    overall_conversion: float


class FunnelRead(AnalyticsModel):
    stages: list[FunnelStageRead]
    metrics: FunnelMetricsRead


class TrendPoint(AnalyticsModel):
    date: dt.date
    count: int


class TrendsRead(AnalyticsModel):
    website_visits: list[TrendPoint]
    store_visits: list[TrendPoint]
    signups: list[TrendPoint]


class DashboardMetricsRead(AnalyticsModel):
    total_website_visits: int
    unique_website_visitors: int
    total_store_visits: int
    unique_store_visitors: int
    total_signups: int
    unique_signups: int
    website_to_store_conversion: float
    store_to_signup_conversion: float


class RecentActivityRead(BaseModel):
    """Row-shaped, so keys stay snake_case like the record endpoints."""

    type: Literal["website_visit", "store_visit", "signup"]
    identifier: str | None
    location: str | None
    date: dt.date
    time: dt.time
    created_at: dt.datetime


class DashboardSummaryRead(AnalyticsModel):
    metrics: DashboardMetricsRead
    recent_activities: list[RecentActivityRead]
