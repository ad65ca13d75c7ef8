from __future__ import annotations

from fastapi import Query
from sqlalchemy import ColumnElement

from app.marketing.models import Campaign, Competition, FunnelEntry, NewsletterBlog, Research, Review
from app.marketing.schemas import (
    CampaignCreate,
    CampaignRead,
    CampaignUpdate,
    CompetitionCreate,
    CompetitionRead,
    CompetitionUpdate,
    FunnelEntryCreate,
    FunnelEntryRead,
    FunnelEntryUpdate,
    NewsletterBlogCreate,
    NewsletterBlogRead,
    NewsletterBlogUpdate,
    ResearchCreate,
    ResearchRead,
    ResearchUpdate,
    ReviewCreate,
    ReviewRead,
    ReviewUpdate,
)
from app.platform.records.crud import RecordService, build_record_router


campaign_service = RecordService(Campaign, CampaignRead, entity="campaign", label="Campaign")
funnel_service = RecordService(FunnelEntry, FunnelEntryRead, entity="funnel", label="Funnel entry")
research_service = RecordService(Research, ResearchRead, entity="research", label="Research")
review_service = RecordService(Review, ReviewRead, entity="review", label="Review")
competition_service = RecordService(Competition, CompetitionRead, entity="competition", label="Competition")
newsletter_blog_service = RecordService(
    NewsletterBlog, NewsletterBlogRead, entity="newsletter_blog", label="Newsletter/blog entry"
)


def review_filters(
    sentiment: str | None = Query(default=None),
    channel_name: str | None = Query(default=None),
) -> list[ColumnElement[bool]]:
    criteria: list[ColumnElement[bool]] = []
    if sentiment:
        criteria.append(Review.sentiment == sentiment)
    if channel_name:
        criteria.append(Review.channel_name.ilike(f"%{channel_name}%"))
    return criteria


def funnel_filters(stage: str | None = Query(default=None)) -> list[ColumnElement[bool]]:
    return [FunnelEntry.stage == stage] if stage else []


def newsletter_blog_filters(status: str | None = Query(default=None)) -> list[ColumnElement[bool]]:
    return [NewsletterBlog.status == status] if status else []


campaigns_router = build_record_router(
    prefix="/api/campaigns",
    tag="marketing.campaigns",
    service=campaign_service,
    create_schema=CampaignCreate,
    update_schema=CampaignUpdate,
)

funnels_router = build_record_router(
    prefix="/api/funnels",
    tag="marketing.funnels",
    service=funnel_service,
    create_schema=FunnelEntryCreate,
    update_schema=FunnelEntryUpdate,
    filters=funnel_filters,
)

research_router = build_record_router(
    prefix="/api/research",
    tag="marketing.research",
    service=research_service,
    create_schema=ResearchCreate,
    update_schema=ResearchUpdate,
)

reviews_router = build_record_router(
    prefix="/api/reviews",
    tag="marketing.reviews",
    service=review_service,
    create_schema=ReviewCreate,
    update_schema=ReviewUpdate,
    filters=review_filters,
    default_limit=100,
)

competitions_router = build_record_router(
    prefix="/api/competitions",
    tag="marketing.competitions",
    service=competition_service,
    create_schema=CompetitionCreate,
    update_schema=CompetitionUpdate,
    default_limit=100,
)

newsletter_blogs_router = build_record_router(
    prefix="/api/newsletter-blogs",
    tag="marketing.newsletter_blogs",
    service=newsletter_blog_service,
    create_schema=NewsletterBlogCreate,
    update_schema=NewsletterBlogUpdate,
    filters=newsletter_blog_filters,
)
