from __future__ import annotations

import datetime as dt
from typing import Any

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from app.tracking.validation import INTEGER_MAX, parse_time_of_day


class CampaignFields(BaseModel):
    campaign_type: str | None = None
    channel: str | None = None
    likes: int | None = Field(default=None, ge=0, le=INTEGER_MAX)
    comments: int | None = Field(default=None, ge=0, le=INTEGER_MAX)
    budget: float | None = None
    budget_remaining: float | None = None
    impressions: int | None = Field(default=None, ge=0, le=INTEGER_MAX)
    open_rate: float | None = None
    clicks: int | None = Field(default=None, ge=0, le=INTEGER_MAX)
    cta: str | None = None
    roi: float | None = None
    engagement_rate: float | None = None
    cart_abandonment: float | None = None
    total_purchase: float | None = None
    avg_purchase_value: float | None = None
    website_visits_count: int | None = Field(default=None, ge=0, le=INTEGER_MAX)
    store_visits_count: int | None = Field(default=None, ge=0, le=INTEGER_MAX)
    ecommerce_visits_count: int | None = Field(default=None, ge=0, le=INTEGER_MAX)
    social_visit_counts: int | None = Field(default=None, ge=0, le=INTEGER_MAX)


class CampaignCreate(CampaignFields):
    campaign_name: str = Field(min_length=1)


class CampaignUpdate(CampaignFields):
    campaign_name: str | None = Field(default=None, min_length=1)


class CampaignRead(CampaignFields):
    model_config = ConfigDict(from_attributes=True)

    id: int
    campaign_name: str
    created_at: dt.datetime
    updated_at: dt.datetime


class FunnelEntryFields(BaseModel):
    contact_name: str | None = None
    contact_email: EmailStr | None = None
    value: float | None = None
    probability: int | None = Field(default=None, ge=0, le=100)
    expected_revenue: float | None = None
    creation_date: dt.date | None = None
    expected_close_date: dt.date | None = None
    team_member: str | None = None
    progress_to_won: int | None = Field(default=None, ge=0, le=100)
    last_interacted_on: dt.date | None = None
    next_step: str | None = None


class FunnelEntryCreate(FunnelEntryFields):
    company_name: str = Field(min_length=1)
    stage: str = Field(min_length=1)


class FunnelEntryUpdate(FunnelEntryFields):
    company_name: str | None = Field(default=None, min_length=1)
    stage: str | None = Field(default=None, min_length=1)


class FunnelEntryRead(FunnelEntryFields):
    model_config = ConfigDict(from_attributes=True)

    id: int
    company_name: str
    stage: str
    contact_email: str | None = None
    created_at: dt.datetime
    updated_at: dt.datetime


class ResearchFields(BaseModel):
    locations: str | None = None
    contact_address: str | None = None
    contact_email: str | None = None
    revenue: float | None = None
    ceo: str | None = None
    management_team: str | None = None
    public_or_private: str | None = None
    annual_revenue: float | None = None
    annual_profit_loss: float | None = None
    employee_count: int | None = Field(default=None, ge=0, le=INTEGER_MAX)
    stock_price: float | None = None
    products_or_services: str | None = None
    website: str | None = None
    linkedin_url: str | None = None
    facebook_url: str | None = None
    twitter_handle: str | None = None
    youtube_url: str | None = None
    social_posts: str | None = None
    quarterly_and_annual_documents: str | None = None
    quarterly_and_annual_summary: str | None = None
    news_textual: str | None = None
    social_insights: str | None = None
    legal: str | None = None


class ResearchCreate(ResearchFields):
    lead_name: str = Field(min_length=1)


class ResearchUpdate(ResearchFields):
    lead_name: str | None = Field(default=None, min_length=1)


class ResearchRead(ResearchFields):
    model_config = ConfigDict(from_attributes=True)

    id: int
    lead_name: str
    created_at: dt.datetime
    updated_at: dt.datetime


class ReviewFields(BaseModel):
    channel_link: str | None = None
    reviewer_name: str | None = None
    product_review_count: int | None = Field(default=None, ge=0, le=INTEGER_MAX)
    competitive_product_review_count: int | None = Field(default=None, ge=0, le=INTEGER_MAX)
    summary: str | None = None
    sentiment: str | None = None
    pricing: str | None = None
    comments: str | None = None


class ReviewCreate(ReviewFields):
    channel_name: str = Field(min_length=1)


class ReviewUpdate(ReviewFields):
    channel_name: str | None = Field(default=None, min_length=1)


class ReviewRead(ReviewFields):
    model_config = ConfigDict(from_attributes=True)

    id: int
    channel_name: str
    created_at: dt.datetime
    updated_at: dt.datetime


class CompetitionFields(BaseModel):
    web_url: str | None = None
    pricing: str | None = None
    features: str | None = None
    description: str | None = None
    website_visits_data: str | None = None
    social_data: str | None = None


class CompetitionCreate(CompetitionFields):
    similar_tools: str = Field(min_length=1)


class CompetitionUpdate(CompetitionFields):
    similar_tools: str | None = Field(default=None, min_length=1)


class CompetitionRead(CompetitionFields):
    model_config = ConfigDict(from_attributes=True)

    id: int
    similar_tools: str
    created_at: dt.datetime
    updated_at: dt.datetime


class NewsletterBlogFields(BaseModel):
    location: str | None = None
    time: dt.time | None = None
    date: dt.date | None = None
    frequency: str | None = None
    status: str | None = None
    blogs: str | None = None

    @field_validator("time", mode="before")
    @classmethod
    def _check_time(cls, value: Any) -> Any:
        if value is None or isinstance(value, dt.time):
            return value
        return parse_time_of_day(value)


class NewsletterBlogCreate(NewsletterBlogFields):
    email: EmailStr
    newsletter_name: str = Field(min_length=1)


class NewsletterBlogUpdate(NewsletterBlogFields):
    email: EmailStr | None = None
    newsletter_name: str | None = Field(default=None, min_length=1)


class NewsletterBlogRead(NewsletterBlogFields):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    newsletter_name: str
    created_at: dt.datetime
    updated_at: dt.datetime
