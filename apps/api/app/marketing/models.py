from __future__ import annotations

import datetime as dt

from sqlalchemy import Date, DateTime, Index, Integer, Numeric, String, Text, Time
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base
from app.platform.records.store import utcnow


def _amount() -> Mapped[float | None]:
    return mapped_column(Numeric(14, 2, asdecimal=False), nullable=True)


def _ratio() -> Mapped[float | None]:
    return mapped_column(Numeric(7, 2, asdecimal=False), nullable=True)


class TimestampMixin:
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)


class Campaign(TimestampMixin, Base):
    __tablename__ = "campaigns"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    campaign_name: Mapped[str] = mapped_column(String(255), nullable=False)
    campaign_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    channel: Mapped[str | None] = mapped_column(String(100), nullable=True)
    likes: Mapped[int | None] = mapped_column(Integer, nullable=True)
    comments: Mapped[int | None] = mapped_column(Integer, nullable=True)
    budget: Mapped[float | None] = _amount()
    budget_remaining: Mapped[float | None] = _amount()
    impressions: Mapped[int | None] = mapped_column(Integer, nullable=True)
    open_rate: Mapped[float | None] = _ratio()
    clicks: Mapped[int | None] = mapped_column(Integer, nullable=True)
    cta: Mapped[str | None] = mapped_column(Text, nullable=True)
    roi: Mapped[float | None] = _ratio()
    engagement_rate: Mapped[float | None] = _ratio()
    cart_abandonment: Mapped[float | None] = _ratio()
    total_purchase: Mapped[float | None] = _amount()
    avg_purchase_value: Mapped[float | None] = _amount()
    website_visits_count: Mapped[int | None] = mapped_column(Integer, nullable=True)
    store_visits_count: Mapped[int | None] = mapped_column(Integer, nullable=True)
    ecommerce_visits_count: Mapped[int | None] = mapped_column(Integer, nullable=True)
    social_visit_counts: Mapped[int | None] = mapped_column(Integer, nullable=True)


class FunnelEntry(TimestampMixin, Base):
    __tablename__ = "funnels"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    company_name: Mapped[str] = mapped_column(String(255), nullable=False)
    contact_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    contact_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    stage: Mapped[str] = mapped_column(String(100), nullable=False)
    value: Mapped[float | None] = _amount()
    probability: Mapped[int | None] = mapped_column(Integer, nullable=True)
    expected_revenue: Mapped[float | None] = _amount()
    creation_date: Mapped[dt.date | None] = mapped_column(Date(), nullable=True)
    expected_close_date: Mapped[dt.date | None] = mapped_column(Date(), nullable=True)
    team_member: Mapped[str | None] = mapped_column(String(255), nullable=True)
    progress_to_won: Mapped[int | None] = mapped_column(Integer, nullable=True)
    last_interacted_on: Mapped[dt.date | None] = mapped_column(Date(), nullable=True)
    next_step: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (Index("ix_funnels_stage", "stage"),)


class Research(TimestampMixin, Base):
    __tablename__ = "research"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    lead_name: Mapped[str] = mapped_column(String(255), nullable=False)
    locations: Mapped[str | None] = mapped_column(Text, nullable=True)
    contact_address: Mapped[str | None] = mapped_column(Text, nullable=True)
    contact_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    revenue: Mapped[float | None] = _amount()
    ceo: Mapped[str | None] = mapped_column(String(255), nullable=True)
    management_team: Mapped[str | None] = mapped_column(Text, nullable=True)
    public_or_private: Mapped[str | None] = mapped_column(String(50), nullable=True)
    annual_revenue: Mapped[float | None] = _amount()
    annual_profit_loss: Mapped[float | None] = _amount()
    employee_count: Mapped[int | None] = mapped_column(Integer, nullable=True)
    stock_price: Mapped[float | None] = _amount()
    products_or_services: Mapped[str | None] = mapped_column(Text, nullable=True)
    website: Mapped[str | None] = mapped_column(Text, nullable=True)
    linkedin_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    facebook_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    twitter_handle: Mapped[str | None] = mapped_column(String(255), nullable=True)
    youtube_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    social_posts: Mapped[str | None] = mapped_column(Text, nullable=True)
    quarterly_and_annual_documents: Mapped[str | None] = mapped_column(Text, nullable=True)
    quarterly_and_annual_summary: Mapped[str | None] = mapped_column(Text, nullable=True)
    news_textual: Mapped[str | None] = mapped_column(Text, nullable=True)
    social_insights: Mapped[str | None] = mapped_column(Text, nullable=True)
    legal: Mapped[str | None] = mapped_column(Text, nullable=True)


class Review(TimestampMixin, Base):
    __tablename__ = "reviews"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    channel_name: Mapped[str] = mapped_column(String(255), nullable=False)
    channel_link: Mapped[str | None] = mapped_column(Text, nullable=True)
    reviewer_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    product_review_count: Mapped[int | None] = mapped_column(Integer, nullable=True)
    competitive_product_review_count: Mapped[int | None] = mapped_column(Integer, nullable=True)
    summary: Mapped[str | None] = mapped_column(Text, nullable=True)
    sentiment: Mapped[str | None] = mapped_column(String(50), nullable=True)
    pricing: Mapped[str | None] = mapped_column(Text, nullable=True)
    comments: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (Index("ix_reviews_sentiment", "sentiment"),)


class Competition(TimestampMixin, Base):
    __tablename__ = "competitions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    similar_tools: Mapped[str] = mapped_column(String(255), nullable=False)
    web_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    pricing: Mapped[str | None] = mapped_column(Text, nullable=True)
    features: Mapped[str | None] = mapped_column(Text, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    website_visits_data: Mapped[str | None] = mapped_column(Text, nullable=True)
    social_data: Mapped[str | None] = mapped_column(Text, nullable=True)


class NewsletterBlog(TimestampMixin, Base):
    __tablename__ = "newsletter_blogs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    location: Mapped[str | None] = mapped_column(Text, nullable=True)
    time: Mapped[dt.time | None] = mapped_column(Time(), nullable=True)
    date: Mapped[dt.date | None] = mapped_column(Date(), nullable=True)
    frequency: Mapped[str | None] = mapped_column(String(50), nullable=True)
    status: Mapped[str | None] = mapped_column(String(50), nullable=True)
    newsletter_name: Mapped[str] = mapped_column(String(255), nullable=False)
    blogs: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        Index("ix_newsletter_blogs_email", "email"),
        Index("ix_newsletter_blogs_status", "status"),
    )
