"""create lifecycle tables

Revision ID: 202610190001
Revises:
Create Date: 2026-10-19 00:00:00
"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa


revision: str = "202610190001"
down_revision: str | None = None
branch_labels: Sequence[str] | None = None
depends_on: Sequence[str] | None = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def _amount(name: str) -> sa.Column:
    return sa.Column(name, sa.Numeric(14, 2), nullable=True)


def _ratio(name: str) -> sa.Column:
    return sa.Column(name, sa.Numeric(7, 2), nullable=True)


def upgrade() -> None:
    op.create_table(
        "contacts",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("contact_identifier", sa.String(length=255), nullable=False),
        sa.Column("first_website_visit", sa.DateTime(timezone=True), nullable=True),
        sa.Column("first_store_visit", sa.DateTime(timezone=True), nullable=True),
        sa.Column("signup_date", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("contact_identifier"),
    )

    op.create_table(
        "website_visits",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("ip", sa.String(length=45), nullable=False),
        sa.Column("owner_contact", sa.String(length=255), nullable=True),
        sa.Column("number_of_visits", sa.Integer(), nullable=False),
        sa.Column("page_visits", sa.Text(), nullable=True),
        sa.Column("website_duration", sa.Integer(), nullable=False),
        sa.Column("location", sa.Text(), nullable=True),
        sa.Column("time", sa.Time(), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        *_timestamps(),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_website_visits_owner_contact", "website_visits", ["owner_contact"])
    op.create_index("ix_website_visits_date", "website_visits", ["date"])
    op.create_index("ix_website_visits_ip_date_time", "website_visits", ["ip", "date", "time"])

    op.create_table(
        "store_visits",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("owner_contact", sa.String(length=255), nullable=False),
        sa.Column("number_of_visits", sa.Integer(), nullable=False),
        sa.Column("location", sa.Text(), nullable=False),
        sa.Column("time", sa.Time(), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        *_timestamps(),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_store_visits_owner_contact", "store_visits", ["owner_contact"])
    op.create_index("ix_store_visits_date", "store_visits", ["date"])

    op.create_table(
        "login_signups",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("username", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("location", sa.Text(), nullable=False),
        sa.Column("time", sa.Time(), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        *_timestamps(),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_login_signups_email", "login_signups", ["email"])
    op.create_index("ix_login_signups_date", "login_signups", ["date"])

    op.create_table(
        "campaigns",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("campaign_name", sa.String(length=255), nullable=False),
        sa.Column("campaign_type", sa.String(length=100), nullable=True),
        sa.Column("channel", sa.String(length=100), nullable=True),
        sa.Column("likes", sa.Integer(), nullable=True),
        sa.Column("comments", sa.Integer(), nullable=True),
        _amount("budget"),
        _amount("budget_remaining"),
        sa.Column("impressions", sa.Integer(), nullable=True),
        _ratio("open_rate"),
        sa.Column("clicks", sa.Integer(), nullable=True),
        sa.Column("cta", sa.Text(), nullable=True),
        _ratio("roi"),
        _ratio("engagement_rate"),
        _ratio("cart_abandonment"),
        _amount("total_purchase"),
        _amount("avg_purchase_value"),
        sa.Column("website_visits_count", sa.Integer(), nullable=True),
        sa.Column("store_visits_count", sa.Integer(), nullable=True),
        sa.Column("ecommerce_visits_count", sa.Integer(), nullable=True),
        sa.Column("social_visit_counts", sa.Integer(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "funnels",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("company_name", sa.String(length=255), nullable=False),
        sa.Column("contact_name", sa.String(length=255), nullable=True),
        sa.Column("contact_email", sa.String(length=255), nullable=True),
        sa.Column("stage", sa.String(length=100), nullable=False),
        _amount("value"),
        sa.Column("probability", sa.Integer(), nullable=True),
        _amount("expected_revenue"),
        sa.Column("creation_date", sa.Date(), nullable=True),
        sa.Column("expected_close_date", sa.Date(), nullable=True),
        sa.Column("team_member", sa.String(length=255), nullable=True),
        sa.Column("progress_to_won", sa.Integer(), nullable=True),
        sa.Column("last_interacted_on", sa.Date(), nullable=True),
        sa.Column("next_step", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_funnels_stage", "funnels", ["stage"])

    op.create_table(
        "research",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("lead_name", sa.String(length=255), nullable=False),
        sa.Column("locations", sa.Text(), nullable=True),
        sa.Column("contact_address", sa.Text(), nullable=True),
        sa.Column("contact_email", sa.String(length=255), nullable=True),
        _amount("revenue"),
        sa.Column("ceo", sa.String(length=255), nullable=True),
        sa.Column("management_team", sa.Text(), nullable=True),
        sa.Column("public_or_private", sa.String(length=50), nullable=True),
        _amount("annual_revenue"),
        _amount("annual_profit_loss"),
        sa.Column("employee_count", sa.Integer(), nullable=True),
        _amount("stock_price"),
        sa.Column("products_or_services", sa.Text(), nullable=True),
        sa.Column("website", sa.Text(), nullable=True),
        sa.Column("linkedin_url", sa.Text(), nullable=True),
        sa.Column("facebook_url", sa.Text(), nullable=True),
        sa.Column("twitter_handle", sa.String(length=255), nullable=True),
        sa.Column("youtube_url", sa.Text(), nullable=True),
        sa.Column("social_posts", sa.Text(), nullable=True),
        sa.Column("quarterly_and_annual_documents", sa.Text(), nullable=True),
        sa.Column("quarterly_and_annual_summary", sa.Text(), nullable=True),
        sa.Column("news_textual", sa.Text(), nullable=True),
        sa.Column("social_insights", sa.Text(), nullable=True),
        sa.Column("legal", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "reviews",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("channel_name", sa.String(length=255), nullable=False),
        sa.Column("channel_link", sa.Text(), nullable=True),
        sa.Column("reviewer_name", sa.String(length=255), nullable=True),
        sa.Column("product_review_count", sa.Integer(), nullable=True),
        sa.Column("competitive_product_review_count", sa.Integer(), nullable=True),
        sa.Column("summary", sa.Text(), nullable=True),
        sa.Column("sentiment", sa.String(length=50), nullable=True),
        sa.Column("pricing", sa.Text(), nullable=True),
        sa.Column("comments", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_reviews_sentiment", "reviews", ["sentiment"])

    op.create_table(
        "competitions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("similar_tools", sa.String(length=255), nullable=False),
        sa.Column("web_url", sa.Text(), nullable=True),
        sa.Column("pricing", sa.Text(), nullable=True),
        sa.Column("features", sa.Text(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("website_visits_data", sa.Text(), nullable=True),
        sa.Column("social_data", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "newsletter_blogs",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("location", sa.Text(), nullable=True),
        sa.Column("time", sa.Time(), nullable=True),
        sa.Column("date", sa.Date(), nullable=True),
        sa.Column("frequency", sa.String(length=50), nullable=True),
        sa.Column("status", sa.String(length=50), nullable=True),
        sa.Column("newsletter_name", sa.String(length=255), nullable=False),
        sa.Column("blogs", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_newsletter_blogs_email", "newsletter_blogs", ["email"])
    op.create_index("ix_newsletter_blogs_status", "newsletter_blogs", ["status"])

    op.create_table(
        "call_interactions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("time", sa.Time(), nullable=True),
        sa.Column("date", sa.Date(), nullable=True),
        sa.Column("email_ids", sa.Text(), nullable=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("call_duration", sa.Integer(), nullable=True),
        sa.Column("voice_recordings", sa.Text(), nullable=True),
        sa.Column("transcripts", sa.Text(), nullable=True),
        sa.Column("summary", sa.Text(), nullable=True),
        sa.Column("sentiment", sa.String(length=50), nullable=True),
        sa.Column("action_items", sa.Text(), nullable=True),
        sa.Column("purchase_intent_score", sa.Numeric(5, 2), nullable=True),
        sa.Column("sales_highlights", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_call_interactions_sentiment", "call_interactions", ["sentiment"])

    op.create_table(
        "chat_interactions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("time", sa.Time(), nullable=True),
        sa.Column("date", sa.Date(), nullable=True),
        sa.Column("email_ids", sa.Text(), nullable=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("chat_duration", sa.Integer(), nullable=True),
        sa.Column("conversation", sa.Text(), nullable=True),
        sa.Column("summary", sa.Text(), nullable=True),
        sa.Column("sentiment", sa.String(length=50), nullable=True),
        sa.Column("action_items", sa.Text(), nullable=True),
        sa.Column("purchase_intent_score", sa.Numeric(5, 2), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_chat_interactions_sentiment", "chat_interactions", ["sentiment"])

    op.create_table(
        "email_interactions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("email_ids", sa.Text(), nullable=True),
        sa.Column("email_domain", sa.String(length=255), nullable=True),
        sa.Column("subject", sa.String(length=500), nullable=False),
        sa.Column("message", sa.Text(), nullable=True),
        sa.Column("attachments", sa.Text(), nullable=True),
        sa.Column("time", sa.Time(), nullable=True),
        sa.Column("date", sa.Date(), nullable=True),
        sa.Column("thread", sa.Text(), nullable=True),
        sa.Column("summary", sa.Text(), nullable=True),
        sa.Column("sentiment", sa.String(length=50), nullable=True),
        sa.Column("sender_id", sa.String(length=255), nullable=True),
        sa.Column("receiver_id", sa.String(length=255), nullable=True),
        sa.Column("cc_id", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_email_interactions_sentiment", "email_interactions", ["sentiment"])


def downgrade() -> None:
    op.drop_index("ix_email_interactions_sentiment", table_name="email_interactions")
    op.drop_table("email_interactions")
    op.drop_index("ix_chat_interactions_sentiment", table_name="chat_interactions")
    op.drop_table("chat_interactions")
    op.drop_index("ix_call_interactions_sentiment", table_name="call_interactions")
    op.drop_table("call_interactions")
    op.drop_index("ix_newsletter_blogs_status", table_name="newsletter_blogs")
    op.drop_index("ix_newsletter_blogs_email", table_name="newsletter_blogs")
    op.drop_table("newsletter_blogs")
    op.drop_table("competitions")
    op.drop_index("ix_reviews_sentiment", table_name="reviews")
    op.drop_table("reviews")
    op.drop_table("research")
    op.drop_index("ix_funnels_stage", table_name="funnels")
    op.drop_table("funnels")
    op.drop_table("campaigns")
    op.drop_index("ix_login_signups_date", table_name="login_signups")
    op.drop_index("ix_login_signups_email", table_name="login_signups")
    op.drop_table("login_signups")
    op.drop_index("ix_store_visits_date", table_name="store_visits")
    op.drop_index("ix_store_visits_owner_contact", table_name="store_visits")
    op.drop_table("store_visits")
    op.drop_index("ix_website_visits_ip_date_time", table_name="website_visits")
    op.drop_index("ix_website_visits_date", table_name="website_visits")
    op.drop_index("ix_website_visits_owner_contact", table_name="website_visits")
    op.drop_table("website_visits")
    op.drop_table("contacts")
