from __future__ import annotations

import datetime as dt

from sqlalchemy import Date, Index, Integer, Numeric, String, Text, Time
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base
from app.marketing.models import TimestampMixin


class CallInteraction(TimestampMixin, Base):
    __tablename__ = "call_interactions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    time: Mapped[dt.time | None] = mapped_column(Time(), nullable=True)
    date: Mapped[dt.date | None] = mapped_column(Date(), nullable=True)
    email_ids: Mapped[str | None] = mapped_column(Text, nullable=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    call_duration: Mapped[int | None] = mapped_column(Integer, nullable=True)
    voice_recordings: Mapped[str | None] = mapped_column(Text, nullable=True)
    transcripts: Mapped[str | None] = mapped_column(Text, nullable=True)
    summary: Mapped[str | None] = mapped_column(Text, nullable=True)
    sentiment: Mapped[str | None] = mapped_column(String(50), nullable=True)
    action_items: Mapped[str | None] = mapped_column(Text, nullable=True)
    purchase_intent_score: Mapped[float | None] = mapped_column(Numeric(5, 2, asdecimal=False), nullable=True)
    sales_highlights: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (Index("ix_call_interactions_sentiment", "sentiment"),)


class ChatInteraction(TimestampMixin, Base):
    __tablename__ = "chat_interactions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    time: Mapped[dt.time | None] = mapped_column(Time(), nullable=True)
    date: Mapped[dt.date | None] = mapped_column(Date(), nullable=True)
    email_ids: Mapped[str | None] = mapped_column(Text, nullable=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    chat_duration: Mapped[int | None] = mapped_column(Integer, nullable=True)
    conversation: Mapped[str | None] = mapped_column(Text, nullable=True)
    summary: Mapped[str | None] = mapped_column(Text, nullable=True)
    sentiment: Mapped[str | None] = mapped_column(String(50), nullable=True)
    action_items: Mapped[str | None] = mapped_column(Text, nullable=True)
    purchase_intent_score: Mapped[float | None] = mapped_column(Numeric(5, 2, asdecimal=False), nullable=True)

    __table_args__ = (Index("ix_chat_interactions_sentiment", "sentiment"),)


class EmailInteraction(TimestampMixin, Base):
    __tablename__ = "email_interactions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email_ids: Mapped[str | None] = mapped_column(Text, nullable=True)
    email_domain: Mapped[str | None] = mapped_column(String(255), nullable=True)
    subject: Mapped[str] = mapped_column(String(500), nullable=False)
    message: Mapped[str | None] = mapped_column(Text, nullable=True)
    attachments: Mapped[str | None] = mapped_column(Text, nullable=True)
    time: Mapped[dt.time | None] = mapped_column(Time(), nullable=True)
    date: Mapped[dt.date | None] = mapped_column(Date(), nullable=True)
    thread: Mapped[str | None] = mapped_column(Text, nullable=True)
    summary: Mapped[str | None] = mapped_column(Text, nullable=True)
    sentiment: Mapped[str | None] = mapped_column(String(50), nullable=True)
    sender_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    receiver_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    cc_id: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (Index("ix_email_interactions_sentiment", "sentiment"),)
