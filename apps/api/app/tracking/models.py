from __future__ import annotations

import datetime as dt

from sqlalchemy import Date, DateTime, Index, Integer, String, Text, Time
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base


def utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


class Contact(Base):
    __tablename__ = "contacts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    contact_identifier: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    first_website_visit: Mapped[dt.datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    first_store_visit: Mapped[dt.datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    signup_date: Mapped[dt.datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)


class WebsiteVisit(Base):
    __tablename__ = "website_visits"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    ip: Mapped[str] = mapped_column(String(45), nullable=False)
    owner_contact: Mapped[str | None] = mapped_column(String(255), nullable=True)
    number_of_visits: Mapped[int] = mapped_column(Integer, nullable=False)
    page_visits: Mapped[str | None] = mapped_column(Text, nullable=True)
    website_duration: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    location: Mapped[str | None] = mapped_column(Text, nullable=True)
    time: Mapped[dt.time] = mapped_column(Time(), nullable=False)
    date: Mapped[dt.date] = mapped_column(Date(), nullable=False)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
    deleted_at: Mapped[dt.datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        Index("ix_website_visits_owner_contact", "owner_contact"),
        Index("ix_website_visits_date", "date"),
        Index("ix_website_visits_ip_date_time", "ip", "date", "time"),
    )


class StoreVisit(Base):
    __tablename__ = "store_visits"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    owner_contact: Mapped[str] = mapped_column(String(255), nullable=False)
    number_of_visits: Mapped[int] = mapped_column(Integer, nullable=False)
    location: Mapped[str] = mapped_column(Text, nullable=False)
    time: Mapped[dt.time] = mapped_column(Time(), nullable=False)
    date: Mapped[dt.date] = mapped_column(Date(), nullable=False)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
    deleted_at: Mapped[dt.datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        Index("ix_store_visits_owner_contact", "owner_contact"),
        Index("ix_store_visits_date", "date"),
    )


class LoginSignup(Base):
    __tablename__ = "login_signups"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    location: Mapped[str] = mapped_column(Text, nullable=False)
    time: Mapped[dt.time] = mapped_column(Time(), nullable=False)
    date: Mapped[dt.date] = mapped_column(Date(), nullable=False)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
    deleted_at: Mapped[dt.datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        Index("ix_login_signups_email", "email"),
        Index("ix_login_signups_date", "date"),
    )
