from __future__ import annotations

import datetime as dt
from typing import Any

from pydantic import BaseModel, ConfigDict, EmailStr, field_validator

from app.tracking import validation


def _optional(check, value: Any, *args: Any) -> Any:  # type: ignore[no-untyped-def]
    if value is None:
        return None
    return check(value, *args)


class _EventTiming(BaseModel):
    @field_validator("date", mode="before", check_fields=False)
    @classmethod
    def _check_date(cls, value: Any) -> Any:
        return _optional(validation.validate_event_date, value)

    @field_validator("time", mode="before", check_fields=False)
    @classmethod
    def _check_time(cls, value: Any) -> Any:
        return _optional(validation.parse_time_of_day, value)


class WebsiteVisitCreate(_EventTiming):
    ip: str
    owner_contact: str | None = None
    number_of_visits: int = 1
    page_visits: str | None = None
    website_duration: int = 0
    location: str | None = None
    time: dt.time
    date: dt.date

    @field_validator("ip", mode="before")
    @classmethod
    def _check_ip(cls, value: Any) -> str:
        return validation.validate_ip(value)

    @field_validator("number_of_visits")
    @classmethod
    def _check_visits(cls, value: int) -> int:
        return validation.validate_positive_int(value, "Number of visits")

    @field_validator("website_duration")
    @classmethod
    def _check_duration(cls, value: int) -> int:
        return validation.validate_non_negative_int(value, "Website duration")

    @field_validator("owner_contact", "location", "page_visits")
    @classmethod
    def _blank_to_none(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        return value.strip()


class WebsiteVisitUpdate(_EventTiming):
    ip: str | None = None
    owner_contact: str | None = None
    number_of_visits: int | None = None
    page_visits: str | None = None
    website_duration: int | None = None
    location: str | None = None
    time: dt.time | None = None
    date: dt.date | None = None

    @field_validator("ip", mode="before")
    @classmethod
    def _check_ip(cls, value: Any) -> str | None:
        return _optional(validation.validate_ip, value)

    @field_validator("number_of_visits")
    @classmethod
    def _check_visits(cls, value: int | None) -> int | None:
        return _optional(validation.validate_positive_int, value, "Number of visits")

    @field_validator("website_duration")
    @classmethod
    def _check_duration(cls, value: int | None) -> int | None:
        return _optional(validation.validate_non_negative_int, value, "Website duration")


class WebsiteVisitRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    ip: str
    owner_contact: str | None
    number_of_visits: int
    page_visits: str | None
    website_duration: int
    location: str | None
    time: dt.time
    date: dt.date
    created_at: dt.datetime
    updated_at: dt.datetime


class StoreVisitCreate(_EventTiming):
    owner_contact: str
    number_of_visits: int = 1
    location: str
    time: dt.time
    date: dt.date

    @field_validator("owner_contact", mode="before")
    @classmethod
    def _check_owner(cls, value: Any) -> str:
        return validation.require_text(value, "Owner contact")

    @field_validator("location", mode="before")
    @classmethod
    def _check_location(cls, value: Any) -> str:
        return validation.require_text(value, "Location")

    @field_validator("number_of_visits")
    @classmethod
    def _check_visits(cls, value: int) -> int:
        return validation.validate_positive_int(value, "Number of visits")


class StoreVisitUpdate(_EventTiming):
    owner_contact: str | None = None
    number_of_visits: int | None = None
    location: str | None = None
    time: dt.time | None = None
    date: dt.date | None = None

    @field_validator("owner_contact", mode="before")
    @classmethod
    def _check_owner(cls, value: Any) -> str | None:
        return _optional(validation.require_text, value, "Owner contact")

    @field_validator("location", mode="before")
    @classmethod
    def _check_location(cls, value: Any) -> str | None:
        return _optional(validation.require_text, value, "Location")

    @field_validator("number_of_visits")
    @classmethod
    def _check_visits(cls, value: int | None) -> int | None:
        return _optional(validation.validate_positive_int, value, "Number of visits")


class StoreVisitRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    owner_contact: str
    number_of_visits: int
    location: str
    time: dt.time
    date: dt.date
    created_at: dt.datetime
    updated_at: dt.datetime


class LoginSignupCreate(_EventTiming):
    username: str
    email: EmailStr
    location: str
    time: dt.time
    date: dt.date

    @field_validator("username", mode="before")
    @classmethod
    def _check_username(cls, value: Any) -> str:
        return validation.require_text(value, "Username")

    @field_validator("location", mode="before")
    @classmethod
    def _check_location(cls, value: Any) -> str:
        return validation.require_text(value, "Location")


class LoginSignupUpdate(_EventTiming):
    username: str | None = None
    email: EmailStr | None = None
    location: str | None = None
    time: dt.time | None = None
    date: dt.date | None = None

    @field_validator("username", mode="before")
    @classmethod
    def _check_username(cls, value: Any) -> str | None:
        return _optional(validation.require_text, value, "Username")

    @field_validator("location", mode="before")
    @classmethod
    def _check_location(cls, value: Any) -> str | None:
        return _optional(validation.require_text, value, "Location")


class LoginSignupRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    location: str
    time: dt.time
    date: dt.date
    created_at: dt.datetime
    updated_at: dt.datetime


class ContactRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    contact_identifier: str
    first_website_visit: dt.datetime | None
    first_store_visit: dt.datetime | None
    signup_date: dt.datetime | None
    created_at: dt.datetime
    updated_at: dt.datetime
