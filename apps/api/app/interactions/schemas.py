from __future__ import annotations

import datetime as dt
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.tracking.validation import INTEGER_MAX, parse_time_of_day


class InteractionTiming(BaseModel):
    time: dt.time | None = None
    date: dt.date | None = None
    email_ids: str | None = None
    summary: str | None = None
    sentiment: str | None = None

    @field_validator("time", mode="before")
    @classmethod
    def _check_time(cls, value: Any) -> Any:
        if value is None or isinstance(value, dt.time):
            return value
        return parse_time_of_day(value)


class CallInteractionFields(InteractionTiming):
    call_duration: int | None = Field(default=None, ge=0, le=INTEGER_MAX)
    voice_recordings: str | None = None
    transcripts: str | None = None
    action_items: str | None = None
    purchase_intent_score: float | None = Field(default=None, ge=0, le=100)
    sales_highlights: str | None = None


class CallInteractionCreate(CallInteractionFields):
    name: str = Field(min_length=1)


class CallInteractionUpdate(CallInteractionFields):
    name: str | None = Field(default=None, min_length=1)


class CallInteractionRead(CallInteractionFields):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    created_at: dt.datetime
    updated_at: dt.datetime


class ChatInteractionFields(InteractionTiming):
    chat_duration: int | None = Field(default=None, ge=0, le=INTEGER_MAX)
    conversation: str | None = None
    action_items: str | None = None
    purchase_intent_score: float | None = Field(default=None, ge=0, le=100)


class ChatInteractionCreate(ChatInteractionFields):
    name: str = Field(min_length=1)


class ChatInteractionUpdate(ChatInteractionFields):
    name: str | None = Field(default=None, min_length=1)


class ChatInteractionRead(ChatInteractionFields):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    created_at: dt.datetime
    updated_at: dt.datetime


class EmailInteractionFields(InteractionTiming):
    email_domain: str | None = None
    message: str | None = None
    attachments: str | None = None
    thread: str | None = None
    sender_id: str | None = None
    receiver_id: str | None = None
    cc_id: str | None = None


class EmailInteractionCreate(EmailInteractionFields):
    subject: str = Field(min_length=1)


class EmailInteractionUpdate(EmailInteractionFields):
    subject: str | None = Field(default=None, min_length=1)


class EmailInteractionRead(EmailInteractionFields):
    model_config = ConfigDict(from_attributes=True)

    id: int
    subject: str
    created_at: dt.datetime
    updated_at: dt.datetime
