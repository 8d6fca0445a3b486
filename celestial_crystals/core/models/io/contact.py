"""Contact form I/O models."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class ContactRequest(BaseModel):
    name: str = Field(default="", max_length=100)
    email: str = Field(default="", max_length=320)
    subject: str = Field(default="", max_length=200)
    message: str = Field(default="", max_length=5000)


class ContactResponse(BaseModel):
    success: bool
    message: str
    received_at: datetime
