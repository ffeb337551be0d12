from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, field_validator


# Which extraction stage produced the email; "placeholder" rows are synthesized, not discovered
EmailOrigin = Literal["ai", "regex", "placeholder"]


class ContactResult(BaseModel):
    """App/DB record shape: one (business, email) pair belonging to a search."""

    business_name: str
    email: str
    website: str | None = None
    phone: str | None = None
    address: str | None = None
    city: str | None = None
    email_source: str | None = None
    email_origin: EmailOrigin = "regex"

    model_config = ConfigDict(extra="ignore")

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, value: str) -> str:
        email = value.strip().lower()
        if not email:
            raise ValueError("email must not be empty")
        return email
