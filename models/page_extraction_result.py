from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PageExtractionResult(BaseModel):
    """LLM structured output: shape expected from the business page extraction prompt."""

    business_name: str | None = Field(default=None, alias="businessName")
    email: list[str] = Field(default_factory=list)
    phone: list[str] = Field(default_factory=list)
    address: str | None = None
    website: str | None = None
    is_relevant: bool = Field(default=False, alias="isRelevant")
    relevance_score: int = Field(default=0, alias="relevanceScore")
    extracted_info: str | None = Field(default=None, alias="extractedInfo")

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @field_validator("email", "phone", mode="before")
    @classmethod
    def _as_list(cls, value: Any) -> list[str]:
        # Models sometimes answer a single string (or null) instead of a list
        if value is None:
            return []
        if isinstance(value, (str, int)):
            value = [value]
        return [str(v).strip() for v in value if v is not None and str(v).strip()]

    @field_validator("business_name", "address", "website", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> str | None:
        if value is None:
            return None
        text = str(value).strip()
        return text or None
