from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


class Candidate(BaseModel):
    """Unverified business lead produced by discovery."""

    name: str
    website: str | None = None
    address: str | None = None
    phone: str | None = None

    model_config = ConfigDict(extra="ignore")

    @field_validator("website", "address", "phone", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> str | None:
        return _optional_text(value)


class ScoredCandidate(Candidate):
    """Candidate annotated with an AI- or default-assigned relevance score (0-100)."""

    relevance_score: int = Field(alias="relevanceScore")

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @field_validator("relevance_score", mode="before")
    @classmethod
    def _clamp_score(cls, value: Any) -> int:
        if isinstance(value, bool) or not isinstance(value, (int, float, str)):
            raise ValueError(f"relevance score must be a number, got {type(value).__name__}")
        number = float(value)
        if not math.isfinite(number):
            raise ValueError(f"relevance score is not finite: {value!r}")
        score = int(round(number))
        return max(0, min(100, score))

    @classmethod
    def from_candidate(cls, candidate: Candidate, score: int) -> "ScoredCandidate":
        return cls(relevance_score=score, **candidate.model_dump())
