from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict


SearchStatus = Literal["pending", "processing", "completed", "failed"]

TERMINAL_STATUSES: frozenset[str] = frozenset({"completed", "failed"})


class Search(BaseModel):
    """One user request for (area, sector); its status is the only progress surface."""

    id: int
    area: str
    sector: str
    status: SearchStatus = "pending"
    total_results: int = 0
    error_message: str | None = None
    created_at: str | None = None
    updated_at: str | None = None

    model_config = ConfigDict(extra="ignore")

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES
