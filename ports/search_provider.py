from __future__ import annotations

from typing import Any, Dict, Protocol


class SearchProviderPort(Protocol):
    def search(self, query: str, limit: int) -> Dict[str, Any]:
        """Return {"success": bool, "data": [{"url", "metadata": {"title"}, "content"}], "error": str | None}."""
        ...
