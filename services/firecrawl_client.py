"""
Firecrawl search API integration used for primary business discovery.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from config.settings import Settings, get_settings


logger = logging.getLogger(__name__)


class FirecrawlError(Exception):
    """Transport or HTTP-level failure talking to the Firecrawl API."""


class FirecrawlClient:
    """Handles Firecrawl /v1/search calls and normalizes hits to {url, metadata.title, content}."""

    def __init__(self, settings: Optional[Settings] = None, session: Optional[requests.Session] = None):
        self.settings = settings or get_settings()
        self.api_key = self.settings.firecrawl_api_key
        self.session = session or requests.Session()

        if not self.api_key:
            raise ValueError("FIRECRAWL_API_KEY must be set to use Firecrawl search")

    @property
    def search_url(self) -> str:
        return self.settings.firecrawl_api_url.rstrip("/") + "/v1/search"

    def search(self, query: str, limit: int) -> Dict[str, Any]:
        payload = {
            "query": query,
            "limit": limit,
            "scrapeOptions": {"formats": ["markdown"], "onlyMainContent": True},
        }
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        logger.info("Firecrawl search: %s", query, extra={"step": "firecrawl_search", "provider": "firecrawl"})
        try:
            response = self.session.post(
                self.search_url,
                json=payload,
                headers=headers,
                timeout=self.settings.firecrawl_timeout_seconds,
            )
        except requests.exceptions.RequestException as e:
            raise FirecrawlError(f"Firecrawl request failed: {e}") from e

        if response.status_code != 200:
            return {
                "success": False,
                "data": [],
                "error": f"HTTP {response.status_code}: {response.text[:200]}",
            }
        try:
            body = response.json()
        except ValueError as e:
            raise FirecrawlError(f"Firecrawl returned invalid JSON: {e}") from e

        data = body.get("data")
        # Some API versions nest web hits under data.web
        if isinstance(data, dict):
            data = data.get("web")
        return {
            "success": bool(body.get("success")),
            "data": [self._normalize_hit(item) for item in data] if isinstance(data, list) else None,
            "error": body.get("error"),
        }

    @staticmethod
    def _normalize_hit(item: Dict[str, Any]) -> Dict[str, Any]:
        metadata = dict(item.get("metadata") or {})
        if not metadata.get("title") and item.get("title"):
            metadata["title"] = item.get("title")
        content = item.get("markdown") or item.get("content") or item.get("description") or ""
        return {
            "url": item.get("url") or metadata.get("sourceURL") or "",
            "metadata": metadata,
            "content": content,
        }

