from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Optional

import requests

from config.settings import Settings
from models import Candidate
from ports.search_provider import SearchProviderPort
from services.domain_utils import ensure_scheme
from services.fallback_chain import UNAVAILABLE
from services.firecrawl_client import FirecrawlClient
from sources.base import DiscoveryUnavailable, clean_text
from sources.registry import register


logger = logging.getLogger(__name__)

DEFAULT_BUSINESS_NAME = "Business"

# Directory/map site suffixes appended to page titles
_TITLE_NOISE = [
    re.compile(r"\s*-\s*Pages Jaunes", re.IGNORECASE),
    re.compile(r"\s*-\s*Yelp", re.IGNORECASE),
    re.compile(r"\s*\|\s*Google Maps", re.IGNORECASE),
    re.compile(r"https?://[^/]+/?", re.IGNORECASE),
]

_WEBSITE_PATTERNS = [
    re.compile(r"site web[:\s]*([^\s<>\"'()\[\]]+\.[a-z]{2,})", re.IGNORECASE),
    re.compile(r"website[:\s]*([^\s<>\"'()\[\]]+\.[a-z]{2,})", re.IGNORECASE),
    re.compile(r"\b(www\.[^\s<>\"'()\[\]]+\.[a-z]{2,})", re.IGNORECASE),
]

_ADDRESS_PATTERNS = [
    re.compile(r"\d+[,\s]+(?:rue|avenue|boulevard|place|impasse|chemin)\b[^,\n]{1,100}", re.IGNORECASE),
    re.compile(r"(?:adresse|address)\s*:?\s*([^,\n]{10,100})", re.IGNORECASE),
]

_PHONE_PATTERNS = [
    re.compile(r"(?:tel|téléphone|phone)[:\s]*([0-9\s.\-+]{10,})", re.IGNORECASE),
    re.compile(r"(?:^|\s)((?:\+33|0)[1-9](?:[0-9\s.\-]{8,}[0-9]))", re.IGNORECASE),
]


def extract_business_name(title_or_url: Optional[str]) -> str:
    """Derive a business name from a result title, stripping directory-site suffixes."""
    if not title_or_url:
        return ""
    name = title_or_url
    for pattern in _TITLE_NOISE:
        name = pattern.sub("", name)
    return name.strip() or DEFAULT_BUSINESS_NAME


def extract_website_from_content(content: str) -> Optional[str]:
    for pattern in _WEBSITE_PATTERNS:
        m = pattern.search(content or "")
        if m:
            url = m.group(1).rstrip(".,;:")
            return url if url.lower().startswith("http") else ensure_scheme(url)
    return None


def extract_address_from_content(content: str) -> Optional[str]:
    for pattern in _ADDRESS_PATTERNS:
        m = pattern.search(content or "")
        if m:
            return clean_text(m.group(1) if pattern.groups else m.group(0))
    return None


def extract_phone_from_content(content: str) -> Optional[str]:
    for pattern in _PHONE_PATTERNS:
        m = pattern.search(content or "")
        if m:
            phone = re.sub(r"\s", "", m.group(1).strip())
            if phone:
                return phone
    return None


def candidate_from_hit(hit: Dict[str, Any]) -> Optional[Candidate]:
    url = hit.get("url") or ""
    content = hit.get("content") or ""
    title = (hit.get("metadata") or {}).get("title")
    name = extract_business_name(title or url)
    website = extract_website_from_content(content) or url
    if not (name and website):
        return None
    return Candidate(
        name=name,
        website=website,
        address=extract_address_from_content(content),
        phone=extract_phone_from_content(content),
    )


class FirecrawlSearchSource:
    """Primary discovery: one free-text web search, hits parsed into candidates."""

    name = "firecrawl_search"

    def __init__(
        self,
        settings: Settings,
        session: Optional[requests.Session] = None,
        provider: Optional[SearchProviderPort] = None,
    ) -> None:
        self.settings = settings
        self.limit = settings.search_result_limit
        if provider is None and settings.firecrawl_api_key:
            provider = FirecrawlClient(settings, session=session)
        self.provider = provider

    @staticmethod
    def build_query(area: str, sector: str) -> str:
        return f"{sector} {area} France"

    def attempt(self, area: str, sector: str):
        if self.provider is None:
            logger.info("No search provider configured", extra={"step": self.name, "status": "unavailable"})
            return UNAVAILABLE
        query = self.build_query(area, sector)
        response = self.provider.search(query, self.limit)
        if not response.get("success") or response.get("data") is None:
            raise DiscoveryUnavailable(f"search failed: {response.get('error') or 'no data'}")

        businesses: List[Candidate] = []
        for hit in response["data"]:
            try:
                candidate = candidate_from_hit(hit)
            except Exception as e:
                logger.warning(
                    "Error processing search result", extra={"step": self.name, "error": str(e)}, exc_info=True
                )
                continue
            if candidate is not None:
                businesses.append(candidate)
        logger.info("Found %d businesses via search", len(businesses), extra={"step": self.name, "status": "ok"})
        return businesses


def _register():
    register(FirecrawlSearchSource.name, FirecrawlSearchSource)


_register()
