from __future__ import annotations

import logging
from typing import List, Optional, Sequence

import requests
from bs4 import BeautifulSoup
from bs4.element import Tag

from config.settings import Settings
from models import Candidate
from services.domain_utils import unwrap_redirect_url
from sources.base import first_text
from sources.registry import register


logger = logging.getLogger(__name__)

DIRECTORY_HOST = "pagesjaunes.fr"

# Field selectors, tried in order until one yields text
PRIMARY_LISTING = ".bi-bloc"
PRIMARY_NAME = (".bi-denomination", ".bi-nom", "h3")
PRIMARY_PHONE = (".bi-phone", ".coord-numero")
PRIMARY_ADDRESS = (".bi-address", ".adresse")
PRIMARY_WEBSITE = (".bi-website a", 'a[data-pj-label="Site internet"]', ".teaser-footer a")

SECONDARY_LISTING = "article, .item-entreprise, .entreprise"
SECONDARY_NAME = "h2, h3, .denom"
SECONDARY_PHONE = ".tel, .phone"
SECONDARY_ADDRESS = ".adresse, .address"


def _select_text(block: Tag, selectors: Sequence[str]) -> Optional[str]:
    return first_text(
        el.get_text(" ") if el is not None else None
        for el in (block.select_one(sel) for sel in selectors)
    )


def _select_href(block: Tag, selectors: Sequence[str]) -> Optional[str]:
    for sel in selectors:
        el = block.select_one(sel)
        href = el.get("href") if el is not None else None
        if href:
            return str(href).strip()
    return None


def parse_primary_listings(soup: BeautifulSoup, max_listings: int) -> List[Candidate]:
    businesses: List[Candidate] = []
    for block in soup.select(PRIMARY_LISTING)[:max_listings]:
        name = _select_text(block, PRIMARY_NAME)
        if not name:
            continue
        website = unwrap_redirect_url(_select_href(block, PRIMARY_WEBSITE), DIRECTORY_HOST)
        businesses.append(
            Candidate(
                name=name,
                website=website,
                address=_select_text(block, PRIMARY_ADDRESS),
                phone=_select_text(block, PRIMARY_PHONE),
            )
        )
    return businesses


def parse_secondary_listings(soup: BeautifulSoup, max_listings: int) -> List[Candidate]:
    businesses: List[Candidate] = []
    for block in soup.select(SECONDARY_LISTING)[:max_listings]:
        name = _select_text(block, [SECONDARY_NAME])
        if not name:
            continue
        businesses.append(
            Candidate(
                name=name,
                website=None,
                address=_select_text(block, [SECONDARY_ADDRESS]),
                phone=_select_text(block, [SECONDARY_PHONE]),
            )
        )
    return businesses


def parse_listings(html: str, max_listings: int = 10) -> List[Candidate]:
    soup = BeautifulSoup(html or "", "html.parser")
    businesses = parse_primary_listings(soup, max_listings)
    if not businesses:
        logger.info(
            "No businesses found with primary selectors, trying alternatives",
            extra={"step": "pagesjaunes_directory"},
        )
        businesses = parse_secondary_listings(soup, max_listings)
    return businesses


class PagesJaunesDirectorySource:
    """Fallback discovery: scrape the public directory's search results page."""

    name = "pagesjaunes_directory"

    def __init__(self, settings: Settings, session: Optional[requests.Session] = None) -> None:
        self.settings = settings
        self.session = session or requests.Session()

    def attempt(self, area: str, sector: str):
        params = {"quoiqui": sector, "ou": area, "proximite": "0"}
        headers = {
            "User-Agent": self.settings.user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
            "Accept-Language": "fr-FR,fr;q=0.9,en-US;q=0.8,en;q=0.7",
        }
        logger.info("Scraping directory: %s in %s", sector, area, extra={"step": self.name})
        resp = self.session.get(
            self.settings.directory_search_url,
            params=params,
            headers=headers,
            timeout=self.settings.http_timeout_seconds,
        )
        if resp.status_code != 200:
            logger.error(
                "Directory HTTP error: %s", resp.status_code,
                extra={"step": self.name, "status": "http_error"},
            )
            return []
        businesses = parse_listings(resp.text, self.settings.directory_max_listings)
        logger.info(
            "Extracted %d businesses from directory", len(businesses),
            extra={"step": self.name, "status": "ok"},
        )
        return businesses


def _register():
    register(PagesJaunesDirectorySource.name, PagesJaunesDirectorySource)


_register()
