from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import requests

from config.settings import Settings, get_settings


logger = logging.getLogger(__name__)


class FetchFailure(Exception):
    """A target website could not be fetched (timeout, network error, non-2xx)."""


@dataclass
class FetchedPage:
    url: str
    status_code: int
    html: str


class PageFetcher:
    """GETs third-party business pages with a desktop browser User-Agent."""

    def __init__(self, settings: Optional[Settings] = None, session: Optional[requests.Session] = None) -> None:
        self.settings = settings or get_settings()
        self.session = session or requests.Session()

    def fetch(self, url: str, timeout: float) -> FetchedPage:
        headers = {"User-Agent": self.settings.user_agent}
        try:
            resp = self.session.get(url, headers=headers, timeout=timeout)
        except requests.exceptions.RequestException as e:
            raise FetchFailure(f"{url}: {e}") from e
        if not 200 <= resp.status_code < 300:
            raise FetchFailure(f"{url}: HTTP {resp.status_code}")
        return FetchedPage(url=url, status_code=resp.status_code, html=resp.text or "")
