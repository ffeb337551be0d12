from __future__ import annotations

import logging
from typing import List, Optional, Sequence

import requests

from config.settings import Settings, get_settings
from models import Candidate
from ports.source import DiscoveryStrategyPort
from services.fallback_chain import UNAVAILABLE, first_available
from sources.registry import get_source


logger = logging.getLogger(__name__)

DEFAULT_STRATEGY_ORDER = ("firecrawl_search", "pagesjaunes_directory")


class BusinessDiscovery:
    """Find raw candidates for (area, sector): primary search, else directory scrape.

    Result sets are never mixed and nothing is raised; total failure is an empty list.
    """

    def __init__(self, strategies: Sequence[DiscoveryStrategyPort]) -> None:
        self.strategies = list(strategies)

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        session: Optional[requests.Session] = None,
        order: Sequence[str] = DEFAULT_STRATEGY_ORDER,
    ) -> "BusinessDiscovery":
        settings = settings or get_settings()
        return cls([get_source(name, settings, session=session) for name in order])

    def discover(self, area: str, sector: str) -> List[Candidate]:
        used, businesses = first_available(self.strategies, area, sector, absorb_errors=True)
        if businesses is UNAVAILABLE:
            logger.warning("All discovery strategies unavailable", extra={"step": "discover", "status": "empty"})
            return []
        logger.info(
            "Discovered %d candidates via %s", len(businesses), used,
            extra={"step": "discover", "status": "ok", "provider": used},
        )
        return list(businesses)
