from __future__ import annotations

import logging
import sqlite3
from typing import Callable, List, Optional

import requests

from config.settings import Settings, get_settings
from db.store import SqliteSearchStore
from models import Search
from pipelines.runner import Pipeline, RunContext, Step
from pipelines.steps import (
    ApplyRelevanceThreshold,
    DiscoverBusinesses,
    ExtractAndPersistContacts,
    ScoreCandidates,
)
from ports.llm import LLMClientPort
from ports.repos import SearchStorePort
from services.contact_extractor import ContactExtractor
from services.llm_client import LLMClient
from services.page_fetcher import PageFetcher
from services.relevance_filter import RelevanceFilter
from sources.discovery import BusinessDiscovery


logger = logging.getLogger(__name__)


class SearchPipeline:
    """Drives discovery -> scoring -> threshold -> extraction for one search and owns its status.

    pending -> processing -> completed | failed. A search that is no longer
    pending is never run again.
    """

    def __init__(self, store: SearchStorePort, steps: List[Step]) -> None:
        self.store = store
        self.steps = steps

    def run(self, search: Search) -> str:
        current = self.store.get_search(search.id)
        if current is None:
            raise KeyError(f"Unknown search: {search.id}")
        if current.status != "pending":
            logger.warning(
                "Search %s is %s, refusing to start", search.id, current.status,
                extra={"step": "search_pipeline", "status": current.status, "search_id": search.id},
            )
            return current.status

        try:
            self.store.update_search(search.id, status="processing")
            ctx = RunContext(search_id=search.id, area=search.area, sector=search.sector)
            ctx = Pipeline(self.steps).run(ctx)
            success_count = int(ctx.meta.get("success_count") or 0)
            self.store.update_search(search.id, status="completed", total_results=success_count)
        except Exception as e:
            logger.error(
                "Scraping failed", exc_info=True,
                extra={"step": "search_pipeline", "status": "failed", "error": str(e), "search_id": search.id},
            )
            self.store.update_search(search.id, status="failed", error_message=str(e) or e.__class__.__name__)
            return "failed"

        logger.info(
            "Scraping completed: %d emails", success_count,
            extra={"step": "search_pipeline", "status": "completed", "search_id": search.id},
        )
        return "completed"


def build_search_pipeline(
    store: SearchStorePort,
    settings: Optional[Settings] = None,
    *,
    session: Optional[requests.Session] = None,
    llm: Optional[LLMClientPort] = None,
    discovery: Optional[BusinessDiscovery] = None,
    on_progress: Optional[Callable[[int, int, str], None]] = None,
) -> SearchPipeline:
    """Wire collaborators for one pipeline; nothing is shared process-wide."""
    settings = settings or get_settings()
    session = session or requests.Session()
    if llm is None and settings.ai_enabled:
        llm = LLMClient(settings)
    discovery = discovery or BusinessDiscovery.from_settings(settings, session=session)
    extractor = ContactExtractor(PageFetcher(settings, session=session), llm=llm, settings=settings)
    steps: List[Step] = [
        DiscoverBusinesses(discovery),
        ScoreCandidates(RelevanceFilter(llm)),
        ApplyRelevanceThreshold(settings.relevance_threshold),
        ExtractAndPersistContacts(extractor, store, on_progress=on_progress),
    ]
    return SearchPipeline(store, steps)


def run_search_in_db(search: Search, conn_factory: Callable[[], sqlite3.Connection], settings: Optional[Settings] = None) -> str:
    """Run one search on a connection opened (and closed) by the calling thread."""
    conn = conn_factory()
    try:
        return build_search_pipeline(SqliteSearchStore(conn), settings).run(search)
    finally:
        conn.close()
