from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv


def _load_env() -> None:
    # Centralized dotenv loading; safe if .env missing
    load_dotenv()


def _as_bool(value: str | None) -> bool:
    return (value or "").strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    # Core/runtime
    db_path: str
    run_env: str
    log_level: str

    # Search provider (Firecrawl)
    firecrawl_api_key: str | None
    firecrawl_api_url: str
    firecrawl_timeout_seconds: int
    search_result_limit: int

    # Directory fallback
    directory_search_url: str
    directory_max_listings: int

    # Timeouts / limits
    http_timeout_seconds: int
    page_fetch_timeout_seconds: int
    harvest_fetch_timeout_seconds: int
    page_excerpt_chars: int
    relevance_threshold: int

    # AI (OpenRouter, OpenAI-compatible)
    openrouter_api_key: str | None
    openrouter_model: str
    openrouter_base_url: str
    openrouter_referer: str
    openrouter_title: str
    llm_timeout_seconds: int

    user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    )

    # Logging/tracing
    llm_trace: bool = False
    llm_log_path: str = "logs/llm_calls.jsonl"

    @property
    def ai_enabled(self) -> bool:
        return bool(self.openrouter_api_key)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    _load_env()
    return Settings(
        db_path=os.getenv("DB_PATH", "business_contacts.db"),
        run_env=os.getenv("RUN_ENV", "local"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        firecrawl_api_key=os.getenv("FIRECRAWL_API_KEY") or None,
        firecrawl_api_url=os.getenv("FIRECRAWL_API_URL", "https://api.firecrawl.dev"),
        firecrawl_timeout_seconds=int(os.getenv("FIRECRAWL_TIMEOUT_SECONDS", "30")),
        search_result_limit=int(os.getenv("SEARCH_RESULT_LIMIT", "10")),
        directory_search_url=os.getenv(
            "DIRECTORY_SEARCH_URL", "https://www.pagesjaunes.fr/annuaire/chercherlespros"
        ),
        directory_max_listings=int(os.getenv("DIRECTORY_MAX_LISTINGS", "10")),
        http_timeout_seconds=int(os.getenv("HTTP_TIMEOUT_SECONDS", "20")),
        page_fetch_timeout_seconds=int(os.getenv("PAGE_FETCH_TIMEOUT_SECONDS", "8")),
        harvest_fetch_timeout_seconds=int(os.getenv("HARVEST_FETCH_TIMEOUT_SECONDS", "5")),
        page_excerpt_chars=int(os.getenv("PAGE_EXCERPT_CHARS", "8000")),
        relevance_threshold=int(os.getenv("RELEVANCE_THRESHOLD", "40")),
        openrouter_api_key=os.getenv("OPENROUTER_API_KEY") or None,
        openrouter_model=os.getenv("OPENROUTER_MODEL", "google/gemini-2.0-flash-exp:free"),
        openrouter_base_url=os.getenv("OPENROUTER_BASE_URL", "https://openrouter.ai/api/v1"),
        openrouter_referer=os.getenv("OPENROUTER_REFERER", "http://localhost:3001"),
        openrouter_title=os.getenv("OPENROUTER_TITLE", "Local Business Scraper"),
        llm_timeout_seconds=int(os.getenv("LLM_TIMEOUT_SECONDS", "60")),
        llm_trace=_as_bool(os.getenv("LLM_TRACE", "false")),
        llm_log_path=os.getenv("LLM_LOG_PATH", "logs/llm_calls.jsonl"),
    )
