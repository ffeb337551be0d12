from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest


def pytest_configure():
    # Ensure project root is on sys.path for absolute imports like 'services.contact_extractor'
    root = Path(__file__).resolve().parents[1]
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))
    # Set test environment knobs
    os.environ.setdefault("RUN_ENV", "test")


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    """No real provider keys and a fresh settings cache for every test."""
    from config.settings import get_settings

    for key in ("OPENROUTER_API_KEY", "FIRECRAWL_API_KEY", "LLM_TRACE"):
        monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings():
    from config.settings import get_settings

    return get_settings()


class FakeResponse:
    def __init__(self, status_code: int = 200, text: str = "", json_body: Any = None):
        self.status_code = status_code
        self.text = text
        self._json = json_body

    def json(self):
        if self._json is None:
            raise ValueError("no json")
        return self._json


class FakeSession:
    """requests.Session stand-in: url -> FakeResponse or exception to raise."""

    def __init__(self, routes: Optional[Dict[str, Any]] = None):
        self.routes = dict(routes or {})
        self.calls: List[Dict[str, Any]] = []

    def get(self, url, **kwargs):
        self.calls.append({"url": url, **kwargs})
        outcome = self.routes.get(url)
        if outcome is None:
            import requests

            raise requests.exceptions.ConnectionError(f"no route for {url}")
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def post(self, url, **kwargs):
        return self.get(url, **kwargs)


class FakeLLM:
    """LLMClientPort stand-in answering per use case (str reply, None, or exception)."""

    def __init__(self, replies: Optional[Dict[str, Any]] = None):
        self.replies = dict(replies or {})
        self.prompts: List[Dict[str, str]] = []

    def chat(self, **kwargs):
        raise NotImplementedError

    def complete(self, *, use_case: str, prompt: str, prompt_name: Optional[str] = None):
        self.prompts.append({"use_case": use_case, "prompt": prompt})
        reply = self.replies.get(use_case)
        if isinstance(reply, Exception):
            raise reply
        return reply


class InMemoryStore:
    """SearchStorePort stand-in; add_error makes add_contact_result raise."""

    def __init__(self, add_error: Optional[Exception] = None):
        from models import Search

        self._search_cls = Search
        self.searches: Dict[int, Any] = {}
        self.results: Dict[int, list] = {}
        self.add_error = add_error
        self.status_history: List[str] = []

    def create_search(self, area, sector):
        search = self._search_cls(id=len(self.searches) + 1, area=area, sector=sector)
        self.searches[search.id] = search
        self.results[search.id] = []
        return search

    def get_search(self, search_id):
        return self.searches.get(search_id)

    def update_search(self, search_id, *, status=None, total_results=None, error_message=None):
        changes = {
            k: v
            for k, v in (("status", status), ("total_results", total_results), ("error_message", error_message))
            if v is not None
        }
        if status:
            self.status_history.append(status)
        self.searches[search_id] = self.searches[search_id].model_copy(update=changes)

    def add_contact_result(self, search_id, result):
        if self.add_error is not None:
            raise self.add_error
        self.results[search_id].append(result)
        return len(self.results[search_id])

    def list_contact_results(self, search_id):
        return list(self.results.get(search_id, []))


@pytest.fixture
def store():
    return InMemoryStore()
