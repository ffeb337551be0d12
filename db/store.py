from __future__ import annotations

import sqlite3
from typing import List, Optional

from db.repos.contact_results_repo import ContactResultsRepo
from db.repos.searches_repo import SearchesRepo
from models import ContactResult, Search


class SqliteSearchStore:
    """SearchStorePort over the SQLite repos; one instance per connection (and thread)."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn
        self.searches = SearchesRepo(conn)
        self.results = ContactResultsRepo(conn)

    def create_search(self, area: str, sector: str) -> Search:
        return self.searches.create(area, sector)

    def get_search(self, search_id: int) -> Optional[Search]:
        return self.searches.get(search_id)

    def update_search(
        self,
        search_id: int,
        *,
        status: Optional[str] = None,
        total_results: Optional[int] = None,
        error_message: Optional[str] = None,
    ) -> None:
        self.searches.update(search_id, status=status, total_results=total_results, error_message=error_message)

    def add_contact_result(self, search_id: int, result: ContactResult) -> int:
        return self.results.add(search_id, result)

    def list_contact_results(self, search_id: int) -> List[ContactResult]:
        return self.results.list_for_search(search_id)

    def list_searches(self, limit: int = 20) -> List[Search]:
        return self.searches.list_recent(limit)
