from __future__ import annotations

from typing import List, Optional, Protocol

from models import ContactResult, Search


class SearchStorePort(Protocol):
    """Persistence collaborator for searches and their contact rows."""

    def create_search(self, area: str, sector: str) -> Search:
        ...

    def get_search(self, search_id: int) -> Optional[Search]:
        ...

    def update_search(
        self,
        search_id: int,
        *,
        status: Optional[str] = None,
        total_results: Optional[int] = None,
        error_message: Optional[str] = None,
    ) -> None:
        ...

    def add_contact_result(self, search_id: int, result: ContactResult) -> int:
        ...

    def list_contact_results(self, search_id: int) -> List[ContactResult]:
        ...
