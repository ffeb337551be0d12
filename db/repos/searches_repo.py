from __future__ import annotations

import sqlite3
from typing import Any, List, Optional

from models import Search


_COLUMNS = "id, area, sector, status, total_results, error_message, created_at, updated_at"


def _row_to_search(row) -> Search:
    keys = [c.strip() for c in _COLUMNS.split(",")]
    return Search(**dict(zip(keys, row)))


class SearchesRepo:
    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def create(self, area: str, sector: str) -> Search:
        cur = self.conn.cursor()
        cur.execute("INSERT INTO searches (area, sector) VALUES (?, ?)", (area, sector))
        self.conn.commit()
        search = self.get(int(cur.lastrowid))
        if search is None:
            raise RuntimeError("Failed to create search")
        return search

    def get(self, search_id: int) -> Optional[Search]:
        cur = self.conn.cursor()
        cur.execute(f"SELECT {_COLUMNS} FROM searches WHERE id = ?", (search_id,))
        row = cur.fetchone()
        return _row_to_search(row) if row else None

    def update(
        self,
        search_id: int,
        *,
        status: Optional[str] = None,
        total_results: Optional[int] = None,
        error_message: Optional[str] = None,
    ) -> None:
        """Update only the provided fields; updated_at is always refreshed."""
        columns = []
        values: List[Any] = []
        for key, value in (("status", status), ("total_results", total_results), ("error_message", error_message)):
            if value is not None:
                columns.append(f"{key} = ?")
                values.append(value)
        columns.append("updated_at = datetime('now')")
        values.append(search_id)
        self.conn.execute(f"UPDATE searches SET {', '.join(columns)} WHERE id = ?;", tuple(values))
        self.conn.commit()

    def list_recent(self, limit: int = 20) -> List[Search]:
        cur = self.conn.cursor()
        cur.execute(f"SELECT {_COLUMNS} FROM searches ORDER BY id DESC LIMIT ?", (limit,))
        return [_row_to_search(r) for r in cur.fetchall()]
