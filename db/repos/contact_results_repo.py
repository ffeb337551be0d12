from __future__ import annotations

import sqlite3
from typing import List

from models import ContactResult


_FIELDS = [
    "business_name",
    "website",
    "email",
    "phone",
    "address",
    "city",
    "email_source",
    "email_origin",
]


class ContactResultsRepo:
    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def add(self, search_id: int, result: ContactResult) -> int:
        """Insert one contact row for a search and commit; returns the row id."""
        values = [getattr(result, f) for f in _FIELDS]
        placeholders = ", ".join(["?"] * (len(_FIELDS) + 1))
        cur = self.conn.cursor()
        cur.execute(
            f"INSERT INTO contact_results (search_id, {', '.join(_FIELDS)}) VALUES ({placeholders})",
            (search_id, *values),
        )
        self.conn.commit()
        return int(cur.lastrowid)

    def list_for_search(self, search_id: int) -> List[ContactResult]:
        cur = self.conn.cursor()
        cur.execute(
            f"SELECT {', '.join(_FIELDS)} FROM contact_results WHERE search_id = ? ORDER BY id",
            (search_id,),
        )
        return [ContactResult(**dict(zip(_FIELDS, row))) for row in cur.fetchall()]
