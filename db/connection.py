from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Optional

from config.settings import get_settings


def get_connection(db_path: Optional[str] = None, timeout: float = 30.0) -> sqlite3.Connection:
    """Open the contacts database; each thread running a search opens its own.

    WAL lets status pollers read while a background run appends results;
    foreign keys make contact rows depend on their search.
    """
    path = db_path or get_settings().db_path
    if path != ":memory:":
        Path(path).parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(path, timeout=timeout)
    conn.execute("PRAGMA journal_mode=WAL;")
    conn.execute("PRAGMA synchronous=NORMAL;")
    conn.execute("PRAGMA foreign_keys=ON;")
    conn.execute(f"PRAGMA busy_timeout={int(timeout * 1000)};")
    return conn
