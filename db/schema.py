from __future__ import annotations

import sqlite3


def bootstrap(conn: sqlite3.Connection) -> None:
    """Create searches/contact_results tables and indexes (idempotent)."""
    cur = conn.cursor()

    cur.execute(
        (
            "CREATE TABLE IF NOT EXISTS searches (\n"
            "  id INTEGER PRIMARY KEY AUTOINCREMENT,\n"
            "  area TEXT NOT NULL,\n"
            "  sector TEXT NOT NULL,\n"
            "  status TEXT NOT NULL DEFAULT 'pending'\n"
            "    CHECK (status IN ('pending', 'processing', 'completed', 'failed')),\n"
            "  total_results INTEGER NOT NULL DEFAULT 0,\n"
            "  error_message TEXT,\n"
            "  created_at TEXT NOT NULL DEFAULT (datetime('now')),\n"
            "  updated_at TEXT NOT NULL DEFAULT (datetime('now'))\n"
            ")"
        )
    )
    cur.execute("CREATE INDEX IF NOT EXISTS idx_searches_status ON searches(status);")

    cur.execute(
        (
            "CREATE TABLE IF NOT EXISTS contact_results (\n"
            "  id INTEGER PRIMARY KEY AUTOINCREMENT,\n"
            "  search_id INTEGER NOT NULL,\n"
            "  business_name TEXT NOT NULL,\n"
            "  website TEXT,\n"
            "  email TEXT NOT NULL CHECK (email <> ''),\n"
            "  phone TEXT,\n"
            "  address TEXT,\n"
            "  city TEXT,\n"
            "  email_source TEXT,\n"
            "  email_origin TEXT NOT NULL DEFAULT 'regex',\n"
            "  created_at TEXT NOT NULL DEFAULT (datetime('now')),\n"
            "  FOREIGN KEY(search_id) REFERENCES searches(id) ON DELETE CASCADE\n"
            ")"
        )
    )
    # Backfill provenance column if table existed before
    try:
        cur.execute("ALTER TABLE contact_results ADD COLUMN email_origin TEXT NOT NULL DEFAULT 'regex';")
    except sqlite3.OperationalError:
        pass
    cur.execute("CREATE INDEX IF NOT EXISTS idx_contact_results_search_id ON contact_results(search_id);")

    conn.commit()
