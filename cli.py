import argparse
import json
import time
from functools import partial

from config.settings import get_settings
from db import schema
from db.connection import get_connection
from db.store import SqliteSearchStore
from pipelines.search_pipeline import build_search_pipeline, run_search_in_db
from pipelines.worker import SearchWorker
from services.reporting import print_summary
from utils.logging_setup import init_logging


def _open_store(db_path: str) -> SqliteSearchStore:
    conn = get_connection(db_path)
    schema.bootstrap(conn)
    return SqliteSearchStore(conn)


def cmd_bootstrap(args):
    conn = get_connection(args.db)
    schema.bootstrap(conn)
    conn.close()
    print("Schema ready")


def cmd_search(args):
    settings = get_settings()
    store = _open_store(args.db)
    search = store.create_search(args.area, args.sector)
    print(f"Search {search.id} created: {search.sector} in {search.area}")

    if args.background:
        worker = SearchWorker(partial(run_search_in_db, conn_factory=partial(get_connection, args.db), settings=settings))
        worker.submit(search)
        # Poll persisted state like any other caller would
        current = store.get_search(search.id)
        while current is not None and not current.is_terminal:
            time.sleep(args.poll_interval)
            current = store.get_search(search.id)
            print(f"[search {search.id}] status={current.status if current else 'missing'}")
        worker.shutdown(wait=True)
    else:
        def _progress(cur, total, name):
            print(f"[{cur}/{total}] Extracting contacts for {name}")

        pipeline = build_search_pipeline(store, settings, on_progress=_progress if args.progress else None)
        pipeline.run(search)

    final = store.get_search(search.id)
    print_summary(final, store.list_contact_results(search.id))


def cmd_status(args):
    store = _open_store(args.db)
    search = store.get_search(args.search_id)
    if search is None:
        print("No search found")
        return
    print(json.dumps(search.model_dump(), indent=2, ensure_ascii=False))


def cmd_results(args):
    store = _open_store(args.db)
    results = store.list_contact_results(args.search_id)
    print(json.dumps([r.model_dump() for r in results], indent=2, ensure_ascii=False))


def cmd_history(args):
    store = _open_store(args.db)
    out = [s.model_dump() for s in store.list_searches(args.limit)]
    print(json.dumps(out, indent=2, ensure_ascii=False))


def main():
    settings = get_settings()
    init_logging(settings.log_level)
    parser = argparse.ArgumentParser(description="Local business contact finder")
    parser.add_argument("--db", default=settings.db_path, help="Path to SQLite DB (default from settings)")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_boot = sub.add_parser("bootstrap", help="Create tables and indexes")
    p_boot.set_defaults(func=cmd_bootstrap)

    p_search = sub.add_parser("search", help="Find businesses for a sector in an area and harvest their emails")
    p_search.add_argument("--area", "-a", required=True, help="Department, city or region (free text)")
    p_search.add_argument("--sector", "-s", required=True, help="Business activity (free text)")
    p_search.add_argument("--background", action="store_true", help="Run on the background worker and poll status")
    p_search.add_argument("--poll-interval", type=float, default=2.0, help="Seconds between status polls (default: 2)")
    p_search.add_argument("--progress", action="store_true", help="Print progress for each business")
    p_search.set_defaults(func=cmd_search)

    p_status = sub.add_parser("status", help="Show a search and its status")
    p_status.add_argument("--search-id", type=int, required=True)
    p_status.set_defaults(func=cmd_status)

    p_results = sub.add_parser("results", help="List contact results of a search as JSON")
    p_results.add_argument("--search-id", type=int, required=True)
    p_results.set_defaults(func=cmd_results)

    p_hist = sub.add_parser("history", help="List recent searches")
    p_hist.add_argument("--limit", type=int, default=20)
    p_hist.set_defaults(func=cmd_history)

    args = parser.parse_args()
    args.func(args)


if __name__ == "__main__":
    main()
