from __future__ import annotations

from collections import Counter
from typing import List

from models import ContactResult, Search


def print_summary(search: Search, results: List[ContactResult]) -> None:
    """Print summary of one search run."""
    origins = Counter(r.email_origin for r in results)
    businesses = {r.business_name for r in results}

    print("\n" + "=" * 60)
    print("LOCAL BUSINESS CONTACTS - SUMMARY")
    print("=" * 60)
    print(f"Search Id: {search.id}")
    print(f"Sector: {search.sector}")
    print(f"Area: {search.area}")
    print(f"Status: {search.status}")
    if search.error_message:
        print(f"Error: {search.error_message}")
    print(f"Total Results: {search.total_results}")
    print(f"Businesses: {len(businesses)}")
    print()
    print("Email Origins:")
    print(f"  AI extraction: {origins.get('ai', 0)}")
    print(f"  Page harvest: {origins.get('regex', 0)}")
    print(f"  Placeholder (unverified): {origins.get('placeholder', 0)}")
    print("=" * 60)
