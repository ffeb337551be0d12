from __future__ import annotations

from typing import Iterable, Optional


class DiscoveryUnavailable(Exception):
    """The search provider failed or returned no usable data; discovery falls back."""


def clean_text(value: Optional[str]) -> Optional[str]:
    """Collapse whitespace; empty strings become None."""
    if value is None:
        return None
    text = " ".join(str(value).split())
    return text or None


def first_text(values: Iterable[Optional[str]]) -> Optional[str]:
    for value in values:
        text = clean_text(value)
        if text:
            return text
    return None
