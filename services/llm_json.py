from __future__ import annotations

import json
import re
from typing import Any


_FENCE_RE = re.compile(r"```(?:json)?\s*\n?", re.IGNORECASE)


def strip_code_fences(text: str) -> str:
    """Remove markdown ``` / ```json fences models like to wrap JSON answers in."""
    return _FENCE_RE.sub("", text).strip()


def parse_json_reply(text: str | None) -> Any:
    """Parse a model reply as JSON after stripping fences.

    Raises ValueError (json.JSONDecodeError) on empty or malformed replies.
    """
    if not text or not text.strip():
        raise ValueError("empty model reply")
    return json.loads(strip_code_fences(text))
