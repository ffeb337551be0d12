from __future__ import annotations

from typing import Optional
from urllib.parse import parse_qs, urlparse


def ensure_scheme(url: str, default_scheme: str = "https") -> str:
    """Prefix a bare host/path with a scheme; URLs that already carry http(s) are left alone."""
    text = (url or "").strip()
    if text.lower().startswith(("http://", "https://")):
        return text
    return f"{default_scheme}://{text}"


def hostname_of(url: Optional[str]) -> Optional[str]:
    if not url:
        return None
    try:
        host = urlparse(ensure_scheme(url)).hostname
    except ValueError:
        return None
    return host or None


def unwrap_redirect_url(url: Optional[str], wrapper_host: str) -> Optional[str]:
    """Return the target of a directory click-through link (``...?url=<encoded>``).

    Links that do not go through ``wrapper_host`` or carry no ``url`` parameter
    are returned unchanged.
    """
    if not url or wrapper_host not in url:
        return url
    try:
        values = parse_qs(urlparse(url).query).get("url")
    except ValueError:
        return url
    if values and values[0]:
        return values[0]
    return url
