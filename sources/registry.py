from __future__ import annotations

from typing import Any, Dict


_REGISTRY: Dict[str, Any] = {}


def register(name: str, factory) -> None:
    _REGISTRY[name] = factory


def get_source(name: str, *args: Any, **kwargs: Any):
    if name not in _REGISTRY:
        raise KeyError(f"Unknown source: {name}")
    return _REGISTRY[name](*args, **kwargs)
