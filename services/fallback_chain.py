from __future__ import annotations

import logging
from typing import Any, Iterable, Protocol, Tuple


logger = logging.getLogger(__name__)


class _Unavailable:
    """Sentinel returned by a strategy that cannot produce a result for this input."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNAVAILABLE"

    def __bool__(self) -> bool:
        return False


UNAVAILABLE = _Unavailable()


class Strategy(Protocol):
    name: str

    def attempt(self, *args: Any, **kwargs: Any) -> Any:
        ...


def first_available(
    strategies: Iterable[Strategy],
    *args: Any,
    absorb_errors: bool = False,
    **kwargs: Any,
) -> Tuple[str | None, Any]:
    """Try strategies in order and return (strategy_name, result) for the first usable result.

    A strategy is skipped when it returns UNAVAILABLE, or when it raises and
    absorb_errors is set. Returns (None, UNAVAILABLE) when every strategy was skipped.
    """
    for strategy in strategies:
        name = getattr(strategy, "name", strategy.__class__.__name__)
        try:
            result = strategy.attempt(*args, **kwargs)
        except Exception as e:
            if not absorb_errors:
                raise
            logger.warning(
                "Strategy %s failed, trying next", name,
                extra={"step": name, "status": "error", "error": str(e)},
                exc_info=True,
            )
            continue
        if result is UNAVAILABLE:
            logger.info("Strategy %s unavailable", name, extra={"step": name, "status": "unavailable"})
            continue
        return name, result
    return None, UNAVAILABLE
