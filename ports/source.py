from __future__ import annotations

from typing import Any, List, Protocol, Union

from models import Candidate


class DiscoveryStrategyPort(Protocol):
    name: str

    def attempt(self, area: str, sector: str) -> Union[List[Candidate], Any]:
        """Return candidates, or services.fallback_chain.UNAVAILABLE to hand over to the next strategy."""
        ...
