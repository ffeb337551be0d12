from __future__ import annotations

from pipelines.runner import RunContext
from sources.discovery import BusinessDiscovery


class DiscoverBusinesses:
    def __init__(self, discovery: BusinessDiscovery) -> None:
        self.discovery = discovery

    def run(self, ctx: RunContext) -> RunContext:
        ctx.candidates = self.discovery.discover(ctx.area, ctx.sector)
        ctx.meta["discovered"] = len(ctx.candidates)
        return ctx
