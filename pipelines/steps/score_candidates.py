from __future__ import annotations

import logging

from pipelines.runner import RunContext
from services.relevance_filter import RelevanceFilter


logger = logging.getLogger(__name__)

DEFAULT_RELEVANCE_THRESHOLD = 40


class ScoreCandidates:
    def __init__(self, relevance_filter: RelevanceFilter) -> None:
        self.relevance_filter = relevance_filter

    def run(self, ctx: RunContext) -> RunContext:
        logger.info(
            "Analyzing %d raw results", len(ctx.candidates),
            extra={"step": "score_candidates", "search_id": ctx.search_id},
        )
        ctx.scored = self.relevance_filter.filter(ctx.candidates, ctx.sector, ctx.area)
        return ctx


class ApplyRelevanceThreshold:
    """Keep candidates scoring at or above the threshold (closed bound)."""

    def __init__(self, threshold: int = DEFAULT_RELEVANCE_THRESHOLD) -> None:
        self.threshold = threshold

    def run(self, ctx: RunContext) -> RunContext:
        kept = [c for c in ctx.scored if c.relevance_score >= self.threshold]
        ctx.meta["filtered_out"] = len(ctx.scored) - len(kept)
        ctx.scored = kept
        logger.info(
            "Kept %d relevant businesses (filtered %d)", len(kept), ctx.meta["filtered_out"],
            extra={"step": "relevance_threshold", "search_id": ctx.search_id},
        )
        return ctx
