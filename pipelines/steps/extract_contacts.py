from __future__ import annotations

import logging
from typing import Callable, Optional

from pipelines.runner import RunContext
from ports.repos import SearchStorePort
from services.contact_extractor import ContactExtractor


logger = logging.getLogger(__name__)


class ExtractAndPersistContacts:
    """Sequentially extract contacts per kept candidate and append them to the store.

    Store errors are not caught here: they abort the run.
    """

    def __init__(
        self,
        extractor: ContactExtractor,
        store: SearchStorePort,
        on_progress: Optional[Callable[[int, int, str], None]] = None,
    ) -> None:
        self.extractor = extractor
        self.store = store
        self.on_progress = on_progress

    def run(self, ctx: RunContext) -> RunContext:
        total = len(ctx.scored)
        success_count = 0
        origins: dict[str, int] = {}
        for idx, business in enumerate(ctx.scored, start=1):
            if self.on_progress:
                self.on_progress(idx, total, business.name)
            results = self.extractor.extract(business, ctx.sector, ctx.area)
            for result in results:
                self.store.add_contact_result(ctx.search_id, result)
                success_count += 1
                origins[result.email_origin] = origins.get(result.email_origin, 0) + 1
        ctx.meta["processed_businesses"] = total
        ctx.meta["success_count"] = success_count
        ctx.meta["email_origins"] = origins
        logger.info(
            "%d emails found from %d businesses", success_count, total,
            extra={"step": "extract_contacts", "search_id": ctx.search_id},
        )
        return ctx
