from __future__ import annotations

import logging

from ..lib.fetch import fetch_archive
from ..pipeline import RunContext

logger = logging.getLogger(__name__)


class FetchArchiveStep:
    step_id = "10_fetch_archive"
    cleanup = False

    def run(self, ctx: RunContext) -> None:
        ctx.resolved_url = fetch_archive(
            ctx.link,
            ctx.paths.archive,
            runner=ctx.runner,
            dry_run=ctx.dry_run,
        )
