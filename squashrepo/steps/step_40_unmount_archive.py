from __future__ import annotations

import logging

from ..lib.mount import unmount_archive
from ..pipeline import RunContext

logger = logging.getLogger(__name__)


class UnmountArchiveStep:
    step_id = "40_unmount_archive"
    cleanup = True

    def run(self, ctx: RunContext) -> None:
        if ctx.session is None:
            logger.info("Nothing mounted, skipping unmount")
            return
        unmount_archive(ctx.session, runner=ctx.runner)
