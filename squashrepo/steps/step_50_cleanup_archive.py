from __future__ import annotations

import logging
from pathlib import Path

from ..pipeline import RunContext

logger = logging.getLogger(__name__)


class CleanupArchiveStep:
    step_id = "50_cleanup_archive"
    cleanup = True

    def run(self, ctx: RunContext) -> None:
        if ctx.keep_archive:
            return
        if ctx.session is not None and ctx.session.mounted:
            logger.warning("Archive %s is still mounted, leaving it in place", ctx.paths.archive)
            return

        p = Path(ctx.paths.archive)
        if p.exists():
            r = ctx.runner.run(["rm", "-f", str(p)])
            if r.ok:
                logger.info("Removed archive %s", p)
            else:
                logger.error("Could not remove archive %s (%s)", p, r.returncode)
