from __future__ import annotations

import logging

from ..lib.mount import mount_archive
from ..pipeline import RunContext

logger = logging.getLogger(__name__)


class MountArchiveStep:
    step_id = "20_mount_archive"
    cleanup = False

    def run(self, ctx: RunContext) -> None:
        ctx.session = mount_archive(
            ctx.paths.archive,
            ctx.paths.mount_point,
            runner=ctx.runner,
            dry_run=ctx.dry_run,
        )
