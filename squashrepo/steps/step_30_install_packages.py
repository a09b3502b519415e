from __future__ import annotations

import logging

from ..installer import install_from_mount
from ..pipeline import RunContext

logger = logging.getLogger(__name__)


class InstallPackagesStep:
    step_id = "30_install_packages"
    cleanup = False

    def run(self, ctx: RunContext) -> None:
        if ctx.session is None or not ctx.session.mounted:
            raise RuntimeError("no mounted archive; run the mount step first")

        ctx.report = install_from_mount(
            ctx.session.mount_point,
            runner=ctx.runner,
            suffix=ctx.package_suffix,
        )
        if not ctx.report.ok:
            # Best effort: carry on to unmount.
            logger.error(
                "Failed to install %d package(s): %s",
                len(ctx.report.failed),
                ", ".join(ctx.report.failed),
            )
