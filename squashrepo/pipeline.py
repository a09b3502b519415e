from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Sequence

from .config import SessionPaths
from .errors import PipelineError
from .installer import InstallReport
from .lib.command import CommandRunner
from .lib.mount import MountSession
from .lib.scan import PACKAGE_SUFFIX

logger = logging.getLogger(__name__)


@dataclass
class RunContext:
    """Everything one link's run needs, passed explicitly between steps."""

    link: str
    paths: SessionPaths
    runner: CommandRunner
    package_suffix: str = PACKAGE_SUFFIX
    keep_archive: bool = False
    dry_run: bool = False
    resolved_url: Optional[str] = None
    session: Optional[MountSession] = None
    report: Optional[InstallReport] = None


class Step(Protocol):
    """A single pipeline stage.

    Cleanup steps run even after an aborting failure.
    """

    step_id: str
    cleanup: bool

    def run(self, ctx: RunContext) -> None:
        ...


@dataclass
class PipelineResult:
    ran_steps: List[str] = field(default_factory=list)
    skipped_steps: List[str] = field(default_factory=list)
    errors: List[Exception] = field(default_factory=list)
    report: Optional[InstallReport] = None

    @property
    def failed(self) -> bool:
        return any(getattr(e, "aborts", True) for e in self.errors)

    @property
    def ok(self) -> bool:
        if self.errors:
            return False
        return self.report is not None and self.report.ok


def run_pipeline(*, ctx: RunContext, steps: Sequence[Step]) -> PipelineResult:
    """Run steps in order.

    After an aborting failure, only cleanup steps run. Errors are logged and
    collected, never raised.
    """

    result = PipelineResult()
    aborted = False

    for step in steps:
        if aborted and not step.cleanup:
            logger.info("Skipping step %s (earlier stage failed)", step.step_id)
            result.skipped_steps.append(step.step_id)
            continue

        logger.info("Running step %s", step.step_id)
        try:
            step.run(ctx)
        except PipelineError as e:
            logger.error("Step %s failed: %s", step.step_id, e)
            result.errors.append(e)
            aborted = aborted or e.aborts
        except Exception as e:
            logger.exception("Step %s failed unexpectedly", step.step_id)
            result.errors.append(e)
            aborted = True
        result.ran_steps.append(step.step_id)

    result.report = ctx.report
    source = ctx.resolved_url or ctx.link
    if result.ok:
        logger.info("Pipeline finished for %s", source)
    else:
        logger.error("Pipeline finished with errors for %s", source)
    return result
