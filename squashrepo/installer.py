from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Sequence

from .errors import NoArtifactsFound
from .lib import pacman
from .lib.command import CommandRunner
from .lib.scan import PACKAGE_SUFFIX, PackageArtifact, scan_artifacts

logger = logging.getLogger(__name__)


class InstallOutcome(enum.Enum):
    INSTALLED = "installed"
    CONFLICT_RESOLVED = "conflict_resolved"
    FAILED = "failed"


@dataclass
class InstallReport:
    outcomes: Dict[str, InstallOutcome] = field(default_factory=dict)
    conflicts: Dict[str, str] = field(default_factory=dict)
    query_failures: List[str] = field(default_factory=list)
    resolution_failures: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return all(o is not InstallOutcome.FAILED for o in self.outcomes.values())

    @property
    def failed(self) -> List[str]:
        return [p for p, o in self.outcomes.items() if o is InstallOutcome.FAILED]


def dedupe_artifacts(artifacts: Iterable[PackageArtifact]) -> List[PackageArtifact]:
    """Keep one artifact per base name: the last one by path.

    Result is ordered by base name.
    """

    ordered = sorted(artifacts, key=lambda a: (a.base_name, a.path))
    keep: Dict[str, PackageArtifact] = {}
    for a in ordered:
        keep[a.base_name] = a
    return list(keep.values())


def install_artifacts(artifacts: Sequence[PackageArtifact], *, runner: CommandRunner) -> InstallReport:
    """Install every artifact, then resolve reported conflicts.

    Individual failures are logged and recorded; the passes always finish.
    """

    report = InstallReport()
    unique = dedupe_artifacts(artifacts)
    if len(unique) != len(artifacts):
        logger.info("Deduplicated %d artifact(s) down to %d", len(artifacts), len(unique))

    for a in unique:
        logger.info("Installing package: %s", a.path)
        r = pacman.install_file(runner, a.path)
        if r.ok:
            report.outcomes[a.path] = InstallOutcome.INSTALLED
        else:
            logger.error("Failed to install package: %s", a.path)
            report.outcomes[a.path] = InstallOutcome.FAILED

    for a in unique:
        conflicting = pacman.query_conflict(runner, a.base_name)
        if conflicting is None:
            # Treated as "no conflict"; kept apart for reporting.
            logger.warning("Conflict check failed for %s, assuming no conflict", a.base_name)
            report.query_failures.append(a.path)
            continue
        if not conflicting:
            continue

        logger.warning("Conflict detected for %s with package: %s", a.base_name, conflicting)
        report.conflicts[a.path] = conflicting

        synced = pacman.sync_install(runner, conflicting).ok
        if not synced:
            logger.error("Failed to install %s from the remote repository", conflicting)
            report.resolution_failures.append(a.path)

        logger.info("Reinstalling package: %s", a.path)
        r = pacman.install_file(runner, a.path)
        if not r.ok:
            logger.error("Failed to reinstall package: %s", a.path)
            report.outcomes[a.path] = InstallOutcome.FAILED
        elif synced:
            report.outcomes[a.path] = InstallOutcome.CONFLICT_RESOLVED
        else:
            # local package is back but the conflict is still there
            report.outcomes[a.path] = InstallOutcome.FAILED

    logger.info(
        "Install finished: %d package(s), %d failed, %d conflict(s)",
        len(report.outcomes),
        len(report.failed),
        len(report.conflicts),
    )
    return report


def install_from_mount(
    mount_point: str,
    *,
    runner: CommandRunner,
    suffix: str = PACKAGE_SUFFIX,
) -> InstallReport:
    artifacts = scan_artifacts(mount_point, suffix=suffix)
    if not artifacts:
        raise NoArtifactsFound(f"No packages found under {mount_point}")
    return install_artifacts(artifacts, runner=runner)
