from __future__ import annotations

import logging
from typing import Optional

from .command import CmdResult, CommandRunner

logger = logging.getLogger(__name__)


def install_file(runner: CommandRunner, path: str) -> CmdResult:
    return runner.run(["pacman", "-U", "--noconfirm", path])


def sync_install(runner: CommandRunner, package: str) -> CmdResult:
    return runner.run(["pacman", "-Sy", "--noconfirm", package])


def query_conflict(runner: CommandRunner, package: str) -> Optional[str]:
    """Return the conflicting package name ("" for none), None if the query failed."""

    r = runner.run(["pacman", "-T", package])
    if not r.ok:
        return None
    return r.stdout.strip()
