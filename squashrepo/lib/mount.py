from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from ..errors import MountFailure, UnmountFailure
from .command import CommandRunner

logger = logging.getLogger(__name__)

FS_TYPE = "squashfs"


@dataclass
class MountSession:
    archive_path: str
    mount_point: str
    created_dir: bool = False
    mounted: bool = False


def remove_mount_point(session: MountSession) -> bool:
    """Remove the mount point if this session created it.

    Uses a non-recursive rmdir so a still-mounted tree is never walked.
    """

    if not session.created_dir:
        return True

    p = Path(session.mount_point)
    try:
        p.rmdir()
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.error("Could not remove mount point %s: %s", p, e)
        return False

    session.created_dir = False
    logger.info("Removed mount point %s", p)
    return True


def mount_archive(
    archive_path: str,
    mount_point: str,
    *,
    runner: CommandRunner,
    dry_run: bool = False,
) -> MountSession:
    session = MountSession(archive_path=archive_path, mount_point=mount_point)

    p = Path(mount_point)
    if dry_run and not p.is_dir():
        logger.info("Would create mount point directory: %s", p)
    elif not p.is_dir():
        try:
            p.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise MountFailure(f"Cannot create mount point {p}: {e}") from e
        session.created_dir = True
        logger.info("Created mount point directory: %s", p)

    r = runner.run(["mount", "-t", FS_TYPE, "-o", "ro", archive_path, mount_point])
    if not r.ok:
        remove_mount_point(session)
        raise MountFailure(f"Failed to mount {archive_path} at {mount_point} ({r.returncode})")

    session.mounted = True
    logger.info("Mounted %s at %s", archive_path, mount_point)
    return session


def unmount_archive(session: MountSession, *, runner: CommandRunner) -> None:
    """Unmount once and clean up the mount point, even if umount fails."""

    if not session.mounted:
        remove_mount_point(session)
        return

    r = runner.run(["umount", session.mount_point])
    if r.ok:
        session.mounted = False
        logger.info("Unmounted %s", session.mount_point)

    remove_mount_point(session)

    if not r.ok:
        raise UnmountFailure(f"Failed to unmount {session.mount_point} ({r.returncode})")
