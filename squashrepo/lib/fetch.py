from __future__ import annotations

import logging
import re
from pathlib import Path

from ..errors import FetchFailure
from .command import CommandRunner

logger = logging.getLogger(__name__)

DRIVE_HOST = "drive.google.com"
DRIVE_DOWNLOAD_URL = "https://drive.google.com/uc?export=download&id={file_id}"

_DRIVE_ID_RE = re.compile(r"id=([^&]+)")


def resolve_link(link: str) -> str:
    """Rewrite sharing links into a form wget can download directly."""

    if DRIVE_HOST not in link:
        return link

    m = _DRIVE_ID_RE.search(link)
    if not m:
        logger.warning("Drive link has no id= parameter, using it as-is: %s", link)
        return link
    return DRIVE_DOWNLOAD_URL.format(file_id=m.group(1))


def fetch_archive(link: str, dest: str, *, runner: CommandRunner, dry_run: bool = False) -> str:
    """Download ``link`` to ``dest``. Returns the URL actually fetched."""

    url = resolve_link(link)
    if url != link:
        logger.info("Resolved %s -> %s", link, url)

    parent = Path(dest).parent
    if dry_run:
        logger.info("Would create %s", parent)
    else:
        try:
            parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FetchFailure(f"Cannot create download directory {parent}: {e}") from e

    r = runner.run(["wget", "--no-check-certificate", url, "-O", dest])
    if not r.ok:
        raise FetchFailure(f"Download failed ({r.returncode}): {url}")

    logger.info("Download completed: %s", dest)
    return url
