from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

PACKAGE_SUFFIX = ".pkg.tar.zst"

# Everything before the first "-<digit>".
_BASE_NAME_RE = re.compile(r"^(.+?)-\d")


@dataclass(frozen=True)
class PackageArtifact:
    path: str
    base_name: str

    @classmethod
    def from_path(cls, path: str) -> "PackageArtifact":
        return cls(path=str(path), base_name=extract_base_name(path))


def extract_base_name(path: str) -> str:
    name = Path(path).name
    m = _BASE_NAME_RE.match(name)
    return m.group(1) if m else name


def scan_artifacts(mount_point: str, suffix: str = PACKAGE_SUFFIX) -> list[PackageArtifact]:
    root = Path(mount_point)
    if not root.is_dir():
        logger.warning("Mount point %s does not exist", root)
        return []
    found = sorted(str(p) for p in root.rglob(f"*{suffix}") if p.is_file())
    logger.info("Found %d package(s) under %s", len(found), root)
    return [PackageArtifact.from_path(p) for p in found]
