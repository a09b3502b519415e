from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from .errors import ConfigError
from .lib.scan import PACKAGE_SUFFIX

DEFAULT_CATALOG_REPO = "https://github.com/claudemods/Squashfs-Iso-Repos.git"


@dataclass(frozen=True)
class SessionPaths:
    archive: str
    mount_point: str


@dataclass(frozen=True)
class RepoConfig:
    raw: Dict[str, Any]

    def _section(self, name: str) -> Dict[str, Any]:
        return self.raw.get(name) or {}

    @property
    def work_dir(self) -> str:
        return str(self._section("paths").get("work_dir") or "/mnt")

    @property
    def archive_path(self) -> str:
        return str(self._section("paths").get("archive") or Path(self.work_dir) / "repo.squashfs")

    @property
    def mount_point(self) -> str:
        return str(self._section("paths").get("mount_point") or Path(self.work_dir) / "repo")

    @property
    def catalog_dir(self) -> str:
        return str(self._section("paths").get("catalog_dir") or "/tmp/Squashfs-Iso-Repos")

    @property
    def catalog_repo_url(self) -> str:
        return str(self._section("catalog").get("repo_url") or DEFAULT_CATALOG_REPO)

    @property
    def catalog_file(self) -> str:
        return str(self._section("catalog").get("file") or "repos.txt")

    @property
    def package_suffix(self) -> str:
        return str(self._section("packages").get("suffix") or PACKAGE_SUFFIX)

    @property
    def elevate(self) -> List[str]:
        priv = self._section("privilege")
        if "elevate" not in priv:
            return ["sudo"]
        return [str(a) for a in (priv.get("elevate") or [])]

    @property
    def keep_archive(self) -> bool:
        return bool(self.raw.get("keep_archive", False))

    @property
    def dry_run(self) -> bool:
        return bool(self.raw.get("dry_run", False))

    def session_paths(self) -> SessionPaths:
        return SessionPaths(archive=self.archive_path, mount_point=self.mount_point)


def load_config(path: Optional[str] = None) -> RepoConfig:
    """Load a YAML config. With no path, every setting takes its default."""

    if path is None:
        return RepoConfig(raw={})

    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(path)

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ConfigError("config must be YAML")

    try:
        import yaml  # type: ignore
    except Exception as e:
        raise RuntimeError("PyYAML is required to read the config file") from e

    raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise ConfigError(f"{p} must contain a mapping/object")

    return RepoConfig(raw=raw)
