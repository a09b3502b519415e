from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from .errors import CatalogError
from .lib.command import CommandRunner

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CatalogLink:
    url: str
    label: str = ""

    @property
    def title(self) -> str:
        return self.label or self.url


@dataclass
class Catalog:
    """category -> repository -> links, in file order."""

    categories: Dict[str, Dict[str, List[CatalogLink]]] = field(default_factory=dict)

    def __bool__(self) -> bool:
        return bool(self.categories)

    def repositories(self, category: str) -> List[str]:
        return list(self.categories.get(category) or {})

    def links(self, category: str, repository: str) -> List[CatalogLink]:
        return list((self.categories.get(category) or {}).get(repository) or [])


def _is_category(line: str) -> bool:
    return "Repos" in line and ("Squashfs" in line or "Iso" in line)


def _parse_link(line: str) -> CatalogLink:
    start = line.index("https://")
    rest = line[start:].split(None, 1)
    url = rest[0]
    label = " ".join(p for p in (line[:start].strip(), rest[1].strip() if len(rest) > 1 else "") if p)
    return CatalogLink(url=url, label=label)


def parse_catalog(text: str) -> Catalog:
    """Classify each line as a category, a repository or a link.

    Lines before the first category, and links before a repository, are
    ignored.
    """

    catalog = Catalog()
    category: Optional[str] = None
    repo: Optional[str] = None

    for raw in text.splitlines():
        line = raw.strip()
        if not line:
            continue

        if "https://" in line:
            if category is not None and repo is not None:
                catalog.categories[category][repo].append(_parse_link(line))
            else:
                logger.debug("Ignoring link outside a repository: %s", line)
        elif _is_category(line):
            category = line
            repo = None
            catalog.categories.setdefault(category, {})
        elif "Repos" in line and category is not None:
            repo = line
            catalog.categories[category].setdefault(repo, [])
        else:
            logger.debug("Ignoring catalog line: %s", line)

    return catalog


def load_catalog(path: str) -> Catalog:
    p = Path(path)
    if not p.exists():
        raise CatalogError(f"Catalog file not found: {p}")
    catalog = parse_catalog(p.read_text(encoding="utf-8"))
    if not catalog:
        raise CatalogError(f"No repositories found in {p}")
    return catalog


def fetch_catalog(
    repo_url: str,
    dest_dir: str,
    *,
    runner: CommandRunner,
    catalog_file: str = "repos.txt",
) -> Catalog:
    """Clone a fresh copy of the catalog repository and parse it."""

    dest = Path(dest_dir)
    if dest.exists():
        r = runner.run(["rm", "-rf", str(dest)])
        if not r.ok:
            raise CatalogError(f"Failed to delete existing catalog checkout: {dest}")
        logger.info("Deleted existing catalog checkout %s", dest)

    r = runner.run(["git", "clone", repo_url, str(dest)])
    if not r.ok:
        raise CatalogError(f"Failed to clone catalog repository {repo_url} ({r.returncode})")
    logger.info("Catalog repository cloned to %s", dest)

    return load_catalog(str(dest / catalog_file))
