from __future__ import annotations

import argparse
import logging
from typing import Optional

from .catalog import Catalog, fetch_catalog, load_catalog
from .config import RepoConfig, load_config
from .errors import SquashRepoError
from .lib.command import CommandRunner, SubprocessRunner
from .logging_utils import DEFAULT_LOG_PATH, configure_logging
from .menu import MenuLoop
from .pipeline import PipelineResult, RunContext, run_pipeline
from .steps import (
    CleanupArchiveStep,
    FetchArchiveStep,
    InstallPackagesStep,
    MountArchiveStep,
    UnmountArchiveStep,
)

logger = logging.getLogger(__name__)


def build_steps():
    return [
        FetchArchiveStep(),
        MountArchiveStep(),
        InstallPackagesStep(),
        UnmountArchiveStep(),
        CleanupArchiveStep(),
    ]


def run_link(
    link: str,
    *,
    cfg: RepoConfig,
    runner: CommandRunner,
    dry_run: bool = False,
) -> PipelineResult:
    """Fetch, mount, install and unmount the archive behind one link."""

    ctx = RunContext(
        link=link,
        paths=cfg.session_paths(),
        runner=runner,
        package_suffix=cfg.package_suffix,
        keep_archive=cfg.keep_archive,
        dry_run=dry_run or cfg.dry_run,
    )
    return run_pipeline(ctx=ctx, steps=build_steps())


def get_catalog(cfg: RepoConfig, *, catalog_path: Optional[str], runner: CommandRunner) -> Catalog:
    if catalog_path:
        return load_catalog(catalog_path)
    return fetch_catalog(
        cfg.catalog_repo_url,
        cfg.catalog_dir,
        runner=runner,
        catalog_file=cfg.catalog_file,
    )


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="squashrepo")
    p.add_argument("--config", default=None, help="Path to YAML config")
    p.add_argument("--log", default=DEFAULT_LOG_PATH, help="Path to log file")
    p.add_argument("--link", default=None, help="Install from this archive link and exit")
    p.add_argument("--catalog", default=None, help="Use a local catalog file instead of cloning one")
    p.add_argument("--dry-run", action="store_true", help="Log commands without running them")
    p.add_argument("--quiet", action="store_true", help="Only show warnings and errors on the console")

    args = p.parse_args(argv)

    configure_logging(
        log_path=args.log,
        console_level=logging.WARNING if args.quiet else logging.INFO,
    )

    try:
        cfg = load_config(args.config)
    except (OSError, SquashRepoError) as e:
        logger.error("Could not load config: %s", e)
        return 2

    dry_run = bool(args.dry_run) or cfg.dry_run
    privileged = SubprocessRunner(elevate=cfg.elevate, dry_run=dry_run)

    if args.link:
        result = run_link(args.link, cfg=cfg, runner=privileged, dry_run=dry_run)
        return 0 if result.ok else 1

    try:
        catalog = get_catalog(
            cfg,
            catalog_path=args.catalog,
            runner=SubprocessRunner(dry_run=dry_run),
        )
    except SquashRepoError as e:
        logger.error("%s. Exiting.", e)
        return 1

    loop = MenuLoop(
        catalog,
        lambda link: run_link(link, cfg=cfg, runner=privileged, dry_run=dry_run),
    )
    loop.run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
