from __future__ import annotations

import logging
import os
import shlex
import subprocess
from dataclasses import dataclass
from typing import Mapping, Protocol, Sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CmdResult:
    argv: list[str]
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class CommandRunner(Protocol):
    """Anything that can run an argv and report how it went."""

    def run(self, argv: Sequence[str]) -> CmdResult:
        ...


def _fmt_argv(argv: Sequence[str]) -> str:
    return " ".join(shlex.quote(a) for a in argv)


class SubprocessRunner:
    """Run real processes, optionally behind a privilege prefix such as sudo.

    Never raises on a non-zero exit; callers inspect ``CmdResult``.
    A missing executable is reported as return code 127.
    """

    def __init__(
        self,
        *,
        elevate: Sequence[str] = (),
        dry_run: bool = False,
        env: Mapping[str, str] | None = None,
    ) -> None:
        self.elevate = list(elevate)
        self.dry_run = dry_run
        self.env = dict(env or {})

    def run(self, argv: Sequence[str]) -> CmdResult:
        argv_list = [*self.elevate, *argv]
        logger.info("CMD %s", _fmt_argv(argv_list))

        if self.dry_run:
            return CmdResult(argv=argv_list, returncode=0, stdout="", stderr="")

        try:
            p = subprocess.run(
                argv_list,
                text=True,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                env=dict(os.environ, **self.env),
            )
        except OSError as e:
            logger.debug("Could not start %s: %s", argv_list[0], e)
            return CmdResult(argv=argv_list, returncode=127, stdout="", stderr=str(e))

        if p.stdout:
            logger.debug("STDOUT %s", p.stdout.strip())
        if p.stderr:
            logger.debug("STDERR %s", p.stderr.strip())

        return CmdResult(argv=argv_list, returncode=p.returncode, stdout=p.stdout, stderr=p.stderr)

