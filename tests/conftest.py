"""Shared fixtures: a scripted command runner that never touches the system."""

from __future__ import annotations

from typing import Callable, Dict, List, Optional, Sequence

import pytest

from squashrepo.lib.command import CmdResult


class ScriptedRunner:
    """Records every argv and answers from a list of (prefix, result) rules.

    The first rule whose prefix matches the start of argv wins; anything
    unmatched succeeds with empty output.
    """

    def __init__(self) -> None:
        self.calls: List[List[str]] = []
        self.rules: List[tuple] = []
        self.hooks: Dict[str, Callable[[List[str]], None]] = {}

    def script(self, *prefix: str, returncode: int = 0, stdout: str = "", stderr: str = "") -> "ScriptedRunner":
        self.rules.append((list(prefix), returncode, stdout, stderr))
        return self

    def on(self, tool: str, hook: Callable[[List[str]], None]) -> "ScriptedRunner":
        self.hooks[tool] = hook
        return self

    def run(self, argv: Sequence[str]) -> CmdResult:
        argv_list = list(argv)
        self.calls.append(argv_list)
        hook = self.hooks.get(argv_list[0])
        if hook is not None:
            hook(argv_list)
        for prefix, rc, out, err in self.rules:
            if argv_list[: len(prefix)] == prefix:
                return CmdResult(argv=argv_list, returncode=rc, stdout=out, stderr=err)
        return CmdResult(argv=argv_list, returncode=0, stdout="", stderr="")

    def invoked(self, tool: str) -> List[List[str]]:
        return [c for c in self.calls if c[0] == tool]

    def first_index(self, *prefix: str) -> Optional[int]:
        for i, c in enumerate(self.calls):
            if c[: len(prefix)] == list(prefix):
                return i
        return None


@pytest.fixture
def runner():
    return ScriptedRunner()


@pytest.fixture
def make_packages():
    """Create empty package files under a root; names may include subdirs."""

    def _make(root, names):
        paths = []
        for n in names:
            p = root / n
            p.parent.mkdir(parents=True, exist_ok=True)
            p.write_bytes(b"")
            paths.append(str(p))
        return paths

    return _make
