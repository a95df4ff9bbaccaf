"""In-memory stand-in for the ``git`` process layer.

Commands are keyed by ``(repo directory name, git arguments)``. Anything not
configured succeeds with empty output. Every call is recorded in order.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path

from personal_scripts.workspace.git import CommandResult


class FakeGitRunner:
    def __init__(
        self, results: Mapping[tuple[str, tuple[str, ...]], CommandResult] | None = None
    ) -> None:
        self.results = dict(results or {})
        self.calls: list[tuple[str, tuple[str, ...]]] = []

    def set(self, repo: str, *args: str, ok: bool = True, output: str = "") -> None:
        self.results[(repo, args)] = CommandResult(ok, output, "" if ok else "failed")

    def __call__(self, cmd: Sequence[str], cwd: Path) -> CommandResult:
        assert cmd[0] == "git"
        key = (Path(cwd).name, tuple(cmd[1:]))
        self.calls.append(key)
        return self.results.get(key, CommandResult(True, "", ""))

    def commands_for(self, repo: str) -> list[tuple[str, ...]]:
        return [args for name, args in self.calls if name == repo]
