"""Thin wrappers over the ``git`` command line.

Commands never raise: every call returns a :class:`CommandResult`, and a
timeout or a missing ``git`` binary becomes a failed result. Each helper takes
an optional ``runner`` so callers (and tests) can substitute the process
layer.
"""

from __future__ import annotations

import subprocess
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from os import PathLike
from pathlib import Path
from typing import TypeAlias

from ..settings import git_timeout


@dataclass(frozen=True, slots=True)
class CommandResult:
    ok: bool
    output: str = ""
    error: str = ""


CommandRunner: TypeAlias = Callable[[Sequence[str], Path], CommandResult]


def run_command(
    cmd: Sequence[str], cwd: str | PathLike[str], *, timeout: float | None = None
) -> CommandResult:
    """Run ``cmd`` in ``cwd`` capturing text output, bounded by ``timeout`` seconds."""

    try:
        proc = subprocess.run(
            list(cmd),
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=timeout if timeout is not None else git_timeout(),
            check=False,
        )
    except subprocess.TimeoutExpired:
        return CommandResult(False, "", f"{' '.join(cmd)} timed out")
    except OSError as e:
        return CommandResult(False, "", str(e))
    return CommandResult(proc.returncode == 0, proc.stdout, proc.stderr)


def _git(runner: CommandRunner | None, repo: Path, *args: str) -> CommandResult:
    run = runner or run_command
    return run(["git", *args], repo)


def is_git_repository(path: Path) -> bool:
    return (path / ".git").is_dir()


def has_uncommitted_changes(repo: Path, *, runner: CommandRunner | None = None) -> bool:
    return not _git(runner, repo, "diff-index", "--quiet", "HEAD", "--").ok


def get_main_branch(repo: Path, *, runner: CommandRunner | None = None) -> str | None:
    """Return ``"main"`` or ``"master"`` (in that preference), else ``None``."""

    for branch in ("main", "master"):
        if _git(runner, repo, "show-ref", "--verify", "--quiet", f"refs/heads/{branch}").ok:
            return branch
    return None


def checkout_branch(repo: Path, branch: str, *, runner: CommandRunner | None = None) -> bool:
    return _git(runner, repo, "checkout", branch).ok


def pull_latest(repo: Path, branch: str, *, runner: CommandRunner | None = None) -> bool:
    return _git(runner, repo, "pull", "origin", branch).ok


def parse_gone_branches(branch_vv_output: str) -> list[str]:
    """Extract local branches whose upstream is ``gone`` from ``git branch -vv``.

    The current branch (``*`` marker) is never returned.
    """

    gone: list[str] = []
    for line in branch_vv_output.splitlines():
        if ": gone]" not in line:
            continue
        fields = line.split()
        if not fields or fields[0] == "*":
            continue
        gone.append(fields[0])
    return gone


__all__ = [
    "CommandResult",
    "CommandRunner",
    "checkout_branch",
    "get_main_branch",
    "has_uncommitted_changes",
    "is_git_repository",
    "parse_gone_branches",
    "pull_latest",
    "run_command",
]
