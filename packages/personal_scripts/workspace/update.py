"""Batch update of the git clones found directly under a workspace directory.

For each repository: refuse when the working tree is dirty, check out
``main`` (or ``master``), pull from ``origin`` and optionally delete local
branches whose remote branch is gone. Repositories are handled sequentially
in name order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path

from ..logging_setup import get_logger
from .git import (
    CommandRunner,
    checkout_branch,
    get_main_branch,
    has_uncommitted_changes,
    is_git_repository,
    parse_gone_branches,
    pull_latest,
    run_command,
)

logger = get_logger("personal_scripts.workspace.update")


@dataclass(frozen=True, slots=True)
class RepositoryInfo:
    name: str
    path: Path
    main_branch: str | None


@dataclass(frozen=True, slots=True)
class UpdateOutcome:
    repository: str
    ok: bool
    error: str | None = None
    warnings: tuple[str, ...] = ()


@dataclass(slots=True)
class WorkspaceReport:
    outcomes: list[UpdateOutcome] = field(default_factory=list)

    @property
    def processed(self) -> int:
        return sum(1 for o in self.outcomes if o.ok)

    @property
    def errors(self) -> int:
        return sum(1 for o in self.outcomes if not o.ok)


def get_repositories(
    workspace_dir: str | PathLike[str], *, runner: CommandRunner | None = None
) -> list[RepositoryInfo]:
    """Return the git repositories directly under ``workspace_dir``, by name."""

    root = Path(workspace_dir)
    repos: list[RepositoryInfo] = []
    for entry in sorted(root.iterdir(), key=lambda p: p.name):
        if not entry.is_dir() or not is_git_repository(entry):
            continue
        repos.append(
            RepositoryInfo(
                name=entry.name,
                path=entry,
                main_branch=get_main_branch(entry, runner=runner),
            )
        )
    return repos


def cleanup_deleted_branches(
    repo: Path, *, runner: CommandRunner | None = None
) -> tuple[bool, list[str]]:
    """Prune remotes and delete local branches tracking deleted remote branches.

    Returns ``(ok, warnings)``. ``ok`` is False when fetching or listing
    branches failed; a branch that cannot be deleted only adds a warning.
    """

    run = runner or run_command
    if not run(["git", "fetch", "--all", "--prune"], repo).ok:
        return False, []
    listing = run(["git", "branch", "-vv"], repo)
    if not listing.ok:
        return False, []

    warnings: list[str] = []
    for branch in parse_gone_branches(listing.output):
        if not run(["git", "branch", "-D", branch], repo).ok:
            warnings.append(f"Could not delete branch '{branch}' in {repo}")
    return True, warnings


def update_repository(
    repo: RepositoryInfo,
    *,
    cleanup_branches: bool = False,
    runner: CommandRunner | None = None,
) -> UpdateOutcome:
    logger.info("Processing: %s", repo.name)

    if has_uncommitted_changes(repo.path, runner=runner):
        return UpdateOutcome(repo.name, False, f"{repo.name} has uncommitted changes, skipping")

    if repo.main_branch is None:
        return UpdateOutcome(
            repo.name, False, f"Could not find main or master branch in {repo.name}"
        )

    logger.info("Checking out %s...", repo.main_branch)
    if not checkout_branch(repo.path, repo.main_branch, runner=runner):
        return UpdateOutcome(
            repo.name, False, f"Could not checkout {repo.main_branch} in {repo.name}"
        )

    logger.info("Pulling latest changes...")
    if not pull_latest(repo.path, repo.main_branch, runner=runner):
        return UpdateOutcome(repo.name, False, f"Could not pull latest changes in {repo.name}")

    warnings: list[str] = []
    if cleanup_branches:
        logger.info("Cleaning up local branches that track deleted remote branches...")
        ok, branch_warnings = cleanup_deleted_branches(repo.path, runner=runner)
        warnings.extend(branch_warnings)
        if not ok:
            # The checkout and pull succeeded; a failed cleanup is not an error.
            warnings.append(f"Branch cleanup failed in {repo.name}")
    else:
        logger.debug("Skipping branch cleanup for %s", repo.name)

    for w in warnings:
        logger.warning(w)
    logger.info("Successfully updated %s", repo.name)
    return UpdateOutcome(repo.name, True, None, tuple(warnings))


def update_workspace(
    workspace_dir: str | PathLike[str],
    *,
    cleanup_branches: bool = False,
    runner: CommandRunner | None = None,
) -> WorkspaceReport:
    report = WorkspaceReport()
    for repo in get_repositories(workspace_dir, runner=runner):
        outcome = update_repository(repo, cleanup_branches=cleanup_branches, runner=runner)
        if not outcome.ok:
            logger.warning(outcome.error)
        report.outcomes.append(outcome)
    return report


__all__ = [
    "RepositoryInfo",
    "UpdateOutcome",
    "WorkspaceReport",
    "cleanup_deleted_branches",
    "get_repositories",
    "update_repository",
    "update_workspace",
]
