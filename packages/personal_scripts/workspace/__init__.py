"""Batch maintenance of local git clones (``update-local-repos``)."""

from .git import CommandResult, run_command
from .update import (
    RepositoryInfo,
    UpdateOutcome,
    WorkspaceReport,
    get_repositories,
    update_repository,
    update_workspace,
)

__all__ = [
    "CommandResult",
    "RepositoryInfo",
    "UpdateOutcome",
    "WorkspaceReport",
    "get_repositories",
    "run_command",
    "update_repository",
    "update_workspace",
]
