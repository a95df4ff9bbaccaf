"""``update-local-repos``: check out main/master and pull every clone in a workspace."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape

from ..logging_setup import configure_logging
from .git import CommandRunner
from .update import update_workspace

console = Console(soft_wrap=True, highlight=False)
err_console = Console(stderr=True, soft_wrap=True, highlight=False)

RULE = "=" * 42


def cmd_update_local_repos(
    workspace_dir: str,
    *,
    cleanup_branches: bool = False,
    runner: CommandRunner | None = None,
) -> int:
    """Update every repository under ``workspace_dir``; return the exit code."""

    root = Path(workspace_dir)
    if not root.is_dir():
        err_console.print(
            f"[red]Error:[/red] Workspace directory '{escape(workspace_dir)}' does not exist"
        )
        return 1

    console.print("Starting repository update process...")
    console.print(RULE)
    console.print(f"Workspace directory: {escape(str(root))}")

    report = update_workspace(root, cleanup_branches=cleanup_branches, runner=runner)
    if not report.outcomes:
        console.print("No git repositories found in the workspace directory.")
        return 0

    for outcome in report.outcomes:
        if outcome.ok:
            console.print(f"[green]Updated[/green] {escape(outcome.repository)}")
        else:
            console.print(f"[yellow]Warning:[/yellow] {escape(outcome.error or '')}")
        for w in outcome.warnings:
            console.print(f"  [yellow]Warning:[/yellow] {escape(w)}")

    console.print("")
    console.print(RULE)
    console.print("Update process completed!")
    console.print(f"Repositories processed: {report.processed}")
    console.print(f"Errors encountered: {report.errors}")

    if report.errors:
        console.print("Some repositories had issues. Please review the output above.")
        return 1
    console.print("All repositories updated successfully!")
    return 0


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
    help=(
        "Update all git repositories in a workspace directory by checking out the "
        "main branch, pulling latest changes, and optionally cleaning up old branches."
    ),
)


@app.command()
def update_local_repos_cmd(
    workspace_dir: Annotated[str, typer.Argument(help="Path to workspace directory")],
    cleanup_branches: Annotated[
        bool,
        typer.Option(
            "--cleanup-branches",
            "-c",
            help="Delete local branches that track deleted remote branches",
        ),
    ] = False,
) -> None:
    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    configure_logging()
    raise typer.Exit(cmd_update_local_repos(workspace_dir, cleanup_branches=cleanup_branches))


if __name__ == "__main__":  # pragma: no cover
    app()
