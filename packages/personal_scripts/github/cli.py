"""``contribution-stats``: pull-request activity of a GitHub user.

Requires ``GITHUB_TOKEN``; a ``.env`` in the working directory is loaded first
without overriding variables already set.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from rich.console import Console

from ..logging_setup import configure_logging
from ..settings import require_env
from .client import GitHubAPIError, GitHubClient
from .stats import SearchBackend, collect_contribution_stats, render_report

console = Console(stderr=True, soft_wrap=True, highlight=False)


def cmd_contribution_stats(
    user: str,
    *,
    days: int = 7,
    backend: SearchBackend | None = None,
) -> int:
    """Print contribution stats for ``user``; return the process exit code."""

    if days <= 0:
        print("Error: --days must be a positive number.", file=sys.stderr)
        return 1

    if backend is None:
        try:
            backend = GitHubClient(require_env("GITHUB_TOKEN"))
        except RuntimeError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

    try:
        with console.status(
            f'Fetching contribution stats for "{user}" for the last {days} days...'
        ):
            stats = collect_contribution_stats(backend, user, days)
    except GitHubAPIError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(render_report(stats))
    return 0


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
    help="Get contribution statistics for a GitHub user (requires GITHUB_TOKEN).",
)


@app.command()
def contribution_stats_cmd(
    user: Annotated[
        str, typer.Option("--user", "-u", help="GitHub username to get stats for")
    ],
    days: Annotated[
        int, typer.Option("--days", "-d", help="Number of days to look back")
    ] = 7,
) -> None:
    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    configure_logging()
    raise typer.Exit(cmd_contribution_stats(user, days=days))


if __name__ == "__main__":  # pragma: no cover
    app()
