"""Contribution statistics for a GitHub user over a trailing window of days.

Five independent search queries are issued concurrently through a small
thread pool; each count is the number of items the search returned (one
page, at most 100).
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta
from typing import Protocol

from .client import SearchIssueItem

COMMIT_DAYS_TARGET = 3
RULE = "=" * 60


class SearchBackend(Protocol):
    def search_issues(self, query: str) -> list[SearchIssueItem]: ...


@dataclass(frozen=True, slots=True)
class MergeStats:
    days_with_merges: int
    avg_days_per_week: float


@dataclass(frozen=True, slots=True)
class ContributionStats:
    user: str
    days: int
    since: date
    merges: MergeStats
    opened: int
    closed: int
    reviewed: int
    open_prs: tuple[SearchIssueItem, ...]


def since_date(days: int, *, now: datetime | None = None) -> date:
    """UTC calendar date ``days`` days before ``now``."""

    current = now or datetime.now(UTC)
    if current.tzinfo is not None:
        current = current.astimezone(UTC)
    return (current - timedelta(days=days)).date()


def merged_query(user: str, since: date) -> str:
    return f"is:pr is:merged author:{user} merged:>={since.isoformat()}"


def opened_query(user: str, since: date) -> str:
    return f"is:pr author:{user} created:>={since.isoformat()}"


def closed_query(user: str, since: date) -> str:
    return f"is:pr author:{user} closed:>={since.isoformat()}"


def reviewed_query(user: str, since: date) -> str:
    return f"is:pr -author:{user} reviewed-by:{user} updated:>={since.isoformat()}"


def open_query(user: str) -> str:
    return f"is:pr is:open author:{user}"


def _merge_day(item: SearchIssueItem) -> date | None:
    if item.pull_request is None or item.pull_request.merged_at is None:
        return None
    merged_at = item.pull_request.merged_at
    if merged_at.tzinfo is not None:
        merged_at = merged_at.astimezone(UTC)
    return merged_at.date()


def merge_stats(items: list[SearchIssueItem], days: int) -> MergeStats:
    """Count distinct UTC merge days and average them per week."""

    merge_days = {d for d in map(_merge_day, items) if d is not None}
    count = len(merge_days)
    return MergeStats(days_with_merges=count, avg_days_per_week=(count / days) * 7)


def collect_contribution_stats(
    backend: SearchBackend,
    user: str,
    days: int,
    *,
    now: datetime | None = None,
    max_workers: int = 5,
) -> ContributionStats:
    """Run all queries for ``user`` and assemble a :class:`ContributionStats`.

    Raises ``ValueError`` for a non-positive ``days``; API errors from
    ``backend`` propagate unchanged.
    """

    if days <= 0:
        raise ValueError("days must be a positive number")
    since = since_date(days, now=now)

    queries = {
        "merged": merged_query(user, since),
        "opened": opened_query(user, since),
        "closed": closed_query(user, since),
        "reviewed": reviewed_query(user, since),
        "open": open_query(user),
    }
    with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="gh-search") as ex:
        futures = {key: ex.submit(backend.search_issues, q) for key, q in queries.items()}
        results = {key: fut.result() for key, fut in futures.items()}

    return ContributionStats(
        user=user,
        days=days,
        since=since,
        merges=merge_stats(results["merged"], days),
        opened=len(results["opened"]),
        closed=len(results["closed"]),
        reviewed=len(results["reviewed"]),
        open_prs=tuple(results["open"]),
    )


def render_report(stats: ContributionStats, *, target: int = COMMIT_DAYS_TARGET) -> str:
    status = "OK" if stats.merges.avg_days_per_week >= target else "BELOW"
    lines = [
        RULE,
        f"Contribution Stats for: {stats.user}",
        f"Period: Last {stats.days} days",
        RULE,
        "",
        "Commits Landed (to main/master):",
        f"   - {stats.merges.days_with_merges} days with commits in the last {stats.days} days.",
        f"   - Avg: {stats.merges.avg_days_per_week:.2f} days/week ({status} Target: {target})",
        "",
        "Pull Requests:",
        f"   - {stats.opened} opened",
        f"   - {stats.closed} closed/merged",
        "",
        "Reviews:",
        f"   - {stats.reviewed} PRs reviewed (via comments or approvals)",
        "   - Note: This is an estimate based on recent PR updates.",
        "",
        f"Currently Open PRs ({len(stats.open_prs)}):",
    ]
    if stats.open_prs:
        lines.extend(f"   - {pr.title} [{pr.html_url}]" for pr in stats.open_prs)
    else:
        lines.append("   - No open PRs found.")
    lines.append("")
    lines.append(RULE)
    return "\n".join(lines)


__all__ = [
    "COMMIT_DAYS_TARGET",
    "ContributionStats",
    "MergeStats",
    "SearchBackend",
    "closed_query",
    "collect_contribution_stats",
    "merge_stats",
    "merged_query",
    "open_query",
    "opened_query",
    "render_report",
    "reviewed_query",
    "since_date",
]
