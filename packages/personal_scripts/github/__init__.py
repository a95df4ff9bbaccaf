"""GitHub pull-request statistics (``contribution-stats``)."""

from .client import GitHubAPIError, GitHubClient, SearchIssueItem
from .stats import ContributionStats, collect_contribution_stats, render_report

__all__ = [
    "ContributionStats",
    "GitHubAPIError",
    "GitHubClient",
    "SearchIssueItem",
    "collect_contribution_stats",
    "render_report",
]
