"""Thin client for the GitHub issue search API.

Non-streaming ``GET https://api.github.com/search/issues`` authenticated with
a personal access token. Responses are validated with pydantic and returned as
typed items. No pagination: a single page of up to 100 items per query.
"""

from __future__ import annotations

import json
import urllib.error
import urllib.parse
import urllib.request
from datetime import datetime

from pydantic import BaseModel, ConfigDict, ValidationError

from ..logging_setup import get_logger
from ..settings import http_timeout

GITHUB_API_URL = "https://api.github.com"
API_VERSION = "2022-11-28"
MAX_PER_PAGE = 100

logger = get_logger("personal_scripts.github.client")


class GitHubAPIError(RuntimeError):
    """A failed or unparseable GitHub API call."""

    def __init__(self, message: str, *, status: int | None = None, body: str = "") -> None:
        super().__init__(message)
        self.status = status
        self.body = body


class PullRequestRef(BaseModel):
    model_config = ConfigDict(extra="ignore")

    merged_at: datetime | None = None
    html_url: str | None = None


class SearchIssueItem(BaseModel):
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    title: str
    html_url: str
    number: int | None = None
    state: str | None = None
    pull_request: PullRequestRef | None = None


class SearchResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    total_count: int = 0
    incomplete_results: bool = False
    items: list[SearchIssueItem] = []


class GitHubClient:
    """Minimal search client; one instance per token."""

    def __init__(
        self,
        token: str,
        *,
        base_url: str = GITHUB_API_URL,
        timeout: float | None = None,
    ) -> None:
        if not token:
            raise RuntimeError("A GitHub token is required")
        self._token = token
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout if timeout is not None else http_timeout()

    def _request(self, query: str) -> urllib.request.Request:
        params = urllib.parse.urlencode(
            {"q": query, "per_page": MAX_PER_PAGE, "advanced_search": "true"}
        )
        req = urllib.request.Request(f"{self._base_url}/search/issues?{params}", method="GET")
        req.add_header("Authorization", f"Bearer {self._token}")
        req.add_header("Accept", "application/vnd.github+json")
        req.add_header("X-GitHub-Api-Version", API_VERSION)
        return req

    def search_issues(self, query: str) -> list[SearchIssueItem]:
        """Return the first page of issues/PRs matching ``query``."""

        logger.debug("GitHub search: %s", query)
        try:
            with urllib.request.urlopen(self._request(query), timeout=self._timeout) as resp:
                body = resp.read()
        except urllib.error.HTTPError as e:
            try:
                err_body = e.read().decode("utf-8", errors="replace")
            except OSError:
                err_body = ""
            raise GitHubAPIError(
                f"GitHub API error: {e.code} {e.reason}: {err_body}",
                status=e.code,
                body=err_body,
            ) from e
        except (urllib.error.URLError, TimeoutError) as e:
            raise GitHubAPIError(f"GitHub API request failed: {e}") from e

        try:
            parsed = SearchResponse.model_validate_json(body)
        except (ValidationError, json.JSONDecodeError) as e:
            raise GitHubAPIError("Failed to parse GitHub search response") from e
        return parsed.items


__all__ = [
    "GITHUB_API_URL",
    "GitHubAPIError",
    "GitHubClient",
    "PullRequestRef",
    "SearchIssueItem",
    "SearchResponse",
]
