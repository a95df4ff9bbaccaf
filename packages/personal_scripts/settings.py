"""Environment-driven settings shared by the console tools.

Each entry point loads a local ``.env`` (``override=False``) before calling
these helpers, so values can come from either the process environment or the
file.
"""

from __future__ import annotations

import os

GIT_TIMEOUT_ENV = "PERSONAL_SCRIPTS_GIT_TIMEOUT"
HTTP_TIMEOUT_ENV = "PERSONAL_SCRIPTS_HTTP_TIMEOUT"

DEFAULT_GIT_TIMEOUT = 120.0
DEFAULT_HTTP_TIMEOUT = 30.0


def env_seconds(name: str, default: float) -> float:
    """Return a positive number of seconds from ``name`` or ``default``.

    Missing, non-numeric and non-positive values all resolve to ``default``.
    """

    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def git_timeout() -> float:
    return env_seconds(GIT_TIMEOUT_ENV, DEFAULT_GIT_TIMEOUT)


def http_timeout() -> float:
    return env_seconds(HTTP_TIMEOUT_ENV, DEFAULT_HTTP_TIMEOUT)


def require_env(key: str) -> str:
    """Return ``os.environ[key]`` or raise ``RuntimeError`` when unset/empty."""

    value = os.getenv(key)
    if not value:
        raise RuntimeError(f"Required environment variable missing: {key}")
    return value


__all__ = [
    "DEFAULT_GIT_TIMEOUT",
    "DEFAULT_HTTP_TIMEOUT",
    "env_seconds",
    "git_timeout",
    "http_timeout",
    "require_env",
]
