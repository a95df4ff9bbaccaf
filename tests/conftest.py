"""Pytest configuration for test isolation.

The console tools read configuration from the environment and from a ``.env``
in the working directory, write default output files into the working
directory, and configure the package logger once per process. Each test gets
its own working directory, a clean environment for the tool variables, and a
fresh logging setup so handlers never point at a stream captured by an earlier
test.
"""

from __future__ import annotations

import textwrap
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from personal_scripts.logging_setup import reset_logging

_TOOL_ENV_VARS = (
    "GITHUB_TOKEN",
    "PERSONAL_SCRIPTS_LOG_LEVEL",
    "PERSONAL_SCRIPTS_GIT_TIMEOUT",
    "PERSONAL_SCRIPTS_HTTP_TIMEOUT",
)


@pytest.fixture(autouse=True)
def _isolate_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    workdir = tmp_path / "cwd"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    for var in _TOOL_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    reset_logging()
    yield
    reset_logging()


def dedent(s: str) -> str:
    # Keep internal newlines, normalize indentation for readability.
    return textwrap.dedent(s).lstrip("\n")


@pytest.fixture
def write_csv(tmp_path: Path) -> Callable[..., Path]:
    """Write dedented CSV text to ``<tmp>/exports/<name>`` and return the path."""

    exports = tmp_path / "exports"
    exports.mkdir(exist_ok=True)

    def _write(name: str, text: str) -> Path:
        path = exports / name
        path.write_text(dedent(text), encoding="utf-8")
        return path

    return _write
