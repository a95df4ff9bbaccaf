import io
import logging

import pytest

from personal_scripts.logging_setup import configure_logging, get_logger
from personal_scripts.settings import env_seconds, git_timeout, http_timeout, require_env


def test_configure_logging_attaches_one_handler():
    stream = io.StringIO()
    configure_logging("debug", stream=stream)
    configure_logging("error", stream=io.StringIO())  # second call is a no-op

    get_logger("personal_scripts.budget.pipeline").debug("hello %s", "there")

    pkg = logging.getLogger("personal_scripts")
    assert len(pkg.handlers) == 1
    assert pkg.propagate is False
    assert stream.getvalue() == "DEBUG personal_scripts.budget.pipeline: hello there\n"


def test_level_comes_from_environment(monkeypatch):
    monkeypatch.setenv("PERSONAL_SCRIPTS_LOG_LEVEL", "WARNING")
    stream = io.StringIO()
    configure_logging(stream=stream)

    log = get_logger("personal_scripts.workspace.update")
    log.info("quiet")
    log.warning("loud")

    assert stream.getvalue() == "WARNING personal_scripts.workspace.update: loud\n"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [(None, 30.0), ("", 30.0), ("5", 5.0), ("2.5", 2.5), ("abc", 30.0), ("0", 30.0), ("-1", 30.0)],
)
def test_env_seconds(monkeypatch, raw, expected):
    if raw is not None:
        monkeypatch.setenv("SOME_TIMEOUT", raw)
    else:
        monkeypatch.delenv("SOME_TIMEOUT", raising=False)
    assert env_seconds("SOME_TIMEOUT", 30.0) == expected


def test_timeout_defaults():
    assert git_timeout() == 120.0
    assert http_timeout() == 30.0


def test_require_env(monkeypatch):
    with pytest.raises(RuntimeError, match="GITHUB_TOKEN"):
        require_env("GITHUB_TOKEN")
    monkeypatch.setenv("GITHUB_TOKEN", "abc")
    assert require_env("GITHUB_TOKEN") == "abc"


def test_unknown_level_name_falls_back_to_info():
    pkg = configure_logging("chatty", stream=io.StringIO())
    assert pkg.name == "personal_scripts"
    assert pkg.level == logging.INFO


def test_get_logger_is_silent_until_configured():
    get_logger("personal_scripts.github.client")
    handlers = logging.getLogger("personal_scripts").handlers
    assert [type(h) for h in handlers] == [logging.NullHandler]
