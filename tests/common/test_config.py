from __future__ import annotations

import logging

import pytest

from softcat.config import (
    ConfigurationError,
    RefreshConfig,
    configure_logging,
    get_cache_config,
    get_github_config,
    get_gitlab_config,
    get_hal_config,
    get_refresh_config,
    optional_env_var,
    optional_int_env_var,
    user_agent,
)


def test_optional_env_var_treats_blank_as_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "   ")

    assert optional_env_var("EXAMPLE_VAR") is None


def test_optional_int_env_var_rejects_garbage(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_INT", "soon")

    with pytest.raises(ConfigurationError) as exc:
        optional_int_env_var("EXAMPLE_INT")

    assert "EXAMPLE_INT" in str(exc.value)


def test_refresh_config_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SOFTCAT_REFRESH_STALENESS_MINUTES", "90")
    monkeypatch.setenv("SOFTCAT_REFRESH_CONCURRENCY", "2")

    config = get_refresh_config()

    assert config.staleness_minutes == 90
    assert config.concurrency == 2


def test_refresh_config_defaults_to_refreshing_everything(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("SOFTCAT_REFRESH_STALENESS_MINUTES", raising=False)
    monkeypatch.delenv("SOFTCAT_REFRESH_CONCURRENCY", raising=False)

    assert get_refresh_config().staleness_minutes is None


@pytest.mark.parametrize(
    "kwargs",
    [
        {"staleness_minutes": -1},
        {"concurrency": 0},
        {"fetch_timeout_seconds": 0},
    ],
)
def test_refresh_config_validates_values(kwargs: dict[str, float]) -> None:
    with pytest.raises(ConfigurationError):
        RefreshConfig(**kwargs)  # type: ignore[arg-type]


def test_github_token_becomes_bearer_header(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GITHUB_TOKEN", "secret")

    headers = get_github_config().resilience.default_headers

    assert headers is not None
    assert headers["Authorization"] == "Bearer secret"


def test_github_without_token_is_anonymous(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)

    config = get_github_config()

    assert config.token is None
    assert config.resilience.default_headers is not None
    assert "Authorization" not in config.resilience.default_headers


def test_gitlab_api_url_follows_instance(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("GITLAB_TOKEN", raising=False)

    config = get_gitlab_config(instance_url="https://framagit.org")

    assert config.resilience.base_url == "https://framagit.org/api/v4/"


def test_user_agent_includes_contact(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SOFTCAT_CONTACT", "ops@example.org")

    assert user_agent().endswith("(ops@example.org)")


@pytest.mark.parametrize(
    ("value", "backend"),
    [(None, "memory"), ("SQLite", "sqlite"), ("memory", "memory")],
)
def test_http_cache_backend_from_environment(
    monkeypatch: pytest.MonkeyPatch, value: str | None, backend: str
) -> None:
    if value is None:
        monkeypatch.delenv("SOFTCAT_HTTP_CACHE", raising=False)
    else:
        monkeypatch.setenv("SOFTCAT_HTTP_CACHE", value)

    config = get_cache_config()

    assert config is not None
    assert config.backend == backend


def test_http_cache_can_be_switched_off(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SOFTCAT_HTTP_CACHE", "off")

    assert get_hal_config().resilience.cache is None


def test_http_cache_rejects_unknown_backend(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SOFTCAT_HTTP_CACHE", "redis")

    with pytest.raises(ConfigurationError):
        get_cache_config()


def test_configure_logging_quiets_request_logs() -> None:
    configure_logging(force=True)
    assert logging.getLogger("httpx").level == logging.WARNING

    configure_logging(level=logging.DEBUG, force=True)
    assert logging.getLogger("httpx").level == logging.DEBUG
