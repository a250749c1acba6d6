"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env_var, optional_int_env_var
from .errors import ConfigurationError
from .github import GITHUB_SOURCE_URL, GitHubConfig, get_github_config
from .gitlab import GitLabConfig, get_gitlab_config
from .hal import HAL_SOURCE_URL, HalConfig, get_hal_config
from .http_resilience import (
    CacheConfig,
    RateLimit,
    ResilienceConfig,
    RetryPolicy,
    get_cache_config,
    provider_resilience,
)
from .logging import configure_logging
from .refresh import RefreshConfig, get_refresh_config
from .storage import StorageConfig, get_database_uri, get_http_cache_path, get_storage_config
from .user_agent import user_agent
from .wikidata import WIKIDATA_SOURCE_URL, WikidataConfig, get_wikidata_config

__all__ = [
    "GITHUB_SOURCE_URL",
    "HAL_SOURCE_URL",
    "WIKIDATA_SOURCE_URL",
    "CacheConfig",
    "ConfigurationError",
    "GitHubConfig",
    "GitLabConfig",
    "HalConfig",
    "RateLimit",
    "RefreshConfig",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "WikidataConfig",
    "configure_logging",
    "get_cache_config",
    "get_database_uri",
    "get_github_config",
    "get_gitlab_config",
    "get_hal_config",
    "get_http_cache_path",
    "get_refresh_config",
    "get_storage_config",
    "get_wikidata_config",
    "optional_env_var",
    "optional_int_env_var",
    "provider_resilience",
    "user_agent",
]
