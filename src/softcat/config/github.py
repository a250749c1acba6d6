"""GitHub configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var
from .http_resilience import ResilienceConfig, provider_resilience
from .user_agent import user_agent

GITHUB_SOURCE_URL = "https://github.com/"
GITHUB_API_URL = "https://api.github.com/"


@dataclass(frozen=True, slots=True)
class GitHubConfig:
    """Holds GitHub API configuration values."""

    resilience: ResilienceConfig
    token: str | None = None


def get_github_config() -> GitHubConfig:
    # Only raises the API rate limit; anonymous access works for public repositories.
    token = optional_env_var("GITHUB_TOKEN")
    headers = {
        "Accept": "application/vnd.github+json",
        "User-Agent": user_agent(),
    }
    if token is not None:
        headers["Authorization"] = f"Bearer {token}"
    return GitHubConfig(
        token=token,
        resilience=provider_resilience(
            "github", GITHUB_API_URL, calls_per_second=10, headers=headers
        ),
    )
