"""GitLab configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var
from .http_resilience import ResilienceConfig, provider_resilience
from .user_agent import user_agent


@dataclass(frozen=True, slots=True)
class GitLabConfig:
    """GitLab is self-hostable, so the API base URL comes from the source."""

    resilience: ResilienceConfig
    token: str | None = None


def get_gitlab_config(*, instance_url: str) -> GitLabConfig:
    token = optional_env_var("GITLAB_TOKEN")
    headers = {"User-Agent": user_agent()}
    if token is not None:
        headers["PRIVATE-TOKEN"] = token
    base_url = instance_url if instance_url.endswith("/") else f"{instance_url}/"
    return GitLabConfig(
        token=token,
        resilience=provider_resilience(
            "gitlab", f"{base_url}api/v4/", calls_per_second=5, headers=headers
        ),
    )
