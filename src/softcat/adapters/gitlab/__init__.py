"""GitLab provider adapter."""

from __future__ import annotations

from .fetcher import GitLabFetcher, project_reference

__all__ = ["GitLabFetcher", "project_reference"]
