"""GitHub provider adapter."""

from __future__ import annotations

from .fetcher import GitHubFetcher, check_github_source, parse_repository

__all__ = ["GitHubFetcher", "check_github_source", "parse_repository"]
