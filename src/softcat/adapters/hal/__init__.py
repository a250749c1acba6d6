"""HAL provider adapter."""

from __future__ import annotations

from .fetcher import HalFetcher

__all__ = ["HalFetcher"]
