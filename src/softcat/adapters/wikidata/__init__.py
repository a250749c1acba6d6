"""Wikidata provider adapter."""

from __future__ import annotations

from .fetcher import WikidataFetcher

__all__ = ["WikidataFetcher"]
