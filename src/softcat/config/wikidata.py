"""Wikidata configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .http_resilience import ResilienceConfig, provider_resilience
from .user_agent import user_agent

WIKIDATA_SOURCE_URL = "https://www.wikidata.org/"
WIKIDATA_ENTITY_DATA_PATH = "wiki/Special:EntityData/"
WIKIDATA_API_PATH = "w/api.php"
COMMONS_FILE_URL = "https://commons.wikimedia.org/wiki/Special:FilePath/"


@dataclass(frozen=True, slots=True)
class WikidataConfig:
    resilience: ResilienceConfig
    languages: tuple[str, ...] = ("en", "fr")


def get_wikidata_config() -> WikidataConfig:
    # Wikimedia asks API clients for a descriptive User-Agent with contact details.
    return WikidataConfig(
        resilience=provider_resilience(
            "wikidata",
            WIKIDATA_SOURCE_URL,
            calls_per_second=5,
            headers={"User-Agent": user_agent()},
        )
    )
