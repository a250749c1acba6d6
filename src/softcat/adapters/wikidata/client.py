"""Wikidata entity data client."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from softcat.adapters.http_resilience import ResilientClient
from softcat.adapters.provider_support import ProviderPayloadError
from softcat.config.wikidata import WIKIDATA_API_PATH, WIKIDATA_ENTITY_DATA_PATH

from .schema import WikidataEntityDocument, WikidataLabelsResponse, WikidataSnapshot

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from softcat.config.http_resilience import ResilienceConfig
    from softcat.config.wikidata import WikidataConfig

    from .schema import WikidataEntity

log = getLogger(__name__)

# Claims whose values are other entities and need a label.
LABELLED_PROPERTIES = ("P275", "P178", "P277", "P306")
# wbgetentities accepts at most 50 ids per call.
MAX_LABEL_IDS = 50


class WikidataAPIError(ProviderPayloadError):
    """Raised when Wikidata returns an unexpected response."""


def referenced_entity_ids(entity: WikidataEntity, properties: Iterable[str]) -> list[str]:
    ids: list[str] = []
    for prop in properties:
        for statement in entity.claims.get(prop, []):
            datavalue = statement.mainsnak.datavalue
            if datavalue is None or datavalue.type != "wikibase-entityid":
                continue
            value = datavalue.value
            entity_id = value.get("id") if isinstance(value, dict) else None
            if isinstance(entity_id, str) and entity_id not in ids:
                ids.append(entity_id)
    return ids


class WikidataClient:
    def __init__(
        self,
        *,
        config: WikidataConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient

    async def fetch_entity(self, entity_id: str) -> WikidataSnapshot | None:
        path = f"{WIKIDATA_ENTITY_DATA_PATH}{entity_id}.json"
        async with self._client_factory(self._resilience) as client:
            response = await client.get(path)
            if response.status_code == 404:
                log.debug("Wikidata entity %s not found", entity_id)
                return None
            response.raise_for_status()
            document = WikidataEntityDocument.model_validate(response.json())
            if not document.entities:
                raise WikidataAPIError(f"Wikidata returned no entity for {entity_id}")
            # Redirected ids come back under their target id.
            entity = document.entities.get(entity_id) or next(iter(document.entities.values()))

            ids = referenced_entity_ids(entity, LABELLED_PROPERTIES)[:MAX_LABEL_IDS]
            labels: dict[str, dict[str, str]] = {}
            if ids:
                response = await client.get(
                    WIKIDATA_API_PATH,
                    params={
                        "action": "wbgetentities",
                        "ids": "|".join(ids),
                        "props": "labels",
                        "languages": "|".join(self._config.languages),
                        "format": "json",
                    },
                )
                response.raise_for_status()
                labelled = WikidataLabelsResponse.model_validate(response.json())
                labels = {
                    key: {language: text.value for language, text in item.labels.items()}
                    for key, item in labelled.entities.items()
                }

        return WikidataSnapshot(entity=entity, labels=labels)
