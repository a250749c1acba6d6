"""Wikidata external record fetcher."""

from __future__ import annotations

import re
from logging import getLogger
from typing import TYPE_CHECKING

from softcat.adapters.provider_support import provider_errors, require_source_kind
from softcat.config.wikidata import get_wikidata_config
from softcat.domain.model import SourceKind

from .client import WikidataClient
from .translator import translate_entity

if TYPE_CHECKING:
    from softcat.config.wikidata import WikidataConfig
    from softcat.domain.model import ExternalRecordData, Source

log = getLogger(__name__)

_ENTITY_ID = re.compile(r"^Q[1-9][0-9]*$")


class WikidataFetcher:
    """Fetch one Wikidata item (``Q…`` id) per external id."""

    def __init__(
        self,
        *,
        config: WikidataConfig | None = None,
        client: WikidataClient | None = None,
    ) -> None:
        self._config = config or get_wikidata_config()
        self._client = client or WikidataClient(config=self._config)

    async def __call__(self, external_id: str, source: Source) -> ExternalRecordData | None:
        require_source_kind(source, SourceKind.WIKIDATA)
        entity_id = external_id.strip().upper()
        if not _ENTITY_ID.match(entity_id):
            log.warning("%s:%s is not a Wikidata item id", source.slug, external_id)
            return None
        with provider_errors(source, external_id):
            snapshot = await self._client.fetch_entity(entity_id)
        if snapshot is None:
            return None
        return translate_entity(
            snapshot.entity, labels=snapshot.labels, languages=self._config.languages
        )
