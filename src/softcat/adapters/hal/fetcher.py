"""HAL external record fetcher."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from softcat.adapters.provider_support import provider_errors, require_source_kind
from softcat.config.hal import get_hal_config
from softcat.domain.model import SourceKind

from .client import HalClient
from .translator import translate_software

if TYPE_CHECKING:
    from softcat.config.hal import HalConfig
    from softcat.domain.model import ExternalRecordData, Source

log = getLogger(__name__)


class HalFetcher:
    """Fetch one HAL software notice per external id (the numeric ``docid``)."""

    def __init__(
        self,
        *,
        config: HalConfig | None = None,
        client: HalClient | None = None,
    ) -> None:
        self._client = client or HalClient(config=config or get_hal_config())

    async def __call__(self, external_id: str, source: Source) -> ExternalRecordData | None:
        require_source_kind(source, SourceKind.HAL)
        docid = external_id.strip()
        if not docid.isdigit():
            log.warning("%s:%s is not a HAL docid", source.slug, external_id)
            return None
        with provider_errors(source, external_id):
            software = await self._client.fetch_software(docid)
        if software is None:
            return None
        return translate_software(software)
