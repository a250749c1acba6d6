"""HAL search API client."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from softcat.adapters.http_resilience import ResilientClient

from .schema import SOFTWARE_FIELDS, HalSearchResponse

if TYPE_CHECKING:
    from collections.abc import Callable

    from softcat.config.hal import HalConfig
    from softcat.config.http_resilience import ResilienceConfig

    from .schema import HalSoftware

log = getLogger(__name__)


class HalClient:
    def __init__(
        self,
        *,
        config: HalConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient

    async def fetch_software(self, docid: str) -> HalSoftware | None:
        params = {
            "q": f"docid:{docid}",
            "wt": "json",
            "fl": ",".join(SOFTWARE_FIELDS),
        }
        async with self._client_factory(self._resilience) as client:
            response = await client.get("search/", params=params)
        response.raise_for_status()
        body = HalSearchResponse.model_validate(response.json()).response
        if not body.docs:
            log.debug("HAL document %s not found", docid)
            return None
        return body.docs[0]
