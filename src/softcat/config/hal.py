"""HAL (open archive) configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .http_resilience import ResilienceConfig, provider_resilience
from .user_agent import user_agent

HAL_SOURCE_URL = "https://hal.science/"
HAL_API_URL = "https://api.archives-ouvertes.fr/"


@dataclass(frozen=True, slots=True)
class HalConfig:
    resilience: ResilienceConfig


def get_hal_config() -> HalConfig:
    return HalConfig(
        resilience=provider_resilience(
            "hal", HAL_API_URL, calls_per_second=4, headers={"User-Agent": user_agent()}
        )
    )
