"""User agent shared by provider clients."""

from __future__ import annotations

from softcat import __version__

from .env import optional_env_var


def user_agent() -> str:
    contact = optional_env_var("SOFTCAT_CONTACT")
    if contact is None:
        return f"softcat/{__version__}"
    return f"softcat/{__version__} ({contact})"
