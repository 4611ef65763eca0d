"""HipChat client configuration -- token, endpoint, timeout from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from hipchat.models import DEFAULT_BASE_URL


@dataclass
class HipchatConfig:
    """Configuration for connecting to the HipChat API."""

    auth_token: str = field(
        default_factory=lambda: os.environ.get("HIPCHAT_AUTH_TOKEN", "")
    )
    base_url: str = field(
        default_factory=lambda: os.environ.get("HIPCHAT_BASE_URL", DEFAULT_BASE_URL)
    )
    timeout: float = field(
        default_factory=lambda: float(os.environ.get("HIPCHAT_TIMEOUT", "30"))
    )


def get_config() -> HipchatConfig:
    """Return a configuration populated from the current environment."""
    return HipchatConfig()
