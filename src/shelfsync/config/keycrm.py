"""KeyCRM (source catalog) configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var, require_env_vars
from .http_resilience import RateLimit, ResilienceConfig

KEYCRM_BASE_URL = "https://openapi.keycrm.app/v1"
KEYCRM_TIMEOUT_SECONDS = 20.0


@dataclass(frozen=True)
class KeyCrmConfig:
    """Holds KeyCRM API configuration values."""

    api_token: str
    resilience: ResilienceConfig


def get_keycrm_config(*, resilience: ResilienceConfig | None = None) -> KeyCrmConfig:
    values = require_env_vars(("KEYCRM_API_TOKEN",))
    token = values["KEYCRM_API_TOKEN"]
    base_url = (optional_env_var("KEYCRM_BASE_URL") or KEYCRM_BASE_URL).rstrip("/")
    return KeyCrmConfig(
        api_token=token,
        resilience=resilience
        or ResilienceConfig(
            name="keycrm",
            base_url=base_url,
            timeout_seconds=KEYCRM_TIMEOUT_SECONDS,
            # KeyCRM allows 60 requests per minute per token
            ratelimit=RateLimit(max_calls=60, per_seconds=60.0),
            default_headers={
                "Authorization": f"Bearer {token}",
                "Accept": "application/json",
            },
        ),
    )
