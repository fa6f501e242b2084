"""Strapi (destination store) configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var, require_env_vars
from .http_resilience import ResilienceConfig

STRAPI_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True)
class StrapiConfig:
    """Holds Strapi API configuration values."""

    base_url: str
    api_token: str | None
    resilience: ResilienceConfig


def get_strapi_config(*, resilience: ResilienceConfig | None = None) -> StrapiConfig:
    values = require_env_vars(("STRAPI_BASE_URL",))
    base_url = values["STRAPI_BASE_URL"].rstrip("/")
    token = optional_env_var("STRAPI_API_TOKEN")

    headers = {"Accept": "application/json"}
    if token:
        headers["Authorization"] = f"Bearer {token}"

    return StrapiConfig(
        base_url=base_url,
        api_token=token,
        resilience=resilience
        or ResilienceConfig(
            name="strapi",
            base_url=base_url,
            timeout_seconds=STRAPI_TIMEOUT_SECONDS,
            default_headers=headers,
        ),
    )
