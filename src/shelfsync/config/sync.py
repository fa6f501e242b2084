"""Synchronization defaults for catalog runs."""

from __future__ import annotations

from dataclasses import dataclass

from shelfsync.domain.model import ZeroStockPolicy

from .env import optional_env_var, optional_int_env_var
from .errors import ConfigurationError

DEFAULT_BATCH_SIZE = 10
DEFAULT_BATCH_PAUSE_SECONDS = 3.0
DEFAULT_LISTING_PAGE_SIZE = 50
DEFAULT_VARIANT_PAGE_SIZE = 50
DEFAULT_CURRENCY_ID = 1
DEFAULT_RELATION_ID_OFFSET = 1
SIZE_PROPERTY_LABEL = "розмір"
COLOR_PROPERTY_LABEL = "колір"


@dataclass(frozen=True, slots=True)
class SyncConfig:
    batch_size: int = DEFAULT_BATCH_SIZE
    batch_pause_seconds: float = DEFAULT_BATCH_PAUSE_SECONDS
    listing_page_size: int = DEFAULT_LISTING_PAGE_SIZE
    variant_page_size: int = DEFAULT_VARIANT_PAGE_SIZE
    currency_id: int = DEFAULT_CURRENCY_ID
    size_label: str = SIZE_PROPERTY_LABEL
    color_label: str = COLOR_PROPERTY_LABEL
    zero_stock_policy: ZeroStockPolicy = ZeroStockPolicy.SKIP
    # The existing store schema links relations by (returned id - 1).
    relation_id_offset: int = DEFAULT_RELATION_ID_OFFSET


def parse_zero_stock_policy(value: str) -> ZeroStockPolicy:
    try:
        return ZeroStockPolicy(value.strip().lower())
    except ValueError as exc:
        allowed = ", ".join(policy.value for policy in ZeroStockPolicy)
        raise ConfigurationError(
            f"Unknown zero-stock policy {value!r} (expected one of: {allowed})"
        ) from exc


def get_sync_config() -> SyncConfig:
    raw_policy = optional_env_var("SHELFSYNC_ZERO_STOCK_POLICY")
    offset = optional_int_env_var("SHELFSYNC_RELATION_ID_OFFSET", DEFAULT_RELATION_ID_OFFSET)
    if offset < 0:
        raise ConfigurationError("SHELFSYNC_RELATION_ID_OFFSET must be non-negative")
    return SyncConfig(
        zero_stock_policy=(
            parse_zero_stock_policy(raw_policy) if raw_policy else ZeroStockPolicy.SKIP
        ),
        relation_id_offset=offset,
    )
