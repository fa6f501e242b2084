"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

from shelfsync.adapters.gateway import RetryingHttpGateway
from shelfsync.adapters.http_resilience import ResilientClient
from shelfsync.adapters.keycrm import KeyCrmCatalog
from shelfsync.adapters.strapi import StrapiStore
from shelfsync.config import get_keycrm_config, get_strapi_config, get_sync_config
from shelfsync.domain.reconciliation import CatalogSynchronizer, SyncScope

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from shelfsync.adapters.http_resilience import ClientFactory
    from shelfsync.config import KeyCrmConfig, StrapiConfig, SyncConfig
    from shelfsync.domain.reconciliation import SyncSummary

    Sleep = Callable[[float], Awaitable[None]]

log = getLogger(__name__)


def sync_catalog(
    *,
    scope: SyncScope = SyncScope.ALL,
    sync_config: SyncConfig | None = None,
    keycrm_config: KeyCrmConfig | None = None,
    strapi_config: StrapiConfig | None = None,
    client_factory: ClientFactory = ResilientClient,
    sleep: Sleep = asyncio.sleep,
) -> SyncSummary:
    """Synchronise the KeyCRM catalog into Strapi using the configured adapters."""

    effective_sync = sync_config or get_sync_config()
    effective_keycrm = keycrm_config or get_keycrm_config()
    effective_strapi = strapi_config or get_strapi_config()
    log.info(
        "Starting catalog sync: scope=%s, store=%s, zero_stock=%s, relation_offset=%s",
        scope,
        effective_strapi.base_url,
        effective_sync.zero_stock_policy,
        effective_sync.relation_id_offset,
    )

    summary = asyncio.run(
        _sync_catalog_async(
            scope=scope,
            sync_config=effective_sync,
            keycrm_config=effective_keycrm,
            strapi_config=effective_strapi,
            client_factory=client_factory,
            sleep=sleep,
        )
    )

    log.info(
        "Finished catalog sync: created=%s, failed=%s",
        summary.total_created,
        summary.total_failed,
    )
    return summary


async def _sync_catalog_async(
    *,
    scope: SyncScope,
    sync_config: SyncConfig,
    keycrm_config: KeyCrmConfig,
    strapi_config: StrapiConfig,
    client_factory: ClientFactory,
    sleep: Sleep,
) -> SyncSummary:
    async with (
        client_factory(keycrm_config.resilience) as source_client,
        client_factory(strapi_config.resilience) as store_client,
    ):
        source = KeyCrmCatalog(
            RetryingHttpGateway(source_client, sleep=sleep),
            page_size=sync_config.listing_page_size,
        )
        store = StrapiStore(RetryingHttpGateway(store_client, sleep=sleep))
        synchronizer = CatalogSynchronizer(
            source=source, store=store, config=sync_config, sleep=sleep
        )
        return await synchronizer.run(scope)
