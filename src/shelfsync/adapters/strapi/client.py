"""Destination store backed by the Strapi REST API."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Final

from pydantic import ValidationError

from shelfsync.adapters.gateway import Success, describe
from shelfsync.config.http_resilience import CREATE_RETRY, ENTITY_RETRY
from shelfsync.domain.errors import CreateFailedError, LookupFailedError
from shelfsync.domain.model import EntityKind
from shelfsync.domain.ports import StoredRecord

from .schema import CollectionResponse, EntryResponse

if TYPE_CHECKING:
    from collections.abc import Mapping

    from shelfsync.adapters.gateway import RetryingHttpGateway
    from shelfsync.config.http_resilience import RetryPolicy

log = getLogger(__name__)

COLLECTIONS: Final[dict[EntityKind, str]] = {
    EntityKind.CATEGORY: "categories",
    EntityKind.PRODUCT: "products",
    EntityKind.VARIANT: "product-articles",
    EntityKind.STOCK: "product-leftovers",
    EntityKind.SIZE: "dictionary-sizes",
    EntityKind.COLOR: "dictionary-colors",
    EntityKind.STORE: "dictionary-stores",
}


def collection_path(kind: EntityKind) -> str:
    return f"/api/{COLLECTIONS[kind]}"


class StrapiStore:
    """Filtered lookups and ``{data: ...}`` creates against Strapi collections."""

    def __init__(
        self,
        gateway: RetryingHttpGateway,
        *,
        lookup_retry: RetryPolicy = ENTITY_RETRY,
        create_retry: RetryPolicy = CREATE_RETRY,
    ) -> None:
        self._gateway = gateway
        self._lookup_retry = lookup_retry
        self._create_retry = create_retry

    async def find_first(
        self, kind: EntityKind, field_name: str, value: str | int
    ) -> StoredRecord | None:
        outcome = await self._gateway.execute(
            "GET",
            collection_path(kind),
            params={f"filters[{field_name}][$eq]": value},
            policy=self._lookup_retry,
        )
        if not isinstance(outcome, Success):
            raise LookupFailedError(kind, value, describe(outcome))
        try:
            response = CollectionResponse.model_validate(outcome.payload)
        except ValidationError as exc:
            raise LookupFailedError(kind, value, f"unexpected response: {exc}") from exc

        if not response.data:
            return None
        if len(response.data) > 1:
            log.warning(
                "%d %s records share %s=%r; using id %s",
                len(response.data),
                kind,
                field_name,
                value,
                response.data[0].id,
            )
        first = response.data[0]
        return StoredRecord(id=first.id, attributes=first.field_values())

    async def create(self, kind: EntityKind, attributes: Mapping[str, object]) -> StoredRecord:
        key = attributes.get("keycrm_id", attributes.get("name"))
        outcome = await self._gateway.execute(
            "POST",
            collection_path(kind),
            {"data": dict(attributes)},
            policy=self._create_retry,
        )
        if not isinstance(outcome, Success):
            raise CreateFailedError(kind, key, describe(outcome))
        try:
            response = EntryResponse.model_validate(outcome.payload)
        except ValidationError as exc:
            raise CreateFailedError(kind, key, f"unexpected response: {exc}") from exc
        return StoredRecord(id=response.data.id, attributes=response.data.field_values())
