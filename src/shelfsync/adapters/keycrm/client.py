"""Source catalog backed by the KeyCRM HTTP API."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import BaseModel, ValidationError

from shelfsync.adapters.gateway import Success, describe
from shelfsync.config.http_resilience import ENTITY_RETRY, LISTING_RETRY
from shelfsync.config.sync import DEFAULT_LISTING_PAGE_SIZE
from shelfsync.domain.errors import SourceUnavailableError
from shelfsync.domain.model import SourceListing

from .schema import (
    CategoryPayload,
    ListResponse,
    OfferPayload,
    ProductPayload,
    StockPayload,
)
from .translator import to_category, to_product, to_stock_entry, to_variant

if TYPE_CHECKING:
    from collections.abc import Mapping

    from shelfsync.adapters.gateway import RetryingHttpGateway
    from shelfsync.config.http_resilience import RetryPolicy
    from shelfsync.domain.model import SourceCategory, SourceProduct, SourceVariant, StockEntry

log = getLogger(__name__)

CATEGORIES_PATH = "products/categories"
PRODUCTS_PATH = "products"
OFFERS_PATH = "offers"
STOCKS_PATH = "offers/stocks"


class KeyCrmCatalog:
    """Read categories, products, offers and stock balances from KeyCRM."""

    def __init__(
        self,
        gateway: RetryingHttpGateway,
        *,
        page_size: int = DEFAULT_LISTING_PAGE_SIZE,
        listing_retry: RetryPolicy = LISTING_RETRY,
        entity_retry: RetryPolicy = ENTITY_RETRY,
    ) -> None:
        self._gateway = gateway
        self._page_size = page_size
        self._listing_retry = listing_retry
        self._entity_retry = entity_retry

    async def list_categories(self) -> SourceListing[SourceCategory]:
        payloads, rejected = await self._list_all(CATEGORIES_PATH, CategoryPayload)
        return SourceListing([to_category(payload) for payload in payloads], rejected)

    async def list_products(self) -> SourceListing[SourceProduct]:
        payloads, rejected = await self._list_all(PRODUCTS_PATH, ProductPayload)
        return SourceListing([to_product(payload) for payload in payloads], rejected)

    async def list_variants(
        self, product_id: int, *, limit: int = 50
    ) -> SourceListing[SourceVariant] | None:
        response = await self._get_entity_listing(
            OFFERS_PATH, {"filter[product_id]": product_id, "limit": limit}
        )
        if response is None:
            return None
        offers, rejected = _validate_items(response, OfferPayload, OFFERS_PATH)
        return SourceListing([to_variant(payload) for payload in offers], rejected)

    async def get_stock(self, variant_id: int) -> SourceListing[StockEntry] | None:
        response = await self._get_entity_listing(
            STOCKS_PATH, {"filter[offers_id]": variant_id, "filter[details]": "true"}
        )
        if response is None:
            return None
        rows, rejected = _validate_items(response, StockPayload, STOCKS_PATH)
        row = next((item for item in rows if item.id == variant_id), rows[0] if rows else None)
        if row is None:
            return SourceListing(rejected=rejected)
        return SourceListing([to_stock_entry(warehouse) for warehouse in row.warehouse], rejected)

    async def _list_all[ModelT: BaseModel](
        self, path: str, model: type[ModelT]
    ) -> tuple[list[ModelT], int]:
        items: list[ModelT] = []
        rejected = 0
        page = 1
        while True:
            outcome = await self._gateway.execute(
                "GET",
                path,
                params={"limit": self._page_size, "page": page},
                policy=self._listing_retry,
            )
            if not isinstance(outcome, Success):
                raise SourceUnavailableError(f"Listing {path} failed: {describe(outcome)}")
            try:
                response = ListResponse.model_validate(outcome.payload)
            except ValidationError as exc:
                raise SourceUnavailableError(f"Unexpected KeyCRM payload for {path}") from exc

            page_items, page_rejected = _validate_items(response, model, path)
            items.extend(page_items)
            rejected += page_rejected
            if response.last_page is None or page >= response.last_page:
                return items, rejected
            page += 1

    async def _get_entity_listing(
        self, path: str, params: Mapping[str, str | int]
    ) -> ListResponse | None:
        outcome = await self._gateway.execute("GET", path, params=params, policy=self._entity_retry)
        if not isinstance(outcome, Success):
            return None
        try:
            return ListResponse.model_validate(outcome.payload)
        except ValidationError as exc:
            log.warning("Unexpected KeyCRM payload for %s: %s", path, exc)
            return None


def _validate_items[ModelT: BaseModel](
    response: ListResponse, model: type[ModelT], path: str
) -> tuple[list[ModelT], int]:
    """Validate listing rows one by one; return the valid ones and the reject count."""

    items: list[ModelT] = []
    rejected = 0
    for raw in response.data:
        try:
            items.append(model.model_validate(raw))
        except ValidationError as exc:
            rejected += 1
            log.warning("Skipping malformed %s item %r: %s", path, raw.get("id"), exc)
    return items, rejected
