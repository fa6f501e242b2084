"""In-memory fakes for the catalog source, the content store, and their HTTP APIs."""

from __future__ import annotations

import itertools
import json
import math
from collections import defaultdict
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import httpx

from shelfsync.domain.errors import CreateFailedError, LookupFailedError, SourceUnavailableError
from shelfsync.domain.model import SourceListing
from shelfsync.domain.ports import StoredRecord

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from shelfsync.domain.model import (
        EntityKind,
        SourceCategory,
        SourceProduct,
        SourceVariant,
        StockEntry,
    )


class RecordingSleep:
    """Async sleep replacement that records the requested delays and returns at once."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


# ---------------------------------------------------------------------------
# Domain-level fakes (port implementations)
# ---------------------------------------------------------------------------


@dataclass
class FakeSourceCatalog:
    """Source catalog serving fixed snapshots."""

    categories: list[SourceCategory] = field(default_factory=list)
    products: list[SourceProduct] = field(default_factory=list)
    variants: dict[int, list[SourceVariant]] = field(default_factory=dict)
    stock: dict[int, list[StockEntry]] = field(default_factory=dict)
    listing_unavailable: bool = False
    variants_unavailable: set[int] = field(default_factory=set)
    stock_unavailable: set[int] = field(default_factory=set)
    # malformed rows reported alongside each listing
    rejected_categories: int = 0
    rejected_products: int = 0
    rejected_variants: dict[int, int] = field(default_factory=dict)
    rejected_stock: dict[int, int] = field(default_factory=dict)

    async def list_categories(self) -> SourceListing[SourceCategory]:
        if self.listing_unavailable:
            raise SourceUnavailableError("Listing products/categories failed: HTTP 503")
        return SourceListing(list(self.categories), self.rejected_categories)

    async def list_products(self) -> SourceListing[SourceProduct]:
        if self.listing_unavailable:
            raise SourceUnavailableError("Listing products failed: HTTP 503")
        return SourceListing(list(self.products), self.rejected_products)

    async def list_variants(
        self, product_id: int, *, limit: int = 50
    ) -> SourceListing[SourceVariant] | None:
        if product_id in self.variants_unavailable:
            return None
        return SourceListing(
            list(self.variants.get(product_id, []))[:limit],
            self.rejected_variants.get(product_id, 0),
        )

    async def get_stock(self, variant_id: int) -> SourceListing[StockEntry] | None:
        if variant_id in self.stock_unavailable:
            return None
        return SourceListing(
            list(self.stock.get(variant_id, [])), self.rejected_stock.get(variant_id, 0)
        )


class InMemoryStore:
    """Destination store keeping records per kind; ids start at 11 within each kind."""

    def __init__(self) -> None:
        self.records: dict[EntityKind, list[StoredRecord]] = defaultdict(list)
        self.creates: list[tuple[EntityKind, dict[str, object]]] = []
        self.lookups: list[tuple[EntityKind, str, str | int]] = []
        self.failing_creates: set[EntityKind] = set()
        self.failing_lookups: set[EntityKind] = set()
        self.failing_external_ids: set[object] = set()
        self._ids: dict[EntityKind, Iterator[int]] = defaultdict(lambda: itertools.count(11))

    def seed(self, kind: EntityKind, **attributes: object) -> StoredRecord:
        record = StoredRecord(id=next(self._ids[kind]), attributes=dict(attributes))
        self.records[kind].append(record)
        return record

    def created(self, kind: EntityKind) -> list[dict[str, object]]:
        return [attributes for created_kind, attributes in self.creates if created_kind is kind]

    async def find_first(
        self, kind: EntityKind, field_name: str, value: str | int
    ) -> StoredRecord | None:
        self.lookups.append((kind, field_name, value))
        if kind in self.failing_lookups:
            raise LookupFailedError(kind, value, "HTTP 503")
        for record in self.records[kind]:
            if record.attributes.get(field_name) == value:
                return record
        return None

    async def create(self, kind: EntityKind, attributes: Mapping[str, object]) -> StoredRecord:
        external_id = attributes.get("keycrm_id")
        if kind in self.failing_creates or external_id in self.failing_external_ids:
            raise CreateFailedError(kind, external_id, "HTTP 400")
        self.creates.append((kind, dict(attributes)))
        return self.seed(kind, **attributes)


# ---------------------------------------------------------------------------
# HTTP-level fakes (httpx.MockTransport handlers)
# ---------------------------------------------------------------------------


class FakeStrapiServer:
    """Strapi REST API over in-memory collections.

    Supports ``filters[<field>][$eq]`` listings and ``POST {data: {...}}`` creates.
    Responses use the v4 ``{id, attributes}`` shape unless ``flat`` is set.
    Scripted responses for a ``(method, collection)`` pair are served first.
    """

    def __init__(self, *, flat: bool = False) -> None:
        self.flat = flat
        self.collections: dict[str, list[dict[str, object]]] = defaultdict(list)
        self.requests: list[httpx.Request] = []
        self.scripted: dict[tuple[str, str], list[httpx.Response]] = defaultdict(list)
        self._ids: dict[str, Iterator[int]] = defaultdict(lambda: itertools.count(1))

    def script(self, method: str, collection: str, *responses: httpx.Response) -> None:
        self.scripted[(method, collection)].extend(responses)

    def seed(self, collection: str, /, **attributes: object) -> int:
        record_id = next(self._ids[collection])
        self.collections[collection].append({"id": record_id, **attributes})
        return record_id

    def records(self, collection: str) -> list[dict[str, object]]:
        return self.collections[collection]

    def posts(self, collection: str | None = None) -> list[httpx.Request]:
        return [
            request
            for request in self.requests
            if request.method == "POST"
            and (collection is None or request.url.path == f"/api/{collection}")
        ]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        collection = request.url.path.removeprefix("/api/")
        queued = self.scripted.get((request.method, collection))
        if queued:
            return queued.pop(0)
        if request.method == "GET":
            return self._list(collection, request.url.params)
        if request.method == "POST":
            body = json.loads(request.content)
            self.seed(collection, **body["data"])
            return httpx.Response(200, json={"data": self._render(self.records(collection)[-1])})
        return httpx.Response(405)

    def _list(self, collection: str, params: httpx.QueryParams) -> httpx.Response:
        filters: dict[str, str] = {}
        for key, value in params.multi_items():
            if key.startswith("filters[") and key.endswith("][$eq]"):
                filters[key.removeprefix("filters[").removesuffix("][$eq]")] = value
        matches = [
            record
            for record in self.records(collection)
            if all(str(record.get(name)) == value for name, value in filters.items())
        ]
        return httpx.Response(
            200,
            json={
                "data": [self._render(record) for record in matches],
                "meta": {"pagination": {"total": len(matches)}},
            },
        )

    def _render(self, record: Mapping[str, object]) -> dict[str, object]:
        attributes = {key: value for key, value in record.items() if key != "id"}
        if self.flat:
            return {"id": record["id"], "documentId": f"doc-{record['id']}", **attributes}
        return {"id": record["id"], "attributes": attributes}


class FakeKeyCrmServer:
    """KeyCRM open API serving paginated catalog listings, offers and stock rows."""

    def __init__(self) -> None:
        self.categories: list[dict[str, object]] = []
        self.products: list[dict[str, object]] = []
        self.offers: list[dict[str, object]] = []
        self.stocks: dict[int, list[dict[str, object]]] = {}
        self.failing_paths: set[str] = set()
        self.requests: list[httpx.Request] = []

    def requests_to(self, path: str) -> list[httpx.Request]:
        return [request for request in self.requests if request.url.path == f"/v1/{path}"]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/v1/")
        params = request.url.params
        if path in self.failing_paths:
            return httpx.Response(503, text="Service Unavailable")
        if path == "products/categories":
            return self._page(self.categories, params)
        if path == "products":
            return self._page(self.products, params)
        if path == "offers":
            product_id = int(params["filter[product_id]"])
            offers = [offer for offer in self.offers if offer.get("product_id") == product_id]
            return httpx.Response(200, json={"data": offers, "current_page": 1, "last_page": 1})
        if path == "offers/stocks":
            offer_id = int(params["filter[offers_id]"])
            rows = (
                [{"id": offer_id, "warehouse": self.stocks[offer_id]}]
                if offer_id in self.stocks
                else []
            )
            return httpx.Response(200, json={"data": rows, "current_page": 1, "last_page": 1})
        return httpx.Response(404, json={"message": "Not found"})

    @staticmethod
    def _page(items: list[dict[str, object]], params: httpx.QueryParams) -> httpx.Response:
        limit = int(params.get("limit", "15"))
        page = int(params.get("page", "1"))
        last_page = max(1, math.ceil(len(items) / limit))
        chunk = items[(page - 1) * limit : page * limit]
        return httpx.Response(
            200,
            json={
                "total": len(items),
                "current_page": page,
                "per_page": limit,
                "last_page": last_page,
                "data": chunk,
            },
        )
