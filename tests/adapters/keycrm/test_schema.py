from __future__ import annotations

import pytest
from pydantic import ValidationError

from shelfsync.adapters.keycrm.schema import (
    CategoryPayload,
    ListResponse,
    OfferPayload,
    StockPayload,
)
from shelfsync.adapters.keycrm.translator import to_stock_entry


def test_zero_parent_id_means_root() -> None:
    payload = CategoryPayload.model_validate({"id": 5, "name": "Аксесуари", "parent_id": 0})

    assert payload.parent_id is None


def test_offer_blank_codes_become_none() -> None:
    payload = OfferPayload.model_validate({"id": 1, "sku": "  ", "barcode": ""})

    assert payload.sku is None
    assert payload.barcode is None
    assert payload.properties == []


def test_offer_requires_an_id() -> None:
    with pytest.raises(ValidationError):
        OfferPayload.model_validate({"sku": "A-1"})


def test_list_response_ignores_unknown_envelope_fields() -> None:
    response = ListResponse.model_validate(
        {"total": 1, "per_page": 15, "current_page": 1, "last_page": 1, "data": [{"id": 1}]}
    )

    assert response.last_page == 1
    assert response.data == [{"id": 1}]


def test_fractional_stock_is_truncated() -> None:
    row = StockPayload.model_validate(
        {"id": 7, "warehouse": [{"id": 3, "name": "Склад", "quantity": 2.7}]}
    )

    assert to_stock_entry(row.warehouse[0]).quantity == 2


def test_offer_property_without_value_does_not_reject_the_offer() -> None:
    payload = OfferPayload.model_validate(
        {
            "id": 1,
            "properties": [
                {"name": "Розмір", "value": "M"},
                {"name": "Матеріал", "value": None},
                {"name": "Колір", "value": "Чорний"},
                {"name": "Склад", "value": ["вовна", "кашемір"]},
            ],
        }
    )

    assert [(prop.name, prop.value) for prop in payload.properties] == [
        ("Розмір", "M"),
        ("Матеріал", None),
        ("Колір", "Чорний"),
        ("Склад", None),
    ]
