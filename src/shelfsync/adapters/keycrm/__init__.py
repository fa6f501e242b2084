"""Public interface for the KeyCRM adapter."""

from __future__ import annotations

from .client import KeyCrmCatalog
from .schema import CategoryPayload, OfferPayload, ProductPayload, StockPayload

__all__ = [
    "CategoryPayload",
    "KeyCrmCatalog",
    "OfferPayload",
    "ProductPayload",
    "StockPayload",
]
