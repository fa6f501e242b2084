"""Public interface for the Strapi adapter."""

from __future__ import annotations

from .client import COLLECTIONS, StrapiStore, collection_path

__all__ = ["COLLECTIONS", "StrapiStore", "collection_path"]
