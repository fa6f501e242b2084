"""Domain port definitions for adapters."""

from __future__ import annotations

from .destination import DestinationStore, StoredRecord
from .source import SourceCatalog

__all__ = ["DestinationStore", "SourceCatalog", "StoredRecord"]
