"""Port for writing to the destination content store."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping

    from shelfsync.domain.model import EntityKind


@dataclass(frozen=True, slots=True)
class StoredRecord:
    """A record as returned by the destination store."""

    id: int
    attributes: Mapping[str, object] = field(default_factory=dict)


@runtime_checkable
class DestinationStore(Protocol):
    """Filtered lookup and creation over the store's collections."""

    async def find_first(
        self, kind: EntityKind, field_name: str, value: str | int
    ) -> StoredRecord | None:
        """Return the first record whose ``field_name`` equals ``value``.

        Raises :class:`~shelfsync.domain.errors.LookupFailedError` when the store
        cannot answer.
        """
        ...

    async def create(self, kind: EntityKind, attributes: Mapping[str, object]) -> StoredRecord:
        """Create a record; raises :class:`~shelfsync.domain.errors.CreateFailedError`."""
        ...
