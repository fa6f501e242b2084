"""Relation targets for links between destination records."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RelationRefs:
    """Translate a store-assigned id into the id its relation fields expect.

    The existing store schema links to ``id - 1`` of what create and list calls
    return; a rebuilt schema uses ``offset=0``.
    """

    offset: int = 1

    def to(self, internal_id: int) -> int:
        return internal_id - self.offset
