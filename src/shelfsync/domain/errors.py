"""Errors raised by the reconciliation engine."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .model import EntityKind


class SyncError(RuntimeError):
    """Base class for reconciliation failures."""


class SourceUnavailableError(SyncError):
    """The source catalog listing could not be obtained; nothing can be reconciled."""


class LookupFailedError(SyncError):
    """An existence check against the destination could not be answered."""

    def __init__(self, kind: EntityKind, key: object, reason: str) -> None:
        super().__init__(f"Lookup of {kind} {key!r} failed: {reason}")
        self.kind = kind
        self.key = key
        self.reason = reason


class CreateFailedError(SyncError):
    """The destination refused or mangled a create request."""

    def __init__(self, kind: EntityKind, key: object, reason: str) -> None:
        super().__init__(f"Creating {kind} {key!r} failed: {reason}")
        self.kind = kind
        self.key = key
        self.reason = reason
