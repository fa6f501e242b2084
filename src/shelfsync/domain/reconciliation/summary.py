"""Per-kind counters reported at the end of a run."""

from __future__ import annotations

from dataclasses import dataclass, field

from shelfsync.domain.model import EntityKind


@dataclass(slots=True)
class KindCounts:
    created: int = 0
    skipped: int = 0
    failed: int = 0


@dataclass(slots=True)
class SyncSummary:
    """Outcome of a catalog sync run."""

    counts: dict[EntityKind, KindCounts] = field(default_factory=dict)

    def for_kind(self, kind: EntityKind) -> KindCounts:
        return self.counts.setdefault(kind, KindCounts())

    def record_created(self, kind: EntityKind) -> None:
        self.for_kind(kind).created += 1

    def record_skipped(self, kind: EntityKind) -> None:
        self.for_kind(kind).skipped += 1

    def record_failed(self, kind: EntityKind) -> None:
        self.for_kind(kind).failed += 1

    def record_rejected(self, kind: EntityKind, count: int) -> None:
        """Count source rows that were dropped as malformed before reconciliation."""
        if count:
            self.for_kind(kind).failed += count

    @property
    def total_created(self) -> int:
        return sum(counts.created for counts in self.counts.values())

    @property
    def total_failed(self) -> int:
        return sum(counts.failed for counts in self.counts.values())

    def as_dict(self) -> dict[str, dict[str, int]]:
        return {
            str(kind): {
                "created": counts.created,
                "skipped": counts.skipped,
                "failed": counts.failed,
            }
            for kind, counts in sorted(self.counts.items())
        }

    def lines(self) -> list[str]:
        return [
            f"{kind}: created={counts.created} skipped={counts.skipped} failed={counts.failed}"
            for kind, counts in sorted(self.counts.items())
        ]
