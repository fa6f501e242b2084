"""Pydantic models describing Strapi REST responses."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class StrapiRecordPayload(BaseModel):
    """One entry; v4 nests fields under ``attributes``, v5 returns them flat."""

    model_config = ConfigDict(extra="allow")

    id: int
    attributes: dict[str, Any] | None = None

    def field_values(self) -> dict[str, object]:
        if self.attributes is not None:
            return dict(self.attributes)
        return dict(self.model_extra or {})


class CollectionResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    data: list[StrapiRecordPayload]


class EntryResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    data: StrapiRecordPayload
