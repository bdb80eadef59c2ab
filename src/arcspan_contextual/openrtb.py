# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""OpenRTB 2.x objects touched by the contextual hook.

Only the fields the merge reads or writes are declared. Everything else in
the bid request passes through untouched (``extra="allow"``), so enrichment
never drops data the host or other modules put there.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class _OpenRTBObject(BaseModel):
    model_config = ConfigDict(extra="allow")

    def to_dict(self) -> dict[str, Any]:
        """Serialize the way OpenRTB expects: unset fields omitted."""
        return self.model_dump(mode="json", exclude_none=True)


class Segment(_OpenRTBObject):
    """A taxonomy leaf attached to a data entry."""

    id: str | None = None
    name: str | None = None
    value: str | None = None
    ext: dict[str, Any] | None = None


class Data(_OpenRTBObject):
    """A data provider's contribution to ``content.data``."""

    id: str | None = None
    name: str | None = None
    segment: list[Segment] | None = None
    ext: dict[str, Any] | None = None


class Content(_OpenRTBObject):
    id: str | None = None
    title: str | None = None
    url: str | None = None
    keywords: str | None = None
    data: list[Data] | None = None


class Site(_OpenRTBObject):
    id: str | None = None
    name: str | None = None
    domain: str | None = None
    cat: list[str] | None = None
    sectioncat: list[str] | None = None
    pagecat: list[str] | None = None
    page: str | None = None
    ref: str | None = None
    search: str | None = None
    keywords: str | None = None
    content: Content | None = None


class BidRequest(_OpenRTBObject):
    id: str | None = None
    site: Site | None = None
    imp: list[dict[str, Any]] | None = None
