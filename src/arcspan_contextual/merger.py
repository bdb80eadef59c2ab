# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Merge a classification record into an OpenRTB site object.

``merge`` is total and pure: it never raises for a well-typed input and
never mutates the site it is given. Category and keyword fields are
overwritten on every enrichment, while ``content.data`` only grows.
"""

from __future__ import annotations

from .decoder import ClassificationRecord, CodeGroup
from .openrtb import Content, Data, Segment, Site

DATA_NAME = "arcspan"
SITE_NAME = "arcspan"
SEGTAX = 6  # IAB Content Taxonomy 2.2


def _codes(group: CodeGroup | None) -> list[str]:
    return group.all if group is not None else []


def build_data_entry(record: ClassificationRecord) -> Data:
    """Build the ``content.data`` entry carrying the ``newCodes`` segments."""
    segments = [Segment(id=code) for code in _codes(record.new_codes)]
    return Data(name=DATA_NAME, segment=segments, ext={"segtax": SEGTAX})


def merge(record: ClassificationRecord, site: Site) -> Site:
    categories = _codes(record.codes)
    keywords = ",".join(_codes(record.raw))
    entry = build_data_entry(record)

    if site.content is not None:
        content = site.content.model_copy(update={"data": [*(site.content.data or []), entry]})
    else:
        content = Content(data=[entry])

    return site.model_copy(
        update={
            "name": SITE_NAME,
            "cat": categories,
            "sectioncat": list(categories),
            "pagecat": list(categories),
            "keywords": keywords,
            "content": content,
        }
    )
