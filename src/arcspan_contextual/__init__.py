# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""ArcSpan contextual enrichment for OpenRTB bid requests.

Fetches a page's taxonomy classification from the ArcSpan service and merges
it into ``bidrequest.site``:
- cat / sectioncat / pagecat: IAB category codes
- keywords: raw topical keywords, comma-joined
- content.data: an ``arcspan`` entry with segment IDs (segtax 6)
"""

from __future__ import annotations

from .config import AccountConfig, GlobalConfig, WrapperFormat
from .decoder import ClassificationRecord, CodeGroup
from .errors import ConfigError, DecodeError, EnrichmentError, NetworkError, PreconditionError
from .hooks import AuctionPayload, ChangeSet, HookResult, Mutation, MutationAction
from .merger import merge
from .module import ContextualModule, build_module

__all__ = [
    "AccountConfig",
    "AuctionPayload",
    "ChangeSet",
    "ClassificationRecord",
    "CodeGroup",
    "ConfigError",
    "ContextualModule",
    "DecodeError",
    "EnrichmentError",
    "GlobalConfig",
    "HookResult",
    "Mutation",
    "MutationAction",
    "NetworkError",
    "PreconditionError",
    "WrapperFormat",
    "build_module",
    "merge",
]
