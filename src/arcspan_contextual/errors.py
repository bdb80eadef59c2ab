# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Contextual enrichment exception hierarchy.

All enrichment errors inherit from EnrichmentError so the host can catch the
base class and skip enrichment, or a specific subclass for targeted handling.
Every error is terminal for the current invocation: nothing is retried.
"""

from __future__ import annotations


class EnrichmentError(Exception):
    """Base exception for all contextual enrichment errors."""


class ConfigError(EnrichmentError):
    """Account or global configuration is malformed or incomplete."""


class PreconditionError(EnrichmentError):
    """Bid request lacks the site object or page URL needed for enrichment."""


class NetworkError(EnrichmentError):
    """Transport failure reaching the classification service."""

    def __init__(self, message: str, *, url: str = "") -> None:
        super().__init__(message)
        self.url = url


class DecodeError(EnrichmentError):
    """Classification response could not be turned into a record."""

    UNEXPECTED_STATUS = "unexpected status"
    READ_FAILURE = "read failure"
    MALFORMED_BODY = "malformed body"

    def __init__(self, reason: str, *, status_code: int | None = None, detail: str = "") -> None:
        message = reason
        if status_code is not None:
            message = f"{reason} ({status_code})"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.reason = reason
        self.status_code = status_code
