# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Classification service client.

One GET per enrichment: no retry, no backoff. Each transport phase is bounded
by the configured timeout; the overall deadline across fetch and body read is
enforced by the caller (see ``module.ContextualModule``).
"""

from __future__ import annotations

import logging
from urllib.parse import urlencode

import httpx

from .config import GlobalConfig
from .errors import NetworkError

logger = logging.getLogger(__name__)


class ClassificationClient:
    """Fetches raw classification responses for a page.

    Args:
        config: Immutable global config (endpoint template, timeout).
        http_client: Optional host-owned ``httpx.AsyncClient``. When omitted the
            client opens its own and closes it in ``aclose()``.
    """

    def __init__(self, config: GlobalConfig, *, http_client: httpx.AsyncClient | None = None) -> None:
        self._config = config
        self._owns_client = http_client is None
        self._http_client = http_client if http_client is not None else httpx.AsyncClient(timeout=config.timeout)

    @property
    def config(self) -> GlobalConfig:
        return self._config

    def build_url(self, silo: str, page_url: str) -> str:
        """``<endpoint with silo>?format=json&uri=<page_url>``."""
        base = self._config.endpoint_for(silo)
        sep = "&" if "?" in base else "?"
        return f"{base}{sep}{urlencode({'format': 'json', 'uri': page_url})}"

    async def fetch(self, silo: str, page_url: str) -> httpx.Response:
        """Issue the GET and return the response with its body unread.

        Any HTTP status is returned as-is; judging it is the decoder's job.
        The caller must read or close the response.

        Raises:
            NetworkError: connection, DNS, protocol failure or timeout.
        """
        url = self.build_url(silo, page_url)
        logger.info("Fetching contextual information from %s", url)
        request = self._http_client.build_request("GET", url, timeout=self._config.timeout)
        try:
            return await self._http_client.send(request, stream=True)
        except httpx.TimeoutException as e:
            raise NetworkError(
                f"Timed out after {self._config.timeout}s fetching contextual information", url=url
            ) from e
        except httpx.TransportError as e:
            raise NetworkError(
                f"Encountered network error fetching contextual information ({type(e).__name__})", url=url
            ) from e

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance opened it."""
        if self._owns_client:
            await self._http_client.aclose()
