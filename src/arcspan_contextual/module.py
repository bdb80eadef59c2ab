# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Processed-auction hook: enrich ``bidrequest.site`` with ArcSpan context.

Flow per invocation:
  1. parse account config (silo)          -> ConfigError
  2. require site + site.page             -> PreconditionError
  3. fetch classification, under deadline -> NetworkError
  4. decode response                      -> DecodeError
  5. merge and return one site mutation

Nothing is retried and the payload is never modified in place.
"""

from __future__ import annotations

import asyncio
import logging

import httpx

from .client import ClassificationClient
from .config import AccountConfig, ConfigBlob, GlobalConfig
from .decoder import decode_response
from .errors import EnrichmentError, NetworkError, PreconditionError
from .hooks import BID_REQUEST_KEY, AuctionPayload, HookResult
from .logging_config import invocation_context
from .merger import merge
from .openrtb import Site
from .pipeline_timer import PipelineTimer

logger = logging.getLogger(__name__)


class ContextualModule:
    """The enrichment hook, built once per process by ``build_module``."""

    def __init__(self, config: GlobalConfig, *, client: ClassificationClient | None = None) -> None:
        self._config = config
        self._client = client if client is not None else ClassificationClient(config)

    @property
    def config(self) -> GlobalConfig:
        return self._config

    async def handle_processed_auction(
        self,
        account_config: ConfigBlob | None,
        payload: AuctionPayload,
    ) -> HookResult:
        """Return a ``HookResult`` carrying a single ``bidrequest.site`` update.

        Raises:
            EnrichmentError: any failure; no mutation is produced.
        """
        logger.info("Processed auction hook start")
        timer = PipelineTimer()
        timer.stage("validate")
        try:
            account = AccountConfig.from_json(account_config)
            with invocation_context(silo=account.silo):
                site = _require_page(payload)
                try:
                    enriched = await asyncio.wait_for(
                        self._enrich(account.silo, site, timer),
                        timeout=self._config.timeout,
                    )
                except TimeoutError as e:
                    raise NetworkError(
                        f"Contextual fetch exceeded {self._config.timeout}s deadline during '{timer.current_stage}'"
                    ) from e
        except EnrichmentError as e:
            failed_at = timer.current_stage
            timer.finalize()
            logger.warning(
                "Processed auction hook failed at %s: %s (stages=%s)", failed_at, e, timer.elapsed_per_stage()
            )
            raise

        timer.finalize()
        result = HookResult()
        result.change_set.update(BID_REQUEST_KEY, "site", value=enriched)
        logger.info("Processed auction hook end (stages=%s, total_ms=%s)", timer.elapsed_per_stage(), timer.total_ms)
        return result

    async def _enrich(self, silo: str, site: Site, timer: PipelineTimer) -> Site:
        timer.stage("fetch")
        response = await self._client.fetch(silo, site.page)
        timer.stage("decode")
        record = await decode_response(response, self._config.wrapper)
        timer.stage("merge")
        return merge(record, site)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> ContextualModule:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


def _require_page(payload: AuctionPayload) -> Site:
    site = payload.bid_request.site
    if site is None:
        raise PreconditionError("No site object included in request. Unable to add contextual data")
    if not site.page:
        raise PreconditionError("Site object does not contain a page url. Unable to add contextual data")
    return site


def build_module(
    config: ConfigBlob | None = None,
    *,
    http_client: httpx.AsyncClient | None = None,
) -> ContextualModule:
    """Build the hook from the host's global config blob.

    Raises:
        ConfigError: the blob is present but malformed.
    """
    global_config = GlobalConfig.from_json(config)
    logger.info("Contextual module built (endpoint=%s, wrapper=%s)", global_config.endpoint, global_config.wrapper)
    return ContextualModule(global_config, client=ClassificationClient(global_config, http_client=http_client))
