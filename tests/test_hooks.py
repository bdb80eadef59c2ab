# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Tests for arcspan_contextual.hooks — declarative mutations."""

from __future__ import annotations

import dataclasses

import pytest

from arcspan_contextual.hooks import AuctionPayload, ChangeSet, HookResult, Mutation, MutationAction
from arcspan_contextual.openrtb import BidRequest, Site


def _payload() -> AuctionPayload:
    return AuctionPayload(bid_request=BidRequest(id="r1", site=Site(page="https://a.test")))


class TestMutation:
    def test_update_returns_new_payload(self):
        payload = _payload()
        new_site = Site(page="https://a.test", name="arcspan")
        applied = Mutation(MutationAction.UPDATE, ("bidrequest", "site"), new_site).apply(payload)
        assert applied.bid_request.site is new_site
        assert payload.bid_request.site.name is None

    def test_delete(self):
        applied = Mutation(MutationAction.DELETE, ("bidrequest", "site")).apply(_payload())
        assert applied.bid_request.site is None

    @pytest.mark.parametrize("path", [("site",), ("imp", "site"), ("bidrequest", "site", "content")])
    def test_unsupported_path(self, path):
        with pytest.raises(ValueError, match="Unsupported mutation path"):
            Mutation(MutationAction.UPDATE, path)

    def test_key(self):
        assert Mutation(MutationAction.UPDATE, ("bidrequest", "site")).key == "bidrequest.site"

    def test_frozen(self):
        mutation = Mutation(MutationAction.UPDATE, ("bidrequest", "site"))
        with pytest.raises(dataclasses.FrozenInstanceError):
            mutation.value = 1  # type: ignore[misc]


class TestChangeSet:
    def test_empty_result_has_no_mutations(self):
        result = HookResult()
        assert result.change_set.mutations == ()
        payload = _payload()
        assert result.change_set.apply(payload) is payload

    def test_applied_in_order(self):
        changes = ChangeSet()
        changes.update("bidrequest", "site", value=Site(name="first"))
        changes.update("bidrequest", "site", value=Site(name="second"))
        assert len(changes.mutations) == 2
        assert changes.apply(_payload()).bid_request.site.name == "second"
