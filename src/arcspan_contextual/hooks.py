# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Host-facing hook result types.

The hook never touches the payload it receives. It returns a ``HookResult``
whose ``ChangeSet`` describes field-level mutations; the host decides when
(and whether) to apply them.
"""

from __future__ import annotations

import dataclasses
from enum import StrEnum
from typing import Any

from .openrtb import BidRequest

BID_REQUEST_KEY = "bidrequest"


class MutationAction(StrEnum):
    UPDATE = "update"
    DELETE = "delete"


@dataclasses.dataclass(frozen=True, slots=True)
class AuctionPayload:
    """The processed-auction-request payload handed to the hook."""

    bid_request: BidRequest


@dataclasses.dataclass(frozen=True, slots=True)
class Mutation:
    """Replace (or clear) one top-level field of the bid request."""

    action: MutationAction
    path: tuple[str, ...]
    value: Any = None

    def __post_init__(self) -> None:
        if len(self.path) != 2 or self.path[0] != BID_REQUEST_KEY:
            raise ValueError(f"Unsupported mutation path: {'.'.join(self.path)}")

    @property
    def key(self) -> str:
        return ".".join(self.path)

    def apply(self, payload: AuctionPayload) -> AuctionPayload:
        """Return a new payload with this mutation applied."""
        field = self.path[1]
        value = None if self.action is MutationAction.DELETE else self.value
        return dataclasses.replace(payload, bid_request=payload.bid_request.model_copy(update={field: value}))


@dataclasses.dataclass(slots=True)
class ChangeSet:
    _mutations: list[Mutation] = dataclasses.field(default_factory=list)

    def add(self, mutation: Mutation) -> None:
        self._mutations.append(mutation)

    def update(self, *path: str, value: Any) -> None:
        self.add(Mutation(MutationAction.UPDATE, tuple(path), value))

    @property
    def mutations(self) -> tuple[Mutation, ...]:
        return tuple(self._mutations)

    def apply(self, payload: AuctionPayload) -> AuctionPayload:
        """Apply every mutation in insertion order."""
        for mutation in self._mutations:
            payload = mutation.apply(payload)
        return payload


@dataclasses.dataclass(slots=True)
class HookResult:
    change_set: ChangeSet = dataclasses.field(default_factory=ChangeSet)
