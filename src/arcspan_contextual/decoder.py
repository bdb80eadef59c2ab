# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Classification response decoding.

Turns the raw classification-service response into a ``ClassificationRecord``.
The service has shipped three generations of its taxonomy (``raw``, ``codes``,
``newCodes``) side by side; each group is optional and decoded independently.

Some deployments frame the JSON as a JSONP call (``aspan.setIAB({...})``).
Which framing to expect is a configured ``WrapperFormat``, never sniffed.
"""

from __future__ import annotations

import logging

import httpx
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from .config import WrapperFormat
from .errors import DecodeError

logger = logging.getLogger(__name__)

JSONP_PREFIX = b"aspan.setIAB("
JSONP_SUFFIX = b")"
_LOG_BODY_LIMIT = 2048


class CodeGroup(BaseModel):
    """One taxonomy generation: codes derived from page text and from images."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    text: list[str] = Field(default_factory=list)
    images: list[str] = Field(default_factory=list)

    @field_validator("text", "images", mode="before")
    @classmethod
    def _null_is_empty(cls, v: list[str] | None) -> list[str]:
        return [] if v is None else v

    @property
    def all(self) -> list[str]:
        """Text codes followed by image codes."""
        return [*self.text, *self.images]


class ClassificationRecord(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    raw: CodeGroup | None = None
    codes: CodeGroup | None = None
    new_codes: CodeGroup | None = Field(
        None,
        validation_alias=AliasChoices("newCodes", "newcodes", "new_codes"),
        serialization_alias="newCodes",
    )


def _unwrap_jsonp(body: bytes) -> bytes:
    stripped = body.strip()
    if not (stripped.startswith(JSONP_PREFIX) and stripped.endswith(JSONP_SUFFIX)):
        raise DecodeError(DecodeError.MALFORMED_BODY, detail="expected aspan.setIAB(...) wrapper")
    return stripped[len(JSONP_PREFIX) : -len(JSONP_SUFFIX)]


def _unwrap_none(body: bytes) -> bytes:
    return body


_UNWRAPPERS = {
    WrapperFormat.NONE: _unwrap_none,
    WrapperFormat.JSONP: _unwrap_jsonp,
}


def decode_body(body: bytes, wrapper: WrapperFormat = WrapperFormat.NONE) -> ClassificationRecord:
    """Strip the configured framing from *body* and parse the record.

    Raises:
        DecodeError: ``malformed body`` if framing, JSON or shape is wrong.
    """
    payload = _UNWRAPPERS[wrapper](body)
    try:
        return ClassificationRecord.model_validate_json(payload)
    except ValidationError as e:
        raise DecodeError(DecodeError.MALFORMED_BODY, detail=f"{e.error_count()} validation error(s)") from e


async def decode_response(
    response: httpx.Response,
    wrapper: WrapperFormat = WrapperFormat.NONE,
) -> ClassificationRecord:
    """Validate status, read the (streamed) body and decode it.

    The response is always closed before returning.
    """
    try:
        if response.status_code != httpx.codes.OK:
            raise DecodeError(DecodeError.UNEXPECTED_STATUS, status_code=response.status_code)
        try:
            body = await response.aread()
        except (httpx.RequestError, httpx.StreamError) as e:
            raise DecodeError(DecodeError.READ_FAILURE, detail=type(e).__name__) from e
    finally:
        await response.aclose()

    logger.debug("Classification response: %s", body[:_LOG_BODY_LIMIT].decode("utf-8", errors="replace"))
    return decode_body(body, wrapper)
