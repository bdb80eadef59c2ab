# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Tests for arcspan_contextual.decoder — status, body read, framing, shape."""

from __future__ import annotations

import httpx
import pytest

from arcspan_contextual.config import WrapperFormat
from arcspan_contextual.decoder import ClassificationRecord, decode_body, decode_response
from arcspan_contextual.errors import DecodeError
from tests._stubs import JSONP_BODY, PLAIN_BODY, BrokenStream

# ── decode_body ──────────────────────────────────────────────────────


class TestDecodeBody:
    def test_plain_json(self):
        record = decode_body(PLAIN_BODY)
        assert record.raw.text == ["Sports>Soccer", "Sports>Football"]
        assert record.codes.all == ["IAB17", "IAB17-44"]
        assert record.new_codes.all == ["483", "533"]

    def test_all_groups_optional(self):
        record = decode_body(b"{}")
        assert record == ClassificationRecord()
        assert record.raw is None and record.codes is None and record.new_codes is None

    def test_partial_group(self):
        record = decode_body(b'{"codes": {"images": ["IAB1"]}}')
        assert record.codes.text == []
        assert record.codes.all == ["IAB1"]

    def test_null_lists_are_empty(self):
        record = decode_body(b'{"raw": {"text": null, "images": null}}')
        assert record.raw.all == []

    def test_text_before_images(self):
        record = decode_body(b'{"newCodes": {"images": ["9"], "text": ["1", "2"]}}')
        assert record.new_codes.all == ["1", "2", "9"]

    def test_lowercase_newcodes_accepted(self):
        record = decode_body(b'{"newcodes": {"text": ["483"]}}')
        assert record.new_codes.text == ["483"]

    def test_unknown_keys_ignored(self):
        record = decode_body(b'{"codes": {"text": ["IAB2"], "score": 3}, "version": 4}')
        assert record.codes.text == ["IAB2"]

    def test_jsonp_wrapper_stripped(self):
        record = decode_body(JSONP_BODY, WrapperFormat.JSONP)
        assert record.codes.text == ["IAB17", "IAB17-44"]
        assert record.new_codes.text == ["483", "533"]

    def test_jsonp_surrounding_whitespace(self):
        record = decode_body(b"  aspan.setIAB({})\n", WrapperFormat.JSONP)
        assert record == ClassificationRecord()

    def test_jsonp_expected_but_plain(self):
        with pytest.raises(DecodeError) as exc_info:
            decode_body(PLAIN_BODY, WrapperFormat.JSONP)
        assert exc_info.value.reason == DecodeError.MALFORMED_BODY

    def test_plain_expected_but_wrapped(self):
        with pytest.raises(DecodeError) as exc_info:
            decode_body(JSONP_BODY, WrapperFormat.NONE)
        assert exc_info.value.reason == DecodeError.MALFORMED_BODY

    @pytest.mark.parametrize(
        "body",
        [b"", b"not json", b"[]", b"null", b'{"codes": {"text": "IAB1"}}', b'{"raw": [1, 2]}'],
    )
    def test_malformed(self, body):
        with pytest.raises(DecodeError, match="malformed body"):
            decode_body(body)


# ── decode_response ──────────────────────────────────────────────────


class TestDecodeResponse:
    @pytest.mark.asyncio
    async def test_ok(self):
        record = await decode_response(httpx.Response(200, content=PLAIN_BODY))
        assert record.codes.text == ["IAB17", "IAB17-44"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [204, 301, 404, 500, 503])
    async def test_unexpected_status(self, status):
        with pytest.raises(DecodeError) as exc_info:
            await decode_response(httpx.Response(status, content=PLAIN_BODY))
        assert exc_info.value.reason == DecodeError.UNEXPECTED_STATUS
        assert exc_info.value.status_code == status
        assert str(status) in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_read_failure(self):
        with pytest.raises(DecodeError) as exc_info:
            await decode_response(httpx.Response(200, stream=BrokenStream()))
        assert exc_info.value.reason == DecodeError.READ_FAILURE
        assert isinstance(exc_info.value.__cause__, httpx.ReadError)

    @pytest.mark.asyncio
    async def test_corrupt_content_encoding_is_read_failure(self):
        response = httpx.Response(200, headers={"content-encoding": "gzip"}, stream=httpx.ByteStream(b"not gzip"))
        with pytest.raises(DecodeError) as exc_info:
            await decode_response(response)
        assert exc_info.value.reason == DecodeError.READ_FAILURE
        assert isinstance(exc_info.value.__cause__, httpx.DecodingError)
        assert response.is_closed

    @pytest.mark.asyncio
    async def test_response_closed_on_error(self):
        response = httpx.Response(500, stream=httpx.ByteStream(b"oops"))
        with pytest.raises(DecodeError):
            await decode_response(response)
        assert response.is_closed

    @pytest.mark.asyncio
    async def test_wrapper_passed_through(self):
        record = await decode_response(httpx.Response(200, content=JSONP_BODY), WrapperFormat.JSONP)
        assert record.raw.text == ["Sports>Soccer", "Sports>Football"]
