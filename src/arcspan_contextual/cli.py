# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Contextual enrichment CLI: run the hook against a bid request file.

Usage:
    python -m arcspan_contextual.cli enrich --silo 21 --request bid.json
    python -m arcspan_contextual.cli enrich --silo 21 --request - --wrapper jsonp
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

from .config import DEFAULT_ENDPOINT, DEFAULT_TIMEOUT, WrapperFormat
from .errors import EnrichmentError
from .hooks import AuctionPayload
from .logging_config import configure
from .module import build_module
from .openrtb import BidRequest


def _read_request(source: str) -> BidRequest:
    text = sys.stdin.read() if source == "-" else Path(source).read_text(encoding="utf-8")
    return BidRequest.model_validate_json(text)


async def _enrich(args: argparse.Namespace) -> dict:
    global_config = {"endpoint": args.endpoint, "wrapper": args.wrapper, "timeout": args.timeout}
    payload = AuctionPayload(bid_request=_read_request(args.request))
    async with build_module(global_config) as module:
        result = await module.handle_processed_auction({"silo": args.silo}, payload)
    return result.change_set.apply(payload).bid_request.to_dict()


def cmd_enrich(args: argparse.Namespace) -> None:
    """Enrich one bid request and print it as JSON."""
    enriched = asyncio.run(_enrich(args))
    print(json.dumps(enriched, indent=2, ensure_ascii=False))


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="ArcSpan contextual enrichment CLI",
        prog="python -m arcspan_contextual.cli",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    parser.add_argument("--json-logs", action="store_true", help="Emit JSON log lines on stderr")
    subparsers = parser.add_subparsers(dest="command", required=True)

    p_enrich = subparsers.add_parser("enrich", help="Enrich a bid request with contextual data")
    p_enrich.add_argument("--silo", required=True, help="Classification service silo ID")
    p_enrich.add_argument("--request", required=True, metavar="FILE", help="Bid request JSON file ('-' for stdin)")
    p_enrich.add_argument("--endpoint", default=DEFAULT_ENDPOINT, help="Endpoint template containing {{.SILO}}")
    p_enrich.add_argument(
        "--wrapper",
        choices=[w.value for w in WrapperFormat],
        default=WrapperFormat.NONE.value,
        help="Response framing (default: none)",
    )
    p_enrich.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT, help="Fetch deadline in seconds")

    commands = {"enrich": cmd_enrich}
    args = parser.parse_args(argv)

    configure(json_output=args.json_logs, level="DEBUG" if args.verbose else "WARNING")

    try:
        commands[args.command](args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        sys.exit(130)
    except EnrichmentError as e:
        print(f"Error ({type(e).__name__}): {e}", file=sys.stderr)
        sys.exit(1)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
