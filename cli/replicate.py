#!/usr/bin/env python3
"""
CLI: work with product webhook bodies outside of a live delivery.

Usage:
    # Print the X-WC-Webhook-Signature for a body
    python -m cli.replicate sign product.json

    # Show what would be sent to the target store (no network I/O)
    python -m cli.replicate preview product.json

    # Replicate for real, as if the source store had delivered the file
    python -m cli.replicate send product.json

    # Encrypt a consumer key/secret for WC2_CREDENTIALS_ENCRYPTED=true
    python -m cli.replicate encrypt ck_xxx
"""
from __future__ import annotations

import argparse
import asyncio
import json
import os
import sys

# Allow running from project root
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.config import get_settings
from app.crypto import encrypt
from app.errors import ReplicationError
from app.services.replication import ReplicationHandler
from app.services.signature import SIGNATURE_HEADER, compute_signature
from app.services.transform import build_payload, find_origin_id
from app.services.variations import build_variation_requests


def _read(path: str) -> bytes:
    with open(path, "rb") as fh:
        return fh.read()


def cmd_sign(path: str) -> None:
    settings = get_settings()
    print(compute_signature(_read(path), settings.webhook_secret))


def cmd_preview(path: str) -> None:
    settings = get_settings()
    try:
        product = ReplicationHandler.parse(_read(path))
    except ReplicationError as exc:
        print(f"ERROR: {exc.error}: {exc.details}", file=sys.stderr)
        sys.exit(1)

    origin_id = None
    if settings.enable_idempotency_check:
        origin_id = find_origin_id(product, settings.origin_meta_key)
        if origin_id is None:
            print(f"WARNING: no {settings.origin_meta_key!r} in meta_data", file=sys.stderr)

    payload = build_payload(product, settings, origin_id=origin_id)
    print("\n→ Product payload")
    print(json.dumps(payload.model_dump(exclude_none=True), indent=2))

    variations = build_variation_requests(product, settings) if settings.create_size_variations else []
    print(f"\n→ Variations: {len(variations)}")
    print(f"{'OPTION':<30} {'REGULAR':>10} {'SALE':>10}")
    print("-" * 52)
    for v in variations:
        print(f"{v.attributes[0].option:<30} {v.regular_price:>10} {v.sale_price:>10}")


async def cmd_send(path: str) -> None:
    settings = get_settings()
    body = _read(path)
    headers = {
        "Content-Type": "application/json",
        SIGNATURE_HEADER: compute_signature(body, settings.webhook_secret),
    }
    try:
        result = await ReplicationHandler(settings).handle(body, headers)
    except ReplicationError as exc:
        print(f"ERROR ({exc.status_code}): {exc.error}: {exc.details}", file=sys.stderr)
        if exc.response is not None:
            print(json.dumps(exc.response, indent=2), file=sys.stderr)
        sys.exit(1)
    print(json.dumps(result.model_dump(by_alias=True, exclude_none=True), indent=2))


def cmd_encrypt(value: str) -> None:
    settings = get_settings()
    print(encrypt(value, settings.config_encryption_key))


def main() -> None:
    parser = argparse.ArgumentParser(description="WC Product Replicator CLI")
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("sign", help="Print the webhook signature for a body").add_argument("file")
    sub.add_parser("preview", help="Print the transformed payload and variations").add_argument("file")
    sub.add_parser("send", help="Replicate a product body to the target store").add_argument("file")
    sub.add_parser("encrypt", help="Encrypt a credential with CONFIG_ENCRYPTION_KEY").add_argument("value")
    args = parser.parse_args()

    if args.command == "sign":
        cmd_sign(args.file)
    elif args.command == "preview":
        cmd_preview(args.file)
    elif args.command == "send":
        asyncio.run(cmd_send(args.file))
    else:
        cmd_encrypt(args.value)


if __name__ == "__main__":
    main()
