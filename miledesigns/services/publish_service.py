# miledesigns/services/publish_service.py
# ⟶ Stable serialization of the aggregate (dirty tracking) + ETag / Cache-Control helpers for delivery
from __future__ import annotations

import hashlib
import json
from typing import Any

from fastapi import Response


# -----------------------------
# Snapshots
# -----------------------------
def serialize_content(data: Any) -> str:
    """
    Canonical JSON of an aggregate. Two aggregates are "the same" for dirty
    tracking iff their serializations are equal (full structural equality).
    """
    return json.dumps(data, sort_keys=True, ensure_ascii=False, separators=(",", ":"))


def content_bytes(data: Any) -> bytes:
    return serialize_content(data).encode("utf-8")


# -----------------------------
# ETags y Cache-Control
# -----------------------------
def compute_etag_from_bytes(body: bytes) -> str:
    """
    ETag como sha256 hex del cuerpo bytes.
    """
    return hashlib.sha256(body).hexdigest()


def etag_matches(if_none_match: str | None, etag: str) -> bool:
    """If-None-Match may carry a list and/or quoted / weak validators."""
    if not if_none_match:
        return False
    for candidate in if_none_match.split(","):
        c = candidate.strip()
        if c == "*":
            return True
        if c.startswith("W/"):
            c = c[2:]
        if c.strip('"') == etag:
            return True
    return False


# -----------------------------
# Políticas de caché Delivery
# -----------------------------
def cache_policy_for_site() -> dict[str, str]:
    # short max-age: a Publish must show up on the public page quickly
    return {"Cache-Control": "public, max-age=30, stale-while-revalidate=60"}


def cache_policy_for_private() -> dict[str, str]:
    return {"Cache-Control": "no-store"}


def apply_delivery_cache_headers(
    resp: Response,
    *,
    etag: str | None,
    private: bool = False,
) -> None:
    if etag:
        resp.headers["ETag"] = etag

    policy = cache_policy_for_private() if private else cache_policy_for_site()
    for k, v in policy.items():
        resp.headers[k] = v
