from __future__ import annotations

from dataclasses import dataclass
from time import time

from django.core.cache import caches


@dataclass
class LimitResult:
    allowed: bool
    remaining: int
    retry_after: int


def _key(namespace: str, ident: str) -> str:
    return f"rl:{namespace}:{ident}"


def client_ip(request) -> str:
    forwarded = request.META.get("HTTP_X_FORWARDED_FOR", "")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.META.get("REMOTE_ADDR", "") or "unknown"


def rate_limit(namespace: str, ident: str, limit: int, window_seconds: int) -> LimitResult:
    """Fixed-window counter kept in the default cache."""
    cache = caches["default"]
    now = int(time())
    bucket = now // window_seconds
    bucket_key = f"{_key(namespace, ident)}:{bucket}"

    current = cache.get(bucket_key, 0)
    if current >= limit:
        retry_after = (bucket + 1) * window_seconds - now
        return LimitResult(False, 0, retry_after)
    cache.add(bucket_key, 0, timeout=window_seconds)
    new_val = cache.incr(bucket_key)
    return LimitResult(True, max(0, limit - new_val), 0)
