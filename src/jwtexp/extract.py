from __future__ import annotations

import json
from datetime import UTC, datetime, timedelta
from typing import Any

from jwtexp.buffers import BufferPool, default_pool
from jwtexp.codec import decode_segment, decoded_capacity
from jwtexp.constants import (
    DEFAULT_EXPIRY_SKEW_SECONDS,
    EPOCH,
    EXP_CLAIM,
    INT64_MAX,
    INT64_MIN,
    UNEXPECTED_ERROR_EVENT,
)
from jwtexp.diagnostics import NULL_SINK, DiagnosticSink
from jwtexp.segments import payload_bounds


def extract_expiration(
    token: str | None,
    diagnostics: DiagnosticSink | None = None,
    *,
    pool: BufferPool | None = None,
) -> datetime | None:
    """Decode the JWT ``exp`` claim without verifying the signature.

    Returns an aware UTC datetime, or None when the token is absent, malformed,
    or carries no integer ``exp``. Never raises: unexpected failures are
    reported once to ``diagnostics`` and also yield None.

    Example:
        >>> extract_expiration("eyJ...token") is None
        True
    """

    sink = diagnostics if diagnostics is not None else NULL_SINK
    try:
        if not token or token.isspace():
            return None
        return _extract(token, pool or default_pool())
    except Exception as exc:  # noqa: BLE001
        sink.critical(
            UNEXPECTED_ERROR_EVENT,
            exc_info=exc,
            token_length=len(token) if isinstance(token, str) else None,
        )
        return None


def _extract(token: str, pool: BufferPool) -> datetime | None:
    bounds = payload_bounds(token)
    if bounds is None:
        return None
    start, end = bounds

    with pool.lease(decoded_capacity(end - start)) as buffer:
        decoded = decode_segment(token, start, end, buffer)
    if decoded is None:
        return None

    try:
        # json.loads would sniff UTF-16/32 from raw bytes; claims must be UTF-8.
        claims = json.loads(decoded.decode("utf-8"))
    except ValueError:
        # JSONDecodeError and UnicodeDecodeError both land here.
        return None

    if not isinstance(claims, dict):
        return None
    return _expiration_from_claim(claims.get(EXP_CLAIM))


def _expiration_from_claim(exp: Any) -> datetime | None:
    # bool is an int subclass; floats such as 1.0 or 1e9 are not integer literals.
    if isinstance(exp, bool) or not isinstance(exp, int):
        return None
    if not INT64_MIN <= exp <= INT64_MAX:
        return None
    # Outside years 1..9999 this raises OverflowError for the caller's handler.
    return EPOCH + timedelta(seconds=exp)


def _resolve_now(now: datetime | None) -> datetime:
    if now is None:
        return datetime.now(UTC)
    if now.tzinfo is None or now.utcoffset() is None:
        raise ValueError("now must be a timezone-aware datetime")
    return now


def has_expired(
    expiry: datetime | None,
    *,
    skew_seconds: int = DEFAULT_EXPIRY_SKEW_SECONDS,
    now: datetime | None = None,
) -> bool:
    """Return True when an already extracted expiry is missing or within ``skew_seconds`` of ``now``."""

    current = _resolve_now(now)
    if expiry is None:
        return True
    try:
        threshold = expiry - timedelta(seconds=skew_seconds)
    except OverflowError:
        return True
    return current >= threshold


def seconds_until_expiration(
    token: str | None,
    *,
    now: datetime | None = None,
    diagnostics: DiagnosticSink | None = None,
) -> float | None:
    """Seconds from ``now`` until ``exp``; negative once the token has expired."""

    current = _resolve_now(now)
    expiry = extract_expiration(token, diagnostics)
    if expiry is None:
        return None
    return (expiry - current).total_seconds()


def is_token_expired(
    token: str | None,
    *,
    skew_seconds: int = DEFAULT_EXPIRY_SKEW_SECONDS,
    now: datetime | None = None,
    diagnostics: DiagnosticSink | None = None,
) -> bool:
    """Return True when a JWT should be treated as expired."""

    current = _resolve_now(now)
    return has_expired(extract_expiration(token, diagnostics), skew_seconds=skew_seconds, now=current)
