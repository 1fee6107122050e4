from __future__ import annotations


class JwtExpError(Exception):
    """Base error type for jwtexp."""


class ConfigError(JwtExpError):
    """Raised when environment configuration cannot be validated."""


class InvariantError(JwtExpError):
    """Raised when an internal invariant is violated (never for malformed tokens)."""
