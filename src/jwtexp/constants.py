from __future__ import annotations

from datetime import UTC, datetime

ENV_PREFIX = "JWTEXP_"

EXP_CLAIM = "exp"

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

DEFAULT_POOL_MAX_BUFFERS = 8
DEFAULT_POOL_MIN_BUFFER_SIZE = 256
DEFAULT_EXPIRY_SKEW_SECONDS = 60

UNEXPECTED_ERROR_EVENT = "jwt_expiration_error"
