from __future__ import annotations

from datetime import datetime, timedelta

from pydantic import BaseModel, ConfigDict, computed_field

from jwtexp.constants import EPOCH


class ExpirationReport(BaseModel):
    """Expiration facts for one token, as rendered by the CLI."""

    model_config = ConfigDict(frozen=True)

    exp: datetime | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def unix(self) -> int | None:
        if self.exp is None:
            return None
        return (self.exp - EPOCH) // timedelta(seconds=1)


class ExpiryStatus(BaseModel):
    model_config = ConfigDict(frozen=True)

    exp: datetime | None = None
    expired: bool
    skew_seconds: int
    seconds_remaining: float | None = None
