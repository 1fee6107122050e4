from __future__ import annotations

from typing import Any

from pydantic import BaseModel


def to_plain_data(value: Any) -> Any:
    """Dump pydantic models into JSON-serializable structures; pass anything else through."""

    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    return value
