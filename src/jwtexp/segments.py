from __future__ import annotations


def payload_bounds(token: str) -> tuple[int, int] | None:
    """Return ``(start, end)`` of the payload segment in ``header.payload.signature``.

    The header must be non-empty and the payload must be non-empty. The signature
    and anything after the second dot are not looked at.
    """

    first_dot = token.find(".")
    if first_dot <= 0:
        return None

    start = first_dot + 1
    second_dot = token.find(".", start)
    if second_dot < 0 or second_dot == start:
        return None

    return start, second_dot
