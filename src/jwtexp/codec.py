"""Base64URL decoding of a token segment through a caller-owned scratch buffer."""

from __future__ import annotations

import binascii

from jwtexp.errors import InvariantError

# "+" and "/" are not in the URL-safe alphabet; map them to a byte the strict decoder rejects.
_URLSAFE_TO_STANDARD = bytes.maketrans(b"-_+/", b"+/!!")


def decoded_capacity(length: int) -> int:
    """Length of a ``length``-character segment once padded to a multiple of 4."""

    return length + (-length % 4)


def decode_segment(token: str, start: int, end: int, buffer: bytearray) -> bytes | None:
    """Decode ``token[start:end]`` as unpadded or padded Base64URL.

    The segment is staged into ``buffer`` in the standard alphabet with ``=``
    padding appended, then decoded strictly from a view over the buffer.
    Returns None when the segment is not valid Base64URL.

    The buffer is only the staging area for the padded text. Slicing,
    ASCII-encoding and translating the segment still allocate short-lived
    ``str``/``bytes`` copies first, since Python strings have no borrowed views;
    the pool saves the padded copy and the per-call scratch allocation.
    """

    length = end - start
    padded = decoded_capacity(length)
    if len(buffer) < padded:
        raise InvariantError(f"scratch buffer holds {len(buffer)} bytes, segment needs {padded}")

    try:
        raw = token[start:end].encode("ascii")
    except UnicodeEncodeError:
        return None

    with memoryview(buffer) as view:
        view[:length] = raw.translate(_URLSAFE_TO_STANDARD)
        view[length:padded] = b"=" * (padded - length)
        with view[:padded] as staged:
            try:
                return binascii.a2b_base64(staged, strict_mode=True)
            except binascii.Error:
                return None
