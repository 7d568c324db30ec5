"""Opaque identifier generation for new records."""

from __future__ import annotations

import secrets
import time

_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"
SUFFIX_LENGTH = 6


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits: list[str] = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_ALPHABET[rem])
    return "".join(reversed(digits))


def generate_id() -> str:
    """Return a base-36 millisecond timestamp followed by a random suffix.

    Ids sort roughly by creation time; the suffix keeps ids generated in the
    same millisecond (or by another process) apart.
    """

    millis = time.time_ns() // 1_000_000
    suffix = "".join(secrets.choice(_ALPHABET) for _ in range(SUFFIX_LENGTH))
    return _to_base36(millis) + suffix


__all__ = ["generate_id", "SUFFIX_LENGTH"]
