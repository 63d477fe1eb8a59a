"""Masking of credential values for safe logging."""

from __future__ import annotations

from typing import Optional

_VISIBLE_CHARS = 4


def mask_token(value: Optional[str], visible_chars: int = _VISIBLE_CHARS) -> str:
    """Mask a token so that only a short prefix is visible.

    A ``Bearer`` prefix is kept as-is and does not count towards
    *visible_chars*.  Tokens no longer than *visible_chars* are masked
    entirely.

    Example::

        >>> mask_token("Bearer abcdefgh")
        'Bearer abcd****'
    """
    if value is None:
        return "<None>"
    scheme = ""
    if value.startswith("Bearer "):
        scheme, value = "Bearer ", value[len("Bearer "):]
    if len(value) <= visible_chars:
        return scheme + "*" * len(value)
    return scheme + value[:visible_chars] + "*" * (len(value) - visible_chars)
