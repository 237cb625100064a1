"""String-level helpers for picking apart an encoded expression.

These work on the raw text rather than on tokens and are handy for
inspecting input before decoding it.
"""

from __future__ import annotations

from typing import List, Optional

from expander.classify import DIGITS, LEFT, RIGHT


def sequential_expressions(encoded: str) -> List[str]:
    """Split ``encoded`` into its top-level expressions.

    Each expression keeps its multiplier prefix and nested groups stay
    whole::

        "2[a][bc]"       -> ["2[a]", "[bc]"]
        "[ab]3[[c]4[d]]" -> ["[ab]", "3[[c]4[d]]"]

    Text after the last closed group is returned as its own segment.
    """

    segments: List[str] = []
    depth = 0
    start = 0
    for idx, ch in enumerate(encoded):
        if ch == LEFT:
            depth += 1
        elif ch == RIGHT:
            depth = max(depth - 1, 0)
            if depth == 0:
                segments.append(encoded[start : idx + 1])
                start = idx + 1

    if start < len(encoded):
        segments.append(encoded[start:])
    return segments


def multiplier(encoded: str) -> Optional[int]:
    """Digits found before the first ``[``, or ``None`` when there are none."""

    first_left = encoded.find(LEFT)
    if first_left < 0:
        return None

    digits = "".join(ch for ch in encoded[:first_left] if ch in DIGITS)
    if not digits:
        return None
    return int(digits)


def inner_string(encoded: str) -> Optional[str]:
    """Text between the first ``[`` and the last ``]``.

    Digits are kept since nested groups need them. Input without a ``[`` is
    returned as-is; a ``[`` with no ``]`` after it gives ``None``.
    """

    first_left = encoded.find(LEFT)
    if first_left < 0:
        return encoded

    last_right = encoded.rfind(RIGHT)
    if last_right < first_left:
        return None
    return encoded[first_left + 1 : last_right]
