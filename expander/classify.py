from __future__ import annotations

DIGITS = frozenset("0123456789")
LEFT = "["
RIGHT = "]"


def is_digits_only(token: str) -> bool:
    """Non-empty and made only of ASCII decimal digits."""

    return bool(token) and all(ch in DIGITS for ch in token)


def is_literal(token: str) -> bool:
    """Non-empty and free of digits and square brackets."""

    if not token:
        return False
    return not any(ch in DIGITS or ch == LEFT or ch == RIGHT for ch in token)


def token_kind(token: str) -> str:
    if token == LEFT:
        return "left"
    if token == RIGHT:
        return "right"
    if is_digits_only(token):
        return "digits"
    if is_literal(token):
        return "literal"
    return "other"
