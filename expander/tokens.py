from __future__ import annotations

import re
from typing import Iterable, List

from expander.classify import is_literal


Token = str

_TOKEN_RE = re.compile(r"\[|\]|[0-9]+|[^\[\]0-9]+")


def tokenize(encoded: str) -> List[Token]:
    """Split an encoded string into brackets, digit runs and literal runs."""

    if not encoded:
        return []
    return _TOKEN_RE.findall(encoded)


def merge_literals(tokens: Iterable[Token]) -> List[Token]:
    """Coalesce adjacent literal tokens and drop empty ones.

    Empty tokens show up after a zero multiplier or an empty group expands;
    dropping them keeps every remaining token classifiable.
    """

    merged: List[Token] = []
    for token in tokens:
        if not token:
            continue
        if merged and is_literal(token) and is_literal(merged[-1]):
            merged[-1] = merged[-1] + token
        else:
            merged.append(token)
    return merged
