from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional

from expander.reduction import ReductionLoop, Round, reduce_tokens
from expander.tokens import Token, tokenize


def decode(encoded: Optional[str]) -> str:
    """Expand an encoded string of sequential and/or nested expressions.

    ``N[S]`` repeats ``S`` ``N`` times; a missing ``N`` means 1 and the
    multiplier only covers the group right after it::

        decode("3[ab]4[c]")  -> "abababcccc"
        decode("2[a][bc]")   -> "aabc"
        decode("3[[c]2[d]]") -> "cddcddcdd"

    Malformed input never raises; the result is a best-effort partial
    expansion.
    """

    if not encoded:
        return ""

    tokens = tokenize(encoded)
    if not tokens:
        return ""

    return "".join(reduce_tokens(tokens))


@dataclass
class Decoding:
    encoded: str
    decoded: str
    tokens: List[Token]
    events: List[Round]
    stats: dict


@dataclass(frozen=True)
class Decoder:
    """Configurable decode runner that keeps the round-by-round record."""

    max_rounds: Optional[int] = None
    event_hooks: List[Callable[[Round], None]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.max_rounds is not None and self.max_rounds <= 0:
            raise ValueError("Decoder max_rounds must be positive when provided")

    def run(self, encoded: Optional[str]) -> Decoding:
        text = encoded or ""
        loop = ReductionLoop(event_hooks=list(self.event_hooks), max_rounds=self.max_rounds)
        loop.load(tokenize(text))
        loop.run_until_idle()

        return Decoding(
            encoded=text,
            decoded="".join(loop.tokens),
            tokens=list(loop.tokens),
            events=list(loop.events),
            stats=loop.stats(),
        )
