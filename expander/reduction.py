from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from expander.classify import LEFT, RIGHT, is_digits_only, is_literal, token_kind
from expander.tokens import Token, merge_literals


@dataclass(frozen=True)
class Expression:
    """Innermost complete group located in a token sequence.

    ``start`` is the index of the multiplier token when one precedes the
    left bracket, otherwise it equals ``left``. The span ``start..right`` is
    inclusive and is what a reduction round replaces.
    """

    start: int
    left: int
    right: int
    multiplier: int
    inner: str

    @property
    def expanded(self) -> str:
        return self.inner * self.multiplier

    @property
    def span(self) -> Tuple[int, int]:
        return self.start, self.right


@dataclass
class Round:
    index: int
    expression: Expression
    before: Tuple[Token, ...]
    after: Tuple[Token, ...]

    def to_record(self) -> Dict[str, object]:
        """JSON-ready round representation for tracing."""

        return {
            "round": self.index,
            "start": self.expression.start,
            "left": self.expression.left,
            "right": self.expression.right,
            "multiplier": self.expression.multiplier,
            "inner": self.expression.inner,
            "expanded": self.expression.expanded,
            "before": list(self.before),
            "before_kinds": [token_kind(token) for token in self.before],
            "after": list(self.after),
        }


def is_fully_expanded(tokens: Iterable[Token]) -> bool:
    return all(is_literal(token) for token in tokens)


def _parse_multiplier(token: Token) -> int:
    try:
        return int(token, 10)
    except ValueError:
        return 1


def find_expression(tokens: Sequence[Token]) -> Optional[Expression]:
    """Locate the group closed by the first right bracket.

    The first ``]`` always closes the most deeply nested open group, so no
    explicit stack is needed. Returns ``None`` when there is no ``]`` or when
    it has no ``[`` to its left.
    """

    right = next((idx for idx, token in enumerate(tokens) if token == RIGHT), None)
    if right is None:
        return None

    left = None
    for idx in range(right - 1, -1, -1):
        if tokens[idx] == LEFT:
            left = idx
            break
    if left is None:
        return None

    start = left
    multiplier = 1
    if left > 0 and is_digits_only(tokens[left - 1]):
        start = left - 1
        multiplier = _parse_multiplier(tokens[start])

    candidate = tokens[right - 1]
    inner = candidate if is_literal(candidate) else ""

    return Expression(start=start, left=left, right=right, multiplier=multiplier, inner=inner)


def reduce_once(tokens: Sequence[Token]) -> Tuple[List[Token], Optional[Expression]]:
    """Expand one group in place and re-merge literal neighbours.

    A fully expanded sequence, or one without a reducible group, comes back
    unchanged alongside ``None``.
    """

    if is_fully_expanded(tokens):
        return list(tokens), None

    expression = find_expression(tokens)
    if expression is None:
        return list(tokens), None

    spliced = list(tokens[: expression.start])
    spliced.append(expression.expanded)
    spliced.extend(tokens[expression.right + 1 :])
    return merge_literals(spliced), expression


class ReductionLoop:
    """Stepping engine that reduces one token sequence to its literal form."""

    def __init__(
        self,
        event_hooks: Optional[List[Callable[[Round], None]]] = None,
        max_rounds: Optional[int] = None,
    ):
        if max_rounds is not None and max_rounds <= 0:
            raise ValueError("max_rounds must be positive when provided")

        self.tokens: List[Token] = []
        self.events: List[Round] = []
        self.event_hooks: List[Callable[[Round], None]] = event_hooks or []
        self.max_rounds = max_rounds
        self.stalled = False
        self.exhausted_budget = False

    def _reset_state(self) -> None:
        self.events.clear()
        self.stalled = False
        self.exhausted_budget = False

    def load(self, tokens: Iterable[Token]) -> int:
        self.tokens = list(tokens)
        self._reset_state()
        return len(self.tokens)

    @property
    def idle(self) -> bool:
        return self.stalled or is_fully_expanded(self.tokens)

    def step(self) -> Optional[Round]:
        if is_fully_expanded(self.tokens):
            return None

        reduced, expression = reduce_once(self.tokens)
        if expression is None:
            # Leftover brackets or digits that no group can close.
            self.stalled = True
            return None

        event = Round(
            index=len(self.events),
            expression=expression,
            before=tuple(self.tokens),
            after=tuple(reduced),
        )
        self.tokens = reduced
        self.events.append(event)
        for hook in self.event_hooks:
            hook(event)
        return event

    def run_until_idle(self, max_rounds: Optional[int] = None) -> List[Round]:
        """Reduce until fully expanded, stalled, or the round budget is hit."""

        limit = max_rounds if max_rounds is not None else self.max_rounds
        if limit is not None and limit <= 0:
            raise ValueError("max_rounds must be positive when provided")

        emitted: List[Round] = []
        self.exhausted_budget = False
        while not self.idle:
            if limit is not None and len(emitted) >= limit:
                self.exhausted_budget = True
                break
            ev = self.step()
            if ev is None:
                break
            emitted.append(ev)

        return emitted

    def stats(self) -> Dict[str, object]:
        """Summaries of loop activity and remaining work."""

        return {
            "rounds": len(self.events),
            "idle": is_fully_expanded(self.tokens),
            "stalled": self.stalled,
            "budget_exhausted": self.exhausted_budget,
            "remaining_tokens": len(self.tokens),
        }


def reduce_tokens(tokens: Iterable[Token], max_rounds: Optional[int] = None) -> List[Token]:
    loop = ReductionLoop(max_rounds=max_rounds)
    loop.load(tokens)
    loop.run_until_idle()
    return list(loop.tokens)
