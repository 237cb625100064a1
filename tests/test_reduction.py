import pytest

from expander.reduction import (
    Expression,
    ReductionLoop,
    find_expression,
    is_fully_expanded,
    reduce_once,
    reduce_tokens,
)
from expander.tokens import tokenize


def test_find_expression_with_multiplier():
    expression = find_expression(tokenize("3[ab]4[c]"))

    assert expression == Expression(start=0, left=1, right=3, multiplier=3, inner="ab")
    assert expression.expanded == "ababab"
    assert expression.span == (0, 3)


def test_find_expression_picks_innermost_group_first():
    expression = find_expression(tokenize("3[[c]2[d]]"))

    assert expression.left == 2
    assert expression.right == 4
    # The "[" before the inner group is not a multiplier.
    assert expression.start == 2
    assert expression.multiplier == 1
    assert expression.inner == "c"


def test_find_expression_empty_and_zero_groups():
    empty = find_expression(tokenize("2[]"))
    assert empty.inner == ""
    assert empty.expanded == ""

    zero = find_expression(tokenize("0[a]"))
    assert zero.multiplier == 0
    assert zero.expanded == ""


def test_find_expression_without_matching_bracket():
    assert find_expression(["abc"]) is None
    assert find_expression(tokenize("]a[b")) is None
    assert find_expression(tokenize("[a")) is None


def test_reduce_once_splices_and_merges():
    tokens, expression = reduce_once(tokenize("3[[c]2[d]]"))

    assert expression is not None
    assert tokens == ["3", "[", "c", "2", "[", "d", "]", "]"]

    tokens, _ = reduce_once(tokens)
    assert tokens == ["3", "[", "cdd", "]"]


def test_reduce_once_is_noop_on_fully_expanded_sequence():
    tokens = ["ab", "cd"]

    reduced, expression = reduce_once(tokens)

    assert expression is None
    assert reduced == tokens
    assert is_fully_expanded(reduced)
    assert is_fully_expanded([])


def test_loop_runs_to_fixed_point_and_records_rounds():
    loop = ReductionLoop()
    loop.load(tokenize("2[a][bc]"))

    events = loop.run_until_idle()

    assert [ev.expression.expanded for ev in events] == ["aa", "bc"]
    assert loop.tokens == ["aabc"]
    assert loop.stats() == {
        "rounds": 2,
        "idle": True,
        "stalled": False,
        "budget_exhausted": False,
        "remaining_tokens": 1,
    }


def test_loop_honors_round_budget():
    loop = ReductionLoop(max_rounds=1)
    loop.load(tokenize("3[[c]2[d]]"))

    events = loop.run_until_idle()

    assert len(events) == 1
    assert loop.exhausted_budget
    assert not loop.idle

    # Lifting the budget finishes the remaining work.
    loop.run_until_idle(max_rounds=10)
    assert loop.tokens == ["cddcddcdd"]
    assert not loop.exhausted_budget


def test_loop_stalls_on_unmatched_right_bracket():
    tokens = tokenize("]a[b")
    loop = ReductionLoop()
    loop.load(tokens)

    events = loop.run_until_idle()

    assert events == []
    assert loop.stalled
    assert loop.tokens == tokens
    assert loop.stats()["idle"] is False


def test_loop_notifies_event_hooks():
    seen = []
    loop = ReductionLoop(event_hooks=[seen.append])
    loop.load(tokenize("3[ab]4[c]"))
    loop.run_until_idle()

    assert [ev.index for ev in seen] == [0, 1]
    assert seen[-1].after == ("abababcccc",)


def test_loop_load_resets_state():
    loop = ReductionLoop()
    loop.load(tokenize("2[a]"))
    loop.run_until_idle()

    loop.load(tokenize("x"))

    assert loop.events == []
    assert loop.tokens == ["x"]


def test_loop_rejects_non_positive_budget():
    with pytest.raises(ValueError):
        ReductionLoop(max_rounds=0)

    loop = ReductionLoop()
    loop.load(["a"])
    with pytest.raises(ValueError):
        loop.run_until_idle(max_rounds=-1)


def test_reduce_tokens_drops_zero_multiplier_output():
    assert reduce_tokens(tokenize("0[a]b")) == ["b"]
    assert reduce_tokens(tokenize("2[0[a]]")) == []
