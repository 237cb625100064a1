from expander.classify import is_digits_only, is_literal, token_kind  # noqa: F401
from expander.decoder import Decoder, Decoding, decode  # noqa: F401
from expander.reduction import (  # noqa: F401
    Expression,
    ReductionLoop,
    Round,
    find_expression,
    is_fully_expanded,
    reduce_once,
    reduce_tokens,
)
from expander.segments import inner_string, multiplier, sequential_expressions  # noqa: F401
from expander.tokens import Token, merge_literals, tokenize  # noqa: F401
from expander.trace import JSONLTracer, dump_events  # noqa: F401
