from __future__ import annotations

import io
import json
from typing import Iterable, List

from expander.reduction import Round


class JSONLTracer:
    """Simple tracer that writes JSONL round records to a file-like sink."""

    def __init__(self, sink: io.TextIOBase):
        self.sink = sink

    def __call__(self, event: Round) -> None:
        self.sink.write(json.dumps(event.to_record()))
        self.sink.write("\n")
        self.sink.flush()


def dump_events(events: Iterable[Round]) -> List[dict]:
    """Convert a round stream to JSON-serializable dicts."""

    return [ev.to_record() for ev in events]
