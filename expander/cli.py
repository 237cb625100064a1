from __future__ import annotations

import argparse
import json
import sys
from dataclasses import replace
from typing import Iterable, List

from expander.decoder import Decoder, Decoding
from expander.segments import sequential_expressions
from expander.trace import JSONLTracer


def _read_inputs(values: List[str]) -> List[str]:
    """Collect encoded strings from arguments, reading stdin for ``-``.

    With no arguments at all stdin is read, one encoded string per line.
    """

    if not values:
        values = ["-"]

    inputs: List[str] = []
    for value in values:
        if value == "-":
            inputs.extend(sys.stdin.read().splitlines())
        else:
            inputs.append(value)
    return inputs


def _add_tracer(decoder: Decoder, destination: str):
    sink = open(destination, "w", encoding="utf-8")
    decoder.event_hooks.append(JSONLTracer(sink))
    return sink


def _summarize(result: Decoding) -> dict:
    return {
        "encoded": result.encoded,
        "decoded": result.decoded,
        **result.stats,
    }


def run_cli(argv: Iterable[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Expand run-length encoded N[S] strings.")
    parser.add_argument(
        "encoded",
        nargs="*",
        help="Encoded strings to expand; '-' or no argument reads one per line from stdin",
    )
    parser.add_argument("--trace-jsonl", dest="trace_jsonl", help="Write reduction rounds to a JSONL file")
    parser.add_argument(
        "--max-rounds",
        dest="max_rounds",
        type=int,
        help="Stop after this many reduction rounds per input",
    )
    parser.add_argument(
        "--json",
        dest="as_json",
        action="store_true",
        help="Print a JSON summary per input instead of the decoded text",
    )
    parser.add_argument(
        "--segments",
        action="store_true",
        help="Print the top-level sequential expressions instead of decoding",
    )

    args = parser.parse_args(list(argv) if argv is not None else None)

    sink = None

    try:
        inputs = _read_inputs(args.encoded)

        if args.segments:
            for encoded in inputs:
                print(json.dumps(sequential_expressions(encoded)))
            return 0

        decoder = Decoder()
        if args.max_rounds is not None:
            decoder = replace(decoder, max_rounds=args.max_rounds)
        sink = _add_tracer(decoder, args.trace_jsonl) if args.trace_jsonl else None

        results = [decoder.run(encoded) for encoded in inputs]
        if args.as_json:
            print(json.dumps([_summarize(result) for result in results], indent=2))
        else:
            for result in results:
                print(result.decoded)
        return 0
    except Exception as exc:  # pragma: no cover - defensive shell entry
        print(f"expander: {exc}", file=sys.stderr)
        return 1
    finally:
        if sink is not None:
            sink.close()


def main() -> int:  # pragma: no cover - thin wrapper
    return run_cli()


if __name__ == "__main__":  # pragma: no cover - CLI entrypoint
    sys.exit(main())
