"""Send a sample research request to a running instance and print the result.

Usage:
    python scripts/request_analysis.py --base-url http://localhost:8000 \
        --topic "Inflation trends" --data "CPI data" --timeframe "last 5 years" \
        --source BLS --source Census
"""

from __future__ import annotations

import argparse
import json
import sys

import httpx


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--base-url", default="http://localhost:8000")
    parser.add_argument("--topic", default="Inflation trends")
    parser.add_argument("--data", default="CPI data")
    parser.add_argument("--timeframe", default="last 5 years")
    parser.add_argument("--source", action="append", default=[], dest="sources")
    parser.add_argument("--deadline", default=None)
    parser.add_argument("--timeout", type=float, default=120.0)
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    body = {
        "storyTopic": args.topic,
        "dataNeeded": args.data,
        "timeframe": args.timeframe,
        "sources": args.sources,
    }
    if args.deadline:
        body["deadline"] = args.deadline

    url = f"{args.base_url.rstrip('/')}/api/generate-analysis"
    resp = httpx.post(url, json=body, timeout=args.timeout)
    payload = resp.json()

    if resp.status_code != 200:
        print(f"HTTP {resp.status_code}: {payload.get('error')}", file=sys.stderr)
        return 1

    print(json.dumps(payload["metadata"], indent=2))
    print()
    print(payload["analysis"])
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
