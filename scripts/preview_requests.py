#!/usr/bin/env python3
"""
Preview: compiled batchUpdate requests for rich content

Compiles a Quill Delta (JSON) or an HTML file and prints the requests that
would be sent, without calling the Google Docs API.
Run with: uv run python scripts/preview_requests.py content.json
          uv run python scripts/preview_requests.py --html content.html

Paste the output into the API Explorer's documents.batchUpdate body
({"requests": [...]}) against an empty document to check the result.
"""

import argparse
import json
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.errors import ContentError  # noqa: E402
from gdocs.batch_compiler import to_operations  # noqa: E402
from gdocs.delta_compiler import compile_delta, parse_delta_json  # noqa: E402
from gdocs.html_extractor import compile_from_html  # noqa: E402


def print_requests(name: str, requests: list):
    """Print requests in a format suitable for API testing."""
    print(f"\n{'=' * 60}")
    print(f"SOURCE: {name}")
    print(f"{'=' * 60}")
    print(f"Total requests: {len(requests)}")
    for i, req in enumerate(requests):
        print(f"\n[{i}] {list(req.keys())[0]}:")
        print(json.dumps(req, indent=2, ensure_ascii=False))


def main():
    parser = argparse.ArgumentParser(description="Print the batchUpdate requests compiled from rich content.")
    parser.add_argument("path", help="Delta JSON file (or HTML file with --html)")
    parser.add_argument("--html", action="store_true", help="treat the file as HTML")
    args = parser.parse_args()

    with open(args.path, encoding="utf-8") as f:
        source = f.read()

    if args.html:
        plan = compile_from_html(source)
    else:
        try:
            plan = compile_delta(parse_delta_json(source))
        except ContentError as e:
            print(f"Cannot compile Delta: {e}", file=sys.stderr)
            return 1

    print(f"Text ({len(plan.full_text)} chars): {plan.full_text!r}")
    print_requests(args.path, to_operations(plan))
    return 0


if __name__ == "__main__":
    sys.exit(main())
