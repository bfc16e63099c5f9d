# lunarscope/__main__.py
# CLI:
#   python -m lunarscope list
#   python -m lunarscope run feature-detection request.json   (use '-' for stdin)
#   python -m lunarscope serve --port 8000

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import List, Optional

from lunarscope.analyses import ANALYSES
from lunarscope.errors import InputValidationError, LunarScopeError, format_error_response
from lunarscope.flows import run_analysis
from lunarscope.settings import setup_logging


def _read_request(source: str) -> object:
    try:
        raw = sys.stdin.read() if source == "-" else Path(source).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise InputValidationError(
            f"Cannot read request {source}: {e}",
            issues=[{"field": "<root>", "reason": "request file not readable as UTF-8 text"}],
        ) from None
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise InputValidationError(
            f"Request is not valid JSON: {e}",
            issues=[{"field": "<root>", "reason": "not valid JSON"}],
        ) from None


def _cmd_run(args: argparse.Namespace) -> int:
    try:
        payload = _read_request(args.request)
        result = asyncio.run(run_analysis(args.kind, payload))
    except LunarScopeError as e:
        print(json.dumps(format_error_response(e), ensure_ascii=False), file=sys.stderr)
        return 2 if isinstance(e, InputValidationError) else 1

    print(json.dumps(result.model_dump(by_alias=True, mode="json"), ensure_ascii=False, indent=args.indent))
    return 0


def _cmd_list(args: argparse.Namespace) -> int:
    for a in ANALYSES.values():
        print(f"{a.kind:<22} {a.description}")
    return 0


def _cmd_serve(args: argparse.Namespace) -> int:
    from lunarscope.api import serve

    serve(host=args.host, port=args.port)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="lunarscope", description="LLM-assisted lunar surface analysis.")
    sub = parser.add_subparsers(dest="command", required=True)

    p_run = sub.add_parser("run", help="Run one analysis on a JSON request record")
    p_run.add_argument("kind", choices=list(ANALYSES), help="Analysis kind")
    p_run.add_argument("request", help="Path to the JSON request, or '-' for stdin")
    p_run.add_argument("--indent", type=int, default=2)
    p_run.set_defaults(func=_cmd_run)

    p_list = sub.add_parser("list", help="List the available analyses")
    p_list.set_defaults(func=_cmd_list)

    p_serve = sub.add_parser("serve", help="Start the HTTP API")
    p_serve.add_argument("--host", default="0.0.0.0")
    p_serve.add_argument("--port", type=int, default=0, help="Defaults to $PORT or 8000")
    p_serve.set_defaults(func=_cmd_serve)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging()
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
