# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpcheck CLI."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from ..errors import CheckError, ErrorCategory, error_category_to_reason
from ..log import setup_logging
from ..models.result import CheckResult
from ..runtime import execute
from ..utils.context import CheckContext
from ..validation import validate

EXIT_OK = 0
EXIT_CHECK_FAILED = 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="httpcheck", description="Validate and run HTTP health-check probes")
    parser.add_argument("--log-level", default=None, help="Logging level (default: $HTTPCHECK_LOG_LEVEL or WARNING)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    validate_parser = subparsers.add_parser("validate", help="Check a probe configuration without sending a request")
    validate_parser.add_argument("config", help="Probe configuration as inline JSON, or '-' to read stdin")

    run_parser = subparsers.add_parser("run", help="Send the probe request and match the response")
    run_parser.add_argument("config", help="Probe configuration as inline JSON, or '-' to read stdin")
    run_parser.add_argument("--timeout", type=float, default=None, help="Abandon the check after this many seconds")
    run_parser.add_argument(
        "--json",
        action="store_true",
        help="Output JSON instead of a one-line summary",
    )
    return parser


def _read_config(raw: str) -> str:
    if raw == "-":
        return sys.stdin.read()
    return raw


def _print_json(data: dict[str, Any]) -> None:
    json.dump(data, sys.stdout, indent=2, sort_keys=True)
    sys.stdout.write("\n")


def _pretty_print(result: CheckResult) -> None:
    if result.ok:
        print(f"[httpcheck] OK ({result.elapsed:.3f}s)")
        return
    kind = result.kind.value if result.kind is not None else "Error"
    print(f"[httpcheck] FAIL {kind}: {result.message}")
    if result.category is not None:
        print(f"Reason: {error_category_to_reason(ErrorCategory(result.category))}")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    document = _read_config(args.config)

    if args.command == "validate":
        try:
            validate(document)
        except CheckError as exc:
            print(f"[httpcheck] invalid {exc.kind.value}: {exc.message}", file=sys.stderr)
            return EXIT_CHECK_FAILED
        print("[httpcheck] configuration OK")
        return EXIT_OK

    ctx = CheckContext.with_timeout(args.timeout) if args.timeout is not None else CheckContext()
    result = execute(document, ctx)
    if args.json:
        _print_json(result.to_dict())
    else:
        _pretty_print(result)
    return EXIT_OK if result.ok else EXIT_CHECK_FAILED


if __name__ == "__main__":
    raise SystemExit(main())
