"""Console entrypoint for hunkwise.

Thin file I/O around the engine: apply a patch file to a file, diff two
files, dispatch a single operation with JSON arguments, and inspect the
resolved configuration.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from hunkwise import __version__
from hunkwise.config import DiffStrategy, LogLevel, Settings, load_settings
from hunkwise.engine import apply_patch, compute_diff
from hunkwise.logging import LOG_FORMAT, LOGGER_NAME, _to_logging_level, configure_file_logger
from hunkwise.paths import default_config_path
from hunkwise.tools.router import ToolRouter, tool_specs

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hunkwise",
        description="Parse, apply and generate unified diffs",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
        help="Show version and exit.",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging on stderr.")
    parser.add_argument(
        "--log-level",
        choices=[e.value for e in LogLevel],
        dest="log_level",
        help="Log level override",
    )
    parser.add_argument("--log-file", dest="log_file", help="Send hunkwise logs to this file instead of stderr")
    parser.add_argument("--config-path", dest="config_path", help="Path to config.toml")
    parser.add_argument("--context-lines", dest="context_lines", type=int, help="Context lines around changes")
    parser.add_argument("--lookahead", type=int, help="Greedy resync lookahead window")
    parser.add_argument("--strategy", choices=[e.value for e in DiffStrategy], help="Diff alignment strategy")
    parser.add_argument(
        "--no-fuzzy-whitespace",
        action="store_true",
        dest="no_fuzzy_whitespace",
        help="Require exact context matches when applying.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    apply_parser = subparsers.add_parser("apply", help="Apply a unified diff to a file")
    apply_parser.add_argument("target", help="File to patch")
    apply_parser.add_argument("patch", help="Unified diff file ('-' reads stdin)")
    apply_parser.add_argument("--in-place", action="store_true", help="Write the result back to the target")

    diff_parser = subparsers.add_parser("diff", help="Print a unified diff between two files")
    diff_parser.add_argument("old", help="Original file")
    diff_parser.add_argument("new", help="Updated file")
    diff_parser.add_argument("--label", help="Path shown in the diff headers (defaults to the new file name)")

    tool_parser = subparsers.add_parser("tool", help="Invoke a single operation")
    tool_parser.add_argument("name", choices=[spec["function"]["name"] for spec in tool_specs()], help="Operation")
    tool_parser.add_argument("--json", dest="json_payload", help="JSON payload with operation arguments")
    tool_parser.add_argument("--arg", action="append", default=[], help="key=value pairs for operation args")

    config_parser = subparsers.add_parser("config", help="Config helpers")
    config_sub = config_parser.add_subparsers(dest="config_cmd", required=True)
    config_sub.add_parser("path", help="Print config path")
    config_sub.add_parser("print", help="Print resolved settings")

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    overrides = _collect_overrides(args)
    settings = load_settings(cli_overrides=overrides, config_path=args.config_path)

    _configure_base_logging(debug_enabled=args.debug, hunkwise_level=settings.log_level)
    if args.log_file:
        configure_file_logger(args.log_file, log_level=settings.log_level)

    if args.command == "apply":
        return _run_apply(settings, args)
    if args.command == "diff":
        return _run_diff(settings, args)
    if args.command == "tool":
        return _run_tool(settings, args)
    if args.command == "config":
        return _run_config(settings, args)

    parser.error(f"unknown command {args.command}")
    return 1


def _run_apply(settings: Settings, args: argparse.Namespace) -> int:
    target = Path(args.target)
    try:
        original = target.read_text(encoding="utf-8")
        diff_text = sys.stdin.read() if args.patch == "-" else Path(args.patch).read_text(encoding="utf-8")
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    result = apply_patch(original, diff_text, settings=settings)
    if not result.success:
        print(f"error: {result.error}", file=sys.stderr)
        return 1

    if args.in_place:
        target.write_text(result.content, encoding="utf-8")
        logger.info("wrote %s (%d hunks)", target, result.hunks_applied)
    else:
        sys.stdout.write(result.content)
    return 0


def _run_diff(settings: Settings, args: argparse.Namespace) -> int:
    old_path = Path(args.old)
    new_path = Path(args.new)
    try:
        old_text = old_path.read_text(encoding="utf-8")
        new_text = new_path.read_text(encoding="utf-8")
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    label = args.label or new_path.name
    print(compute_diff(old_text, new_text, label, settings=settings))
    return 0


def _run_tool(settings: Settings, args: argparse.Namespace) -> int:
    router = ToolRouter(settings, logger=logging.getLogger(f"{LOGGER_NAME}.tools"))

    payload: dict[str, Any] = {}
    if args.json_payload:
        payload = json.loads(args.json_payload)
    for pair in args.arg:
        if "=" not in pair:
            raise SystemExit("--arg expects key=value")
        key, value = pair.split("=", 1)
        payload[key] = value

    try:
        result = router.dispatch(args.name, **payload)
    except Exception as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print(json.dumps(result, indent=2))
    return 0


def _run_config(settings: Settings, args: argparse.Namespace) -> int:
    if args.config_cmd == "path":
        print(Path(args.config_path) if args.config_path else default_config_path())
        return 0
    if args.config_cmd == "print":
        print(settings.model_dump_json(indent=2))
        return 0
    return 1


def _collect_overrides(args: argparse.Namespace) -> dict[str, Any]:
    default_log_level = LogLevel.DEBUG.value if args.debug else None
    return {
        "context_lines": args.context_lines,
        "lookahead": args.lookahead,
        "strategy": args.strategy,
        "fuzzy_whitespace": False if args.no_fuzzy_whitespace else None,
        "log_level": args.log_level or default_log_level,
    }


def _configure_base_logging(*, debug_enabled: bool, hunkwise_level: LogLevel | str) -> None:
    root_level = logging.INFO if debug_enabled else logging.WARNING

    logging.basicConfig(
        level=root_level,
        stream=sys.__stderr__,
        format=LOG_FORMAT,
        force=True,
    )

    logging.getLogger(LOGGER_NAME).setLevel(_to_logging_level(hunkwise_level))


if __name__ == "__main__":
    sys.exit(main())
